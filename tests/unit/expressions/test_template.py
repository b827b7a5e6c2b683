"""Tests for template splitting."""

import pytest

from ruleexpr.exceptions import ParseError
from ruleexpr.expressions.template import TemplatePart, split_template


class TestSplitTemplate:
    """Tests for split_template()."""

    def test_plain_text(self) -> None:
        assert split_template("hello", "#{", "}") == [TemplatePart("hello", False, 0)]

    def test_blocks_and_literals(self) -> None:
        parts = split_template("a#{x}b#{y}", "#{", "}")

        assert parts == [
            TemplatePart("a", False, 0),
            TemplatePart("x", True, 3),
            TemplatePart("b", False, 5),
            TemplatePart("y", True, 8),
        ]

    def test_suffix_inside_string_literal(self) -> None:
        parts = split_template("#{x == '}'}", "#{", "}")
        assert parts == [TemplatePart("x == '}'", True, 2)]

    def test_multi_character_delimiters(self) -> None:
        parts = split_template("[[ a ]] and [[ b ]]", "[[", "]]")
        assert [p.text for p in parts if p.is_expression] == [" a ", " b "]

    def test_unterminated_block(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            split_template("ok #{x", "#{", "}")

        assert exc_info.value.position == 3

    def test_empty_block(self) -> None:
        with pytest.raises(ParseError, match="Empty expression block"):
            split_template("#{  }", "#{", "}")

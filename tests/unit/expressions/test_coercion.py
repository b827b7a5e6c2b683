"""Tests for BooleanCoercer."""

import pytest

from ruleexpr.exceptions import CoercionError
from ruleexpr.expressions import BooleanCoercer


@pytest.fixture
def coercer() -> BooleanCoercer:
    """Create a strict BooleanCoercer."""
    return BooleanCoercer()


class TestStrictCoercion:
    """Tests for the default strict mode."""

    def test_booleans_pass_through(self, coercer: BooleanCoercer) -> None:
        assert coercer.coerce(True) is True
        assert coercer.coerce(False) is False

    @pytest.mark.parametrize("value", ["true", "TRUE", " yes ", "on", "1"])
    def test_true_strings(self, coercer: BooleanCoercer, value: str) -> None:
        assert coercer.coerce(value) is True

    @pytest.mark.parametrize("value", ["false", "False", "no", "OFF", "0"])
    def test_false_strings(self, coercer: BooleanCoercer, value: str) -> None:
        assert coercer.coerce(value) is False

    @pytest.mark.parametrize("value", ["", "maybe", "2"])
    def test_other_strings_rejected(self, coercer: BooleanCoercer, value: str) -> None:
        with pytest.raises(CoercionError) as exc_info:
            coercer.coerce(value, expression="flag")

        assert exc_info.value.value == value
        assert exc_info.value.expression == "flag"

    def test_none_rejected(self, coercer: BooleanCoercer) -> None:
        with pytest.raises(CoercionError):
            coercer.coerce(None)

    @pytest.mark.parametrize("value", [1, 0, 2.5, [True], {"a": 1}])
    def test_other_types_rejected(self, coercer: BooleanCoercer, value: object) -> None:
        with pytest.raises(CoercionError):
            coercer.coerce(value)


class TestLenientCoercion:
    """Tests for non-strict mode."""

    def test_truthiness_for_other_types(self) -> None:
        coercer = BooleanCoercer(strict=False)

        assert coercer.coerce(1) is True
        assert coercer.coerce(0) is False
        assert coercer.coerce([]) is False

    def test_none_still_rejected(self) -> None:
        """None never means False, even in lenient mode."""
        with pytest.raises(CoercionError):
            BooleanCoercer(strict=False).coerce(None)

    def test_unknown_strings_still_rejected(self) -> None:
        with pytest.raises(CoercionError):
            BooleanCoercer(strict=False).coerce("maybe")


class TestCustomValues:
    """Tests for configurable boolean strings."""

    def test_custom_values(self) -> None:
        coercer = BooleanCoercer(true_values=["Y"], false_values=["N"])

        assert coercer.coerce("y") is True
        assert coercer.coerce("n") is False
        with pytest.raises(CoercionError):
            coercer.coerce("true")

    def test_overlapping_values_rejected(self) -> None:
        with pytest.raises(ValueError, match="both true and false"):
            BooleanCoercer(true_values=["x"], false_values=["X"])

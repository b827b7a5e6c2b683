"""Explicit variable references (#name) in expression text.

Every fact is reachable both as a bare name resolved against the root
mapping and as an explicit variable written #name. The expression grammar
has no variable marker of its own, so #name is rewritten to a lookup in a
reserved scope before parsing.
"""

import string
from collections.abc import Mapping
from typing import Any

from ruleexpr.exceptions import ParseError, UndefinedFactError

VARIABLE_SCOPE = "__facts__"

# Variables that resolve to the whole root mapping unless shadowed by a fact
ROOT_ALIASES: frozenset[str] = frozenset({"root", "this"})

_IDENTIFIER_START = frozenset(string.ascii_letters + "_")
_IDENTIFIER_CHARS = _IDENTIFIER_START | frozenset(string.digits)
_QUOTES = ("'", '"')


def rewrite_variable_references(expression: str) -> tuple[str, frozenset[str]]:
    """Rewrite #name markers into variable scope lookups.

    Markers inside string literals are left untouched.

    Args:
        expression: Expression text, possibly containing #name markers

    Returns:
        Tuple of (rewritten text, names referenced through markers)

    Raises:
        ParseError: If a '#' is not followed by an identifier
    """
    output: list[str] = []
    names: set[str] = set()
    quote: str | None = None
    i = 0
    length = len(expression)

    while i < length:
        char = expression[i]

        if quote is not None:
            output.append(char)
            if char == "\\" and i + 1 < length:
                output.append(expression[i + 1])
                i += 2
                continue
            if char == quote:
                quote = None
            i += 1
            continue

        if char in _QUOTES:
            quote = char
            output.append(char)
            i += 1
            continue

        if char == "#":
            end = i + 1
            if end >= length or expression[end] not in _IDENTIFIER_START:
                raise ParseError(
                    "Expected a variable name after '#'",
                    expression,
                    position=i,
                )
            while end < length and expression[end] in _IDENTIFIER_CHARS:
                end += 1
            name = expression[i + 1 : end]
            names.add(name)
            output.append(f"{VARIABLE_SCOPE}[{name!r}]")
            i = end
            continue

        output.append(char)
        i += 1

    return "".join(output), frozenset(names)


class VariableScope:
    """Per-evaluation lookup table behind #name references.

    Missing names raise UndefinedFactError directly so the failure carries
    the variable name instead of a generic undefined marker.
    """

    def __init__(
        self,
        variables: Mapping[str, Any],
        root: Mapping[str, Any],
        expression: str | None = None,
    ) -> None:
        self._variables = variables
        self._root = root
        self._expression = expression

    def __getitem__(self, name: str) -> Any:
        if name in self._variables:
            return self._variables[name]
        if name in ROOT_ALIASES:
            return self._root
        raise UndefinedFactError(
            f"Variable '#{name}' is not defined",
            expression=self._expression,
            name=name,
        )

    def __repr__(self) -> str:
        return f"VariableScope({sorted(self._variables)})"

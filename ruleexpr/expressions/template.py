"""Splitting of template text into literal runs and expression blocks."""

from dataclasses import dataclass

from ruleexpr.exceptions import ParseError

_OPENING = {"(": ")", "[": "]", "{": "}"}
_CLOSING = frozenset(_OPENING.values())


@dataclass(frozen=True)
class TemplatePart:
    """One piece of a template: literal text or an expression block."""

    text: str
    is_expression: bool
    position: int


def split_template(text: str, prefix: str, suffix: str) -> list[TemplatePart]:
    """Split template text into literal and expression parts.

    Brackets and string literals inside a block are skipped when looking
    for the closing suffix, so "#{ {'a': 1}['a'] == 1 }" is one block.

    Raises:
        ParseError: If a block is empty or never closed
    """
    parts: list[TemplatePart] = []
    start = 0

    while start < len(text):
        block_start = text.find(prefix, start)
        if block_start == -1:
            parts.append(TemplatePart(text[start:], False, start))
            break

        if block_start > start:
            parts.append(TemplatePart(text[start:block_start], False, start))

        body_start = block_start + len(prefix)
        body_end = _find_suffix(text, body_start, suffix)
        if body_end == -1:
            raise ParseError(
                f"No closing '{suffix}' for expression block",
                text,
                position=block_start,
            )

        body = text[body_start:body_end]
        if not body.strip():
            raise ParseError(
                "Empty expression block",
                text,
                position=block_start,
            )

        parts.append(TemplatePart(body, True, body_start))
        start = body_end + len(suffix)

    return parts


def _find_suffix(text: str, start: int, suffix: str) -> int:
    """Return the index of the suffix closing a block, or -1."""
    stack: list[str] = []
    quote: str | None = None
    i = start

    while i < len(text):
        char = text[i]

        if quote is not None:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = None
            i += 1
            continue

        if not stack and text.startswith(suffix, i):
            return i

        if char in ("'", '"'):
            quote = char
        elif char in _OPENING:
            stack.append(_OPENING[char])
        elif char in _CLOSING and stack and stack[-1] == char:
            stack.pop()
        i += 1

    return -1

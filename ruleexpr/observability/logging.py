"""Structured logging configuration using structlog.

A failed condition logs the fact collection it ran against, rendered as a
string such as "[Fact(name='password', value='hunter2')]". The redactor
therefore looks inside rendered snapshots as well as at event keys:

1. Event keys with a sensitive name are replaced wholesale
2. Fact entries with a sensitive name inside rendered snapshots, in both
   the Fact(name=..., value=...) and the {'name': value} form, keep their
   name and lose their value
3. Email, SSN and phone patterns are masked in every remaining string
"""

import re
import sys
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

if TYPE_CHECKING:
    from ruleexpr.config.settings import Settings

REDACTED = "[REDACTED]"

# Sensitive key and fact names (O(1) lookup)
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "passwd",
    "secret",
    "token",
    "api_key",
    "apikey",
    "auth",
    "authorization",
    "credential",
    "credentials",
    "email",
    "emails",
    "phone",
    "ssn",
    "credit_card",
    "card_number",
    "cvv",
    "pin",
    "private_key",
    "access_token",
    "refresh_token",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-\(\)]{9,}\d")
SSN_PATTERN = re.compile(r"\d{3}-\d{2}-\d{4}")

# Start of one entry in str(Facts) or str(dict); the value follows the match
SNAPSHOT_ENTRY_PATTERN = re.compile(
    r"Fact\(name=(?P<fact_quote>['\"])(?P<fact_name>.*?)(?P=fact_quote), value="
    r"|(?P<key_quote>['\"])(?P<key_name>[^'\"]*)(?P=key_quote): "
)

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


class PIIRedactor:
    """structlog processor masking sensitive values in log events."""

    def __init__(self, sensitive_keys: Iterable[str] = SENSITIVE_KEYS) -> None:
        self.sensitive_keys = frozenset(key.lower() for key in sensitive_keys)

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact PII from event dictionary."""
        return cast(
            EventDict,
            {key: self._redact_entry(key, value) for key, value in event_dict.items()},
        )

    def is_sensitive(self, name: Any) -> bool:
        return str(name).lower() in self.sensitive_keys

    def redact_text(self, text: str) -> str:
        """Mask sensitive snapshot entries and PII patterns in a string."""
        text = self._redact_snapshot_entries(text)
        text = EMAIL_PATTERN.sub("[EMAIL]", text)
        text = SSN_PATTERN.sub("[SSN]", text)
        return PHONE_PATTERN.sub("[PHONE]", text)

    def _redact_entry(self, key: Any, value: Any) -> Any:
        if self.is_sensitive(key):
            return REDACTED
        return self._redact_value(value)

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self.redact_text(value)
        if isinstance(value, Mapping):
            return {key: self._redact_entry(key, item) for key, item in value.items()}
        if isinstance(value, list | tuple):
            return [self._redact_value(item) for item in value]
        return value

    def _redact_snapshot_entries(self, text: str) -> str:
        pieces: list[str] = []
        position = 0
        while True:
            match = SNAPSHOT_ENTRY_PATTERN.search(text, position)
            if match is None:
                break
            name = match.group("fact_name")
            if name is None:
                name = match.group("key_name")
            pieces.append(text[position : match.end()])
            if self.is_sensitive(name):
                pieces.append(REDACTED)
                position = _end_of_value(text, match.end())
            else:
                position = match.end()
        pieces.append(text[position:])
        return "".join(pieces)


def _end_of_value(text: str, start: int) -> int:
    """Index where the repr() of a value starting at start ends.

    The value ends at the first top-level ',' or at the bracket closing the
    enclosing Fact(...), list or dict.
    """
    depth = 0
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
        elif char in ("'", '"'):
            quote = char
        elif char in "([{":
            depth += 1
        elif char in ")]}":
            if depth == 0:
                return i
            depth -= 1
        elif char == "," and depth == 0:
            return i
        i += 1
    return len(text)


def build_processors(format: str = "json", redact_pii: bool = True) -> list[Any]:
    """Processor chain shared by every ruleexpr logging setup."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if redact_pii:
        processors.append(PIIRedactor())
    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_pii: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format - "json" for production, "console" for development
        redact_pii: Whether to redact PII, including logged fact snapshots
    """
    structlog.configure(
        processors=build_processors(format, redact_pii),
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_settings(settings: "Settings") -> None:
    """Configure structured logging from the observability settings."""
    logging_config = settings.observability.logging
    setup_logging(
        level=logging_config.level,
        format=logging_config.format,
        redact_pii=logging_config.redact_pii,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))

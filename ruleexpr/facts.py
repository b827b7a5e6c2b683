"""Fact collections handed to conditions.

Facts are named values known to a rules engine at evaluation time. A Facts
instance keeps at most one fact per name, in insertion order.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Fact(BaseModel):
    """A named, typed value supplied to a condition."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Fact name, unique within a Facts collection")
    value: Any = Field(..., description="Fact value")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank fact names."""
        if not v or not v.strip():
            raise ValueError("Fact name must be a non-empty string")
        return v

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: Any) -> Any:
        """Reject missing values."""
        if v is None:
            raise ValueError("Fact value must not be None")
        return v

    def __str__(self) -> str:
        return f"Fact(name={self.name!r}, value={self.value!r})"


class Facts:
    """Ordered collection of facts keyed by name."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._facts: dict[str, Fact] = {}
        if initial:
            for name, value in initial.items():
                self.put(name, value)

    def put(self, name: str, value: Any) -> None:
        """Add a fact, replacing any existing fact with the same name.

        Raises:
            ValueError: If the name is blank or the value is None
        """
        self.add(Fact(name=name, value=value))

    def add(self, fact: Fact) -> None:
        """Add a fact object, replacing any existing fact with the same name."""
        self._facts[fact.name] = fact

    def remove(self, name: str) -> Fact | None:
        """Remove a fact by name, returning it if it was present."""
        return self._facts.pop(name, None)

    def get(self, name: str, default: Any = None) -> Any:
        """Get a fact value by name."""
        fact = self._facts.get(name)
        return fact.value if fact is not None else default

    def get_fact(self, name: str) -> Fact | None:
        """Get the fact object registered under a name."""
        return self._facts.get(name)

    def as_map(self) -> dict[str, Any]:
        """Return a snapshot of the facts as a plain name to value dict."""
        return {name: fact.value for name, fact in self._facts.items()}

    def clear(self) -> None:
        """Remove all facts."""
        self._facts.clear()

    def __iter__(self) -> Iterator[Fact]:
        return iter(list(self._facts.values()))

    def __len__(self) -> int:
        return len(self._facts)

    def __contains__(self, name: object) -> bool:
        return name in self._facts

    def __str__(self) -> str:
        return "[" + ", ".join(str(fact) for fact in self._facts.values()) + "]"

    def __repr__(self) -> str:
        return f"Facts({self.as_map()!r})"

"""Parse options and compiled expression types."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ParseOptions(BaseModel):
    """Non-standard parsing configuration for expression text.

    By default the whole text is a single expression. In template mode the
    text mixes literal runs with expression blocks wrapped in prefix/suffix
    delimiters, e.g. "#{age > 18}".
    """

    model_config = ConfigDict(frozen=True)

    template: bool = Field(default=False, description="Parse text as a template")
    prefix: str = Field(default="#{", description="Expression block opening delimiter")
    suffix: str = Field(default="}", description="Expression block closing delimiter")

    @model_validator(mode="after")
    def validate_delimiters(self) -> "ParseOptions":
        """Template delimiters must be non-empty."""
        if self.template and (not self.prefix or not self.suffix):
            raise ValueError("Template prefix and suffix must be non-empty")
        return self

    @classmethod
    def template_options(cls, prefix: str = "#{", suffix: str = "}") -> "ParseOptions":
        """Build template-mode options with the given delimiters."""
        return cls(template=True, prefix=prefix, suffix=suffix)


@dataclass(frozen=True)
class CompiledExpression:
    """Opaque, immutable parsed form of an expression.

    Produced once by an ExpressionEngine and reused for every evaluation.
    Engines subclass this to carry their own parsed representation.
    """

    source: str
    names: frozenset[str] = field(default_factory=frozenset)

"""Expression evaluation configuration models."""

from pydantic import BaseModel, Field, model_validator


class EvaluationConfig(BaseModel):
    """How expression results are turned into booleans."""

    strict_boolean: bool = Field(
        default=True,
        description="Only accept booleans and boolean strings as results",
    )
    true_values: list[str] = Field(
        default_factory=lambda: ["true", "on", "yes", "1"],
        description="Strings (case-insensitive) that coerce to True",
    )
    false_values: list[str] = Field(
        default_factory=lambda: ["false", "off", "no", "0"],
        description="Strings (case-insensitive) that coerce to False",
    )

    @model_validator(mode="after")
    def validate_disjoint_values(self) -> "EvaluationConfig":
        """A string cannot mean both True and False."""
        true_set = {v.strip().lower() for v in self.true_values}
        false_set = {v.strip().lower() for v in self.false_values}
        overlap = true_set & false_set
        if overlap:
            raise ValueError(f"true_values and false_values overlap: {sorted(overlap)}")
        return self

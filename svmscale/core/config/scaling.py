"""Scaling defaults: target interval and output formatting."""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class ScalingConfig(BaseSettings):
    """Default target interval and number formatting for scaled output.

    Attributes:
        lower: Lower bound of the target interval.
        upper: Upper bound of the target interval.
        value_precision: Fixed number of decimals for emitted values, or None
            for the shortest representation that round-trips exactly.
        range_file_header: Literal written as the first line of range files.
    """

    lower: float = Field(default=-1.0, description="Lower bound of the target interval")
    upper: float = Field(default=1.0, description="Upper bound of the target interval")
    value_precision: Optional[int] = Field(
        default=None,
        description="Decimals for emitted values (None keeps full precision)",
        ge=0,
        le=17,
    )
    range_file_header: str = Field(
        default="x",
        description="First line written to range files",
        min_length=1,
    )

    @model_validator(mode="after")
    def check_interval(self):
        """Rejects an empty or inverted target interval."""
        if not self.upper > self.lower:
            raise ValueError(
                f"upper bound ({self.upper}) must be greater than lower bound ({self.lower})"
            )
        return self

    class Config:
        """Pydantic configuration."""

        env_prefix = "SVMSCALE_"

"""
Pydantic schemas for configuration validation.

Defines the structure and validation rules for solve configuration files.
"""

import math
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ItemConfig(BaseModel):
    """A single knapsack item."""

    id: str = Field(description="Item label shown in tables and selections", min_length=1)
    weight: float = Field(description="Capacity consumed when selected", gt=0.0)
    value: float = Field(description="Objective contribution when selected", gt=0.0)

    @field_validator("weight", "value")
    @classmethod
    def check_finite(cls, v: float) -> float:
        """Reject infinities and NaN."""
        if not math.isfinite(v):
            raise ValueError(f"Must be a finite number, got {v}")
        return v


class ProblemConfig(BaseModel):
    """Knapsack instance and search settings."""

    capacity: float = Field(
        default=20, description="Knapsack capacity (any finite value)", allow_inf_nan=False
    )
    strategy: Literal["ones-first", "zeroes-first"] = Field(
        default="ones-first", description="Which branch child is explored first"
    )
    items: list[ItemConfig] = Field(default_factory=list, description="Items in input order")

    @field_validator("items")
    @classmethod
    def check_unique_ids(cls, v: list[ItemConfig]) -> list[ItemConfig]:
        """Ensure item ids are unique."""
        ids = [item.id for item in v]
        duplicates = sorted({item_id for item_id in ids if ids.count(item_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate item ids: {', '.join(duplicates)}")
        return v


class OutputConfig(BaseModel):
    """Where to write solve artifacts."""

    tree_json: Path | None = Field(default=None, description="Search tree projection (JSON)")
    items_csv: Path | None = Field(default=None, description="Ratio-ordered items (CSV)")
    summary_json: Path | None = Field(default=None, description="Search statistics (JSON)")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Log level of the knapsack_bnb logger"
    )
    log_file: Path | None = Field(default=None, description="Optional log file")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v


class SolveConfig(BaseModel):
    """Complete solve configuration."""

    problem: ProblemConfig = Field(default_factory=ProblemConfig, description="Problem instance")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output files")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    verify: bool = Field(
        default=False, description="Cross-check the optimum with the OR-Tools reference solver"
    )

    class Config:
        """Pydantic configuration."""

        extra = "forbid"  # Raise error on unknown fields
        validate_assignment = True  # Validate on field assignment

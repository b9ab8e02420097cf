"""
Configuration management and validation.

Provides Pydantic schemas and utilities for loading and validating
solve configurations.
"""

from knapsack_bnb.config.loader import (
    catalog_from_config,
    config_from_instance,
    config_to_dict,
    load_config,
    save_config,
    validate_config_file,
)
from knapsack_bnb.config.schemas import (
    ItemConfig,
    LoggingConfig,
    OutputConfig,
    ProblemConfig,
    SolveConfig,
)

__all__ = [
    "SolveConfig",
    "ProblemConfig",
    "ItemConfig",
    "OutputConfig",
    "LoggingConfig",
    "load_config",
    "validate_config_file",
    "config_to_dict",
    "save_config",
    "catalog_from_config",
    "config_from_instance",
]

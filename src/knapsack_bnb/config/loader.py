"""
Configuration loading and validation utilities.

Provides functions to load YAML configs and validate them against Pydantic schemas.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from knapsack_bnb.config.schemas import ItemConfig, ProblemConfig, SolveConfig
from knapsack_bnb.data.catalog import Item, ItemCatalog
from knapsack_bnb.data.generator import KnapsackInstance
from knapsack_bnb.utils.error_handler import ConfigurationError


def load_config(config_path: str | Path) -> SolveConfig:
    """
    Load and validate a solve configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated SolveConfig object

    Raises:
        ConfigurationError: If file not found, invalid YAML, or validation fails

    Example:
        >>> config = load_config("configs/solve_default.yaml")
        >>> print(f"Capacity: {config.problem.capacity}, strategy: {config.problem.strategy}")
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            suggestion="Check the path or create a config file (see configs/ for templates).",
        )

    try:
        with open(config_file) as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file: {config_path}",
            suggestion=f"Fix YAML syntax error: {e}",
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}",
            suggestion=f"Error: {e}",
        ) from e

    if config_dict is None:
        raise ConfigurationError(
            f"Empty configuration file: {config_path}",
            suggestion="Add configuration parameters to the YAML file.",
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping at the top level: {config_path}",
            suggestion="Start the file with keys such as 'problem:' and 'output:'.",
        )

    try:
        config = SolveConfig(**config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            msg = error["msg"]
            errors.append(f"  - {loc}: {msg}")

        error_msg = "\n".join(errors)
        raise ConfigurationError(
            f"Configuration validation failed for {config_path}:\n{error_msg}",
            suggestion="Fix the configuration errors listed above. "
            "See configs/solve_default.yaml for a valid example.",
        ) from e

    return config


def validate_config_file(config_path: str | Path) -> tuple[bool, str]:
    """
    Validate config file without raising exceptions.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        load_config(config_path)
        return True, f"✓ Configuration is valid: {config_path}"
    except ConfigurationError as e:
        return False, f"✗ {e.message}"


def config_to_dict(config: SolveConfig) -> dict[str, Any]:
    """
    Convert SolveConfig to a YAML-friendly dictionary.

    Args:
        config: SolveConfig instance

    Returns:
        Dictionary representation of config
    """
    return config.model_dump(mode="json")


def save_config(config: SolveConfig, output_path: str | Path) -> None:
    """
    Save SolveConfig to YAML file.

    Args:
        config: SolveConfig instance
        output_path: Path to save YAML file
    """
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config_to_dict(config)

    with open(output_file, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False, indent=2)


def catalog_from_config(problem: ProblemConfig) -> ItemCatalog:
    """Build the item catalog described by a problem section."""
    return ItemCatalog(Item(item.id, item.weight, item.value) for item in problem.items)


def config_from_instance(instance: KnapsackInstance, strategy: str = "ones-first") -> SolveConfig:
    """Wrap a generated instance into a SolveConfig ready to be saved."""
    problem = ProblemConfig(
        capacity=instance.capacity,
        strategy=strategy,
        items=[
            ItemConfig(id=item.id, weight=item.weight, value=item.value)
            for item in instance.catalog
        ],
    )
    return SolveConfig(problem=problem)

"""Logging helpers and the error hierarchy."""

from knapsack_bnb.utils.error_handler import (
    ConfigurationError,
    InvalidItemError,
    KnapsackBnBError,
    ReferenceSolverError,
    SearchInvariantError,
    ValidationError,
    handle_cli_errors,
)
from knapsack_bnb.utils.logger import (
    log_experiment_config,
    log_metrics,
    setup_logger,
)

__all__ = [
    "setup_logger",
    "log_experiment_config",
    "log_metrics",
    "KnapsackBnBError",
    "ConfigurationError",
    "ValidationError",
    "InvalidItemError",
    "SearchInvariantError",
    "ReferenceSolverError",
    "handle_cli_errors",
]

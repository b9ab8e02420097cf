"""
Logging configuration for solver runs.

Provides centralized logging setup with file handlers, console output,
and a uniform format for search traces and solve summaries.
"""

import logging
import sys
from pathlib import Path


def setup_logger(
    name: str = "knapsack_bnb",
    log_file: Path | None = None,
    level: int = logging.INFO,
    console_output: bool = True,
) -> logging.Logger:
    """
    Configure and return a logger with file and/or console handlers.

    Args:
        name: Logger name (typically "knapsack_bnb" so that module loggers inherit it)
        log_file: Path to log file (if None, only console logging)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: If True, also log to console (stdout)

    Returns:
        Configured logger instance

    Example:
        >>> from pathlib import Path
        >>> from knapsack_bnb.utils.logger import setup_logger
        >>> logger = setup_logger(log_file=Path("runs/solve.log"), level=logging.DEBUG)
        >>> logger.info("Search started")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def log_experiment_config(
    logger: logging.Logger, config: dict, title: str = "Solve Configuration"
) -> None:
    """
    Log a configuration mapping as an aligned block.

    Args:
        logger: Logger instance
        config: Configuration dictionary
        title: Title for the config block

    Example:
        >>> logger = setup_logger()
        >>> log_experiment_config(logger, {"capacity": 20, "strategy": "ones-first"})
    """
    logger.info("=" * 60)
    logger.info(f"{title:^60}")
    logger.info("=" * 60)

    for key, value in sorted(config.items()):
        logger.info(f"  {key:.<30} {value}")

    logger.info("=" * 60)


def log_metrics(
    logger: logging.Logger, metrics: dict, prefix: str = "", precision: int = 4
) -> None:
    """
    Log metrics on a single line.

    Args:
        logger: Logger instance
        metrics: Dictionary of metric name -> value
        prefix: Prefix string (e.g., "Search |")
        precision: Number of decimal places for float formatting
    """
    metric_strs = []
    for name, value in metrics.items():
        if isinstance(value, float):
            metric_strs.append(f"{name}: {value:.{precision}f}")
        else:
            metric_strs.append(f"{name}: {value}")

    message = " | ".join(metric_strs)
    if prefix:
        message = f"{prefix} {message}"

    logger.info(message)

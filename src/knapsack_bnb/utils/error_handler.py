"""
Error handling utilities for the knapsack branch-and-bound solver.

Provides the exception hierarchy shared by the library and the CLI, and a
decorator that turns those exceptions into readable command-line output.
"""

import functools
import sys
import traceback
from collections.abc import Callable
from typing import Any, TypeVar

import click

# Type variable for decorators
F = TypeVar("F", bound=Callable[..., Any])


# ============================================================================
# Custom Exception Hierarchy
# ============================================================================


class KnapsackBnBError(Exception):
    """Base exception for knapsack branch-and-bound errors."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        """
        Initialize error with message and optional suggestion.

        Args:
            message: Error description
            suggestion: Actionable suggestion for fixing the error
        """
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def format_error(self) -> str:
        """Format error message with suggestion."""
        parts = [f"Error: {self.message}"]
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return "\n".join(parts)


class ConfigurationError(KnapsackBnBError):
    """Error related to configuration files or parameters."""

    pass


class ValidationError(KnapsackBnBError):
    """Error related to input validation."""

    pass


class InvalidItemError(ValidationError):
    """An item whose weight or value makes its ratio undefined or meaningless."""

    pass


class SearchInvariantError(KnapsackBnBError):
    """The search engine reached a state its invariants rule out."""

    pass


class ReferenceSolverError(KnapsackBnBError):
    """The exact reference solver cannot handle the given instance."""

    pass


# ============================================================================
# Error Handlers
# ============================================================================


def handle_cli_errors(
    debug_flag_name: str = "debug",
) -> Callable[[F], F]:
    """
    Decorator for CLI commands to handle errors gracefully.

    Args:
        debug_flag_name: Name of the debug flag in the command signature

    Returns:
        Decorator function

    Example:
        >>> @click.command()
        >>> @click.option("--debug", is_flag=True)
        >>> @handle_cli_errors()
        >>> def solve(debug):
        ...     pass
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            debug_mode = kwargs.get(debug_flag_name, False)

            try:
                return func(*args, **kwargs)

            except KnapsackBnBError as e:
                click.secho(e.format_error(), fg="red", err=True)
                if debug_mode:
                    click.secho("\nFull traceback:", fg="yellow", err=True)
                    traceback.print_exc()
                sys.exit(1)

            except FileNotFoundError as e:
                msg = f"File not found: {e.filename}"
                suggestion = "Check that the path exists and is spelled correctly."
                click.secho(f"Error: {msg}", fg="red", err=True)
                click.secho(f"Suggestion: {suggestion}", fg="yellow", err=True)
                if debug_mode:
                    traceback.print_exc()
                sys.exit(1)

            except PermissionError as e:
                msg = f"Permission denied: {e.filename}"
                suggestion = "Check file permissions or run with appropriate privileges."
                click.secho(f"Error: {msg}", fg="red", err=True)
                click.secho(f"Suggestion: {suggestion}", fg="yellow", err=True)
                if debug_mode:
                    traceback.print_exc()
                sys.exit(1)

            except KeyboardInterrupt:
                click.secho("\n\nOperation cancelled by user.", fg="yellow", err=True)
                sys.exit(130)  # Standard exit code for SIGINT

            except Exception as e:
                if debug_mode:
                    click.secho("Unexpected error occurred:", fg="red", err=True)
                    traceback.print_exc()
                else:
                    error_type = type(e).__name__
                    click.secho(f"Unexpected error ({error_type}): {str(e)}", fg="red", err=True)
                    click.secho(
                        "\nTip: Run with --debug flag to see full traceback", fg="yellow", err=True
                    )
                sys.exit(1)

        return wrapper  # type: ignore

    return decorator


# ============================================================================
# Validation Utilities
# ============================================================================


def require_positive_int(value: int, name: str) -> int:
    """
    Validate that value is a positive integer.

    Args:
        value: Value to validate
        name: Parameter name for error messages

    Returns:
        Validated value

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(
            f"{name} must be positive, got: {value}",
            suggestion=f"Provide a positive integer for {name}.",
        )
    return value


def require_fraction(value: float, name: str) -> float:
    """
    Validate that value lies in (0, 1].

    Args:
        value: Value to validate
        name: Parameter name for error messages

    Returns:
        Validated value

    Raises:
        ValidationError: If value is outside (0, 1]
    """
    if not 0.0 < value <= 1.0:
        raise ValidationError(
            f"{name} must be in (0, 1], got: {value}",
            suggestion=f"Provide a fraction such as 0.5 for {name}.",
        )
    return value

"""
Unified CLI for knapsack-bnb.

Provides subcommands for solving instances, validating configs and
generating random instances.
"""

import logging
import sys

import click

from knapsack_bnb import __version__
from knapsack_bnb.config import (
    SolveConfig,
    catalog_from_config,
    config_from_instance,
    load_config,
    save_config,
    validate_config_file,
)
from knapsack_bnb.data import Item, ItemCatalog, KnapsackGenerator, item_label
from knapsack_bnb.eval import (
    export_items_to_csv,
    export_tree_to_json,
    print_solve_summary,
    save_summary_to_json,
    summarize_tree,
)
from knapsack_bnb.solvers import BranchAndBoundSolver, verify_optimum
from knapsack_bnb.tree import build_search_tree
from knapsack_bnb.utils import (
    ValidationError,
    handle_cli_errors,
    log_experiment_config,
    log_metrics,
    setup_logger,
)
from knapsack_bnb.utils.error_handler import require_fraction, require_positive_int

STRATEGIES = ["ones-first", "zeroes-first"]


def parse_item_option(text: str, position: int) -> Item:
    """
    Parse an ``--item`` value: ``ID:WEIGHT:VALUE`` or ``WEIGHT:VALUE``.

    Items without an id are labelled by position (A, B, C, ...).
    """
    parts = text.split(":")
    if len(parts) == 2:
        item_id, (weight, value) = item_label(position), parts
    elif len(parts) == 3:
        item_id, weight, value = parts
    else:
        raise ValidationError(
            f"Cannot parse item '{text}'",
            suggestion="Use ID:WEIGHT:VALUE (e.g. A:10:25) or WEIGHT:VALUE.",
        )

    try:
        return Item(item_id.strip(), float(weight), float(value))
    except ValueError as e:
        raise ValidationError(
            f"Item '{text}' has a non-numeric weight or value",
            suggestion="Weights and values must be numbers, e.g. A:10:25.",
        ) from e


def check_unique_ids(items: list[Item]) -> list[Item]:
    """Reject inline items that share an id, as the YAML schema does."""
    ids = [item.id for item in items]
    duplicates = sorted({item_id for item_id in ids if ids.count(item_id) > 1})
    if duplicates:
        raise ValidationError(
            f"Duplicate item ids: {', '.join(duplicates)}",
            suggestion="Give every --item a distinct id.",
        )
    return items


@click.group()
@click.version_option(version=__version__)
def main():
    """
    knapsack-bnb - Branch and Bound Knapsack Solver.

    Solves 0-1 knapsack instances exactly and records the whole search tree.

    Examples:
        knapsack-bnb solve --config configs/solve_default.yaml
        knapsack-bnb solve --capacity 20 --item A:10:25 --item B:7:21 --strategy zeroes-first
        knapsack-bnb generate --n-items 12 --output configs/random.yaml
    """
    pass


@main.command()
@click.option("--config", type=click.Path(exists=True), help="Path to solve configuration YAML file")
@click.option("--capacity", type=float, help="Knapsack capacity (overrides config)")
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Item as ID:WEIGHT:VALUE or WEIGHT:VALUE (repeatable, replaces config items)",
)
@click.option(
    "--strategy",
    type=click.Choice(STRATEGIES, case_sensitive=False),
    help="Which branch child to explore first (overrides config)",
)
@click.option("--tree-json", type=click.Path(), help="Write the search tree projection to JSON")
@click.option("--items-csv", type=click.Path(), help="Write the ratio-ordered items to CSV")
@click.option("--summary-json", type=click.Path(), help="Write search statistics to JSON")
@click.option("--verify", is_flag=True, help="Cross-check the optimum with OR-Tools")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides config)",
)
@click.option("--log-file", type=click.Path(), help="Also log to this file")
@click.option("--debug", is_flag=True, help="Show full tracebacks on errors")
@handle_cli_errors()
def solve(
    config,
    capacity,
    items,
    strategy,
    tree_json,
    items_csv,
    summary_json,
    verify,
    log_level,
    log_file,
    debug,
):
    """Solve a knapsack instance with branch-and-bound."""
    if config is None and not items:
        raise ValidationError(
            "No instance given",
            suggestion="Pass --config FILE.yaml or at least one --item ID:WEIGHT:VALUE.",
        )

    solve_config = load_config(config) if config else SolveConfig()

    problem = solve_config.problem
    catalog = catalog_from_config(problem)
    if items:
        parsed = [parse_item_option(text, i) for i, text in enumerate(items)]
        catalog = ItemCatalog(check_unique_ids(parsed))
    if capacity is None:
        capacity = problem.capacity
    strategy = (strategy or problem.strategy).lower()

    level_name = (log_level or solve_config.logging.level).upper()
    logger = setup_logger(
        "knapsack_bnb",
        log_file=log_file or solve_config.logging.log_file,
        level=getattr(logging, level_name),
    )
    log_experiment_config(
        logger,
        {
            "capacity": capacity,
            "strategy": strategy,
            "n_items": len(catalog),
            "verify": verify or solve_config.verify,
        },
    )

    result = BranchAndBoundSolver(strategy=strategy).solve(catalog, capacity)
    summary = summarize_tree(result)
    log_metrics(logger, summary, prefix="Search |", precision=2)

    print_solve_summary(result)

    if verify or solve_config.verify:
        reference = verify_optimum(catalog, capacity, result.best_value)
        click.secho(
            f"Verified against OR-Tools: optimum {reference.optimal_value:g}", fg="green"
        )

    output = solve_config.output
    tree_path = tree_json or output.tree_json
    if tree_path:
        export_tree_to_json(build_search_tree(result.root, result.strategy), tree_path)

    csv_path = items_csv or output.items_csv
    if csv_path:
        export_items_to_csv(result.ordered_items, csv_path)

    summary_path = summary_json or output.summary_json
    if summary_path:
        save_summary_to_json(summary, summary_path)


@main.command(name="validate-config")
@click.argument("config", type=click.Path())
def validate_config(config):
    """Validate a solve configuration file without solving it."""
    is_valid, message = validate_config_file(config)
    if is_valid:
        click.secho(message, fg="green")
    else:
        click.secho(message, fg="red", err=True)
        sys.exit(1)


@main.command()
@click.option("--n-items", type=int, default=8, help="Number of items")
@click.option("--seed", type=int, default=42, help="Random seed")
@click.option("--capacity-ratio", type=float, default=0.5, help="Capacity as fraction of total weight")
@click.option(
    "--strategy",
    type=click.Choice(STRATEGIES, case_sensitive=False),
    default="ones-first",
    help="Strategy stored in the generated config",
)
@click.option("--output", type=click.Path(), required=True, help="Where to write the YAML config")
@click.option("--debug", is_flag=True, help="Show full tracebacks on errors")
@handle_cli_errors()
def generate(n_items, seed, capacity_ratio, strategy, output, debug):
    """Generate a random instance and save it as a solve configuration."""
    require_positive_int(n_items, "n_items")
    require_fraction(capacity_ratio, "capacity_ratio")

    generator = KnapsackGenerator(seed=seed)
    instance = generator.generate_instance(n_items=n_items, capacity_ratio=capacity_ratio)
    save_config(config_from_instance(instance, strategy=strategy.lower()), output)

    click.echo(f"Wrote {instance} to {output}")


if __name__ == "__main__":
    main()

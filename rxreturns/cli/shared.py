"""Shared CLI helpers: console, logger, output paths, result formatting."""

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from rxreturns.config import OUTPUT_DIR
from rxreturns.models.outputs import OptimizationResult
from rxreturns.utils.logger import get_logger

console = Console()
logger = get_logger("rxreturns.cli")


def ensure_output_dirs() -> None:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    logger.debug("filesystem.ensure_output_dirs", output_dir=str(OUTPUT_DIR))


def write_json_result(result_dict: dict, path: Path | None = None) -> Path:
    ensure_output_dirs()
    path = path or OUTPUT_DIR / "recommendations.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result_dict, f, indent=2, default=str)
    logger.info("results.write_json", path=str(path))
    return path


def print_result(result: OptimizationResult) -> None:
    """Print recommendations as a table plus usage and strategy totals."""
    if not result.recommendations:
        console.print("[yellow]No priced product lines; nothing to recommend.[/yellow]")
    else:
        table = Table(title="Distributor recommendations")
        table.add_column("NDC", style="cyan")
        table.add_column("Product")
        table.add_column("Qty", justify="right")
        table.add_column("Distributor", style="green")
        table.add_column("Expected", justify="right")
        table.add_column("Worst", justify="right")
        table.add_column("Savings", justify="right")
        table.add_column("Fresh", justify="center")
        for rec in result.recommendations:
            table.add_row(
                rec.ndc,
                rec.product_name,
                str(rec.quantity),
                rec.recommended_distributor,
                f"{rec.expected_price:.2f}",
                f"{rec.worst_price:.2f}",
                f"{rec.savings:.2f}",
                "yes" if rec.available else "[red]stale[/red]",
            )
        console.print(table)

    usage = result.distributor_usage
    earnings = result.earnings_comparison
    console.print(f"\n[bold]Total potential savings:[/bold] {result.total_potential_savings:.2f}")
    console.print(
        f"  Distributors: {usage.used_this_month} used this month, "
        f"{usage.still_available} still available of {usage.total_distributors}"
    )
    console.print(
        f"  Single distributor: {earnings.single_distributor_strategy:.2f}  "
        f"Multiple distributors: {earnings.multiple_distributors_strategy:.2f}  "
        f"Difference: {earnings.potential_additional_earnings:.2f}"
    )

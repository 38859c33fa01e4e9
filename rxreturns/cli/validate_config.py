"""Validate plans config: load YAML, check caps, print summary table."""

from rich.table import Table

from rxreturns.plans import get_all_plans

from .shared import console, logger


def validate_plans() -> None:
    """Load config/plans.yaml, validate caps and default plan, print summary table."""
    log = logger.bind(command="validate-plans")
    log.info("validate_plans.start")

    try:
        config = get_all_plans()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Config error: {e}[/red]")
        log.error("validate_plans.fail", error=str(e))
        raise SystemExit(1) from e

    plans = config.get("plans") or {}
    table = Table(title="Subscription plans")
    table.add_column("Plan ID", style="cyan")
    table.add_column("Name")
    table.add_column("Max distributors", justify="right")
    table.add_column("Max documents", justify="right")
    table.add_column("Monthly price", justify="right", style="green")

    for plan_id, plan in plans.items():
        table.add_row(
            plan_id,
            str(plan.get("name") or ""),
            "unlimited" if plan.get("max_distributors") is None else str(plan["max_distributors"]),
            "unlimited" if plan.get("max_documents") is None else str(plan["max_documents"]),
            str(plan.get("price_monthly", "")),
        )

    console.print(table)
    console.print(f"[green]Config valid. {len(plans)} plans, default {config.get('default_plan')!r}.[/green]")
    log.info("validate_plans.ok", plans=len(plans))

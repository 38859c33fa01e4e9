"""Database commands: create tables (with demo seed) and import credit report CSV exports."""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from rxreturns.db import init_db
from rxreturns.db.repositories import price_repo
from rxreturns.errors import RxReturnsError
from rxreturns.models.inputs import CreditReportCreate
from rxreturns.utils.csv_loader import read_csv_file

from .shared import console, logger


def init_db_command() -> None:
    """Create tables; seeds demo data from data/*.csv when SEED_DEMO_DATA is true and the DB is empty."""
    init_db()
    console.print("[green]Database ready.[/green]")
    logger.info("init_db.done")


def _item_from_row(row: dict) -> dict:
    """Keep only non-empty cells so optional numeric columns fall back to their defaults."""
    return {k: v for k, v in row.items() if k and v is not None and str(v).strip()}


def import_report(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Credit report CSV (ndc, product_name, quantity, credit_amount, price_per_unit)"),
    pharmacy_id: str = typer.Option(..., "--pharmacy-id", help="Pharmacy that received the report"),
    distributor: str = typer.Option(..., "--distributor", "-d", help="Distributor code or name"),
    report_date: Optional[datetime] = typer.Option(None, "--report-date", formats=["%Y-%m-%d"], help="Report date (default today)"),
) -> None:
    """Record a credit report CSV as price observations."""
    init_db()
    log = logger.bind(command="import-report", path=str(csv_path), pharmacy_id=pharmacy_id)
    log.info("import_report.start")
    rows = read_csv_file(csv_path)
    if not rows:
        console.print(f"[red]No rows in {csv_path}[/red]")
        raise typer.Exit(1)
    try:
        report = CreditReportCreate(
            distributor=distributor,
            report_date=report_date.date() if report_date else date.today(),
            file_name=csv_path.name,
            source="manual_upload",
            items=[_item_from_row(r) for r in rows],
        )
        out = price_repo.record_credit_report(pharmacy_id, report)
    except PydanticValidationError as e:
        console.print(f"[red]Invalid report rows: {e}[/red]")
        log.error("import_report.invalid", error=str(e))
        raise typer.Exit(1) from e
    except RxReturnsError as e:
        console.print(f"[red]{e.message}[/red]")
        log.error("import_report.rejected", error=e.message)
        raise typer.Exit(1) from e
    console.print(
        f"[green]Recorded report {out.id} from {out.distributor}: "
        f"{out.observations_recorded} observations, {out.skipped_items} skipped, "
        f"credit {out.total_credit_amount:.2f}[/green]"
    )
    log.info("import_report.done", report_id=out.id, recorded=out.observations_recorded)

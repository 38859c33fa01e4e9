"""Optimize mode: print recommendations for one pharmacy from the local database."""

from pathlib import Path
from typing import Optional

import typer

from rxreturns.db import init_db
from rxreturns.db.repositories import pharmacy_repo
from rxreturns.errors import RxReturnsError
from rxreturns.models.inputs import OptimizationSearch
from rxreturns.optimization import service
from rxreturns.utils.logger import request_context

from .shared import console, logger, print_result, write_json_result


def optimize(
    pharmacy_id: str = typer.Option(..., "--pharmacy-id", help="Pharmacy to optimize for"),
    ndc: Optional[str] = typer.Option(None, "--ndc", help="Comma-separated NDC search terms"),
    quantity: Optional[str] = typer.Option(None, "--quantity", help="Comma-separated quantities, one per NDC"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the result as JSON"),
) -> None:
    """Recommend a reverse distributor for each product-list line (or searched NDC)."""
    init_db()
    log = logger.bind(command="optimize")
    with request_context(command="optimize", pharmacy_id=pharmacy_id):
        pharmacy = pharmacy_repo.get_by_id(pharmacy_id)
        if pharmacy is None:
            console.print(f"[red]Unknown pharmacy: {pharmacy_id}[/red]")
            log.warning("optimize.unknown_pharmacy")
            raise typer.Exit(1)
        try:
            search = OptimizationSearch.from_query(ndc, quantity)
        except RxReturnsError as e:
            console.print(f"[red]{e.message}[/red]")
            raise typer.Exit(2) from e
        result = service.get_recommendations(pharmacy.id, plan_id=pharmacy.plan_id, search=search)
        print_result(result)
        if output is not None:
            path = write_json_result({"status": "success", "data": result.to_json_dict()}, output)
            console.print(f"[green]Wrote {path}[/green]")
        log.info("optimize.done", recommendations=len(result.recommendations))

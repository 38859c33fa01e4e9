"""Serve mode: run the optimization API under uvicorn."""

import sys

import typer
import uvicorn

from rxreturns.api.server import create_app
from rxreturns.config import API_HOST, API_PORT
from rxreturns.db import init_db

from .shared import console, logger


def serve(
    port: int = typer.Option(API_PORT, "--port", "-p", help="Port for the API server"),
    host: str = typer.Option(API_HOST, "--host", "-h", help="Bind host"),
) -> None:
    """Start the HTTP API."""
    init_db()
    log = logger.bind(command="serve", port=port)
    log.info("serve.start")

    app = create_app()
    console.print(f"[green]Starting API server on http://{host}:{port}[/green]")
    console.print("[dim]Endpoints: GET /optimization/recommendations, GET /health, docs at /docs[/dim]")
    try:
        uvicorn.run(
            app,
            host=host,
            port=port,
            log_level="info",
            timeout_graceful_shutdown=15,
        )
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
        sys.exit(0)

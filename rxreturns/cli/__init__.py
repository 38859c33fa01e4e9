"""CLI commands: one module per mode (serve, optimize, database, config validation)."""

from typer import Typer

from rxreturns.cli import db_mode, optimize_mode, serve_mode, validate_config as validate_config_module

app = Typer(help="Pharmacy returns distributor price optimization")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(serve_mode.serve)
    app.command()(optimize_mode.optimize)
    app.command(name="init-db")(db_mode.init_db_command)
    app.command(name="import-report")(db_mode.import_report)
    app.command(name="validate-plans")(validate_config_module.validate_plans)


register_commands()

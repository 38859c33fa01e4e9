"""Load demo seed data from CSV files."""

from pathlib import Path
from typing import Any

from rxreturns.config import DATA_DIR


def _read_csv(path: Path) -> list[dict[str, Any]]:
    """Read a CSV file and return list of row dicts."""
    if not path.exists():
        return []
    import csv
    with path.open("r", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        return list(reader)


def load_distributors(csv_path: Path | None = None) -> list[dict[str, Any]]:
    """Load reverse distributors from distributors.csv."""
    path = csv_path or DATA_DIR / "distributors.csv"
    return _read_csv(path)


def load_pharmacies(csv_path: Path | None = None) -> list[dict[str, Any]]:
    """Load pharmacy accounts from pharmacies.csv."""
    path = csv_path or DATA_DIR / "pharmacies.csv"
    return _read_csv(path)


def load_credit_reports(csv_path: Path | None = None) -> list[dict[str, Any]]:
    """Load credit-report headers from credit_reports.csv."""
    path = csv_path or DATA_DIR / "credit_reports.csv"
    return _read_csv(path)


def load_credit_report_items(csv_path: Path | None = None) -> list[dict[str, Any]]:
    """Load credit-report line items from credit_report_items.csv."""
    path = csv_path or DATA_DIR / "credit_report_items.csv"
    return _read_csv(path)


def load_product_list(csv_path: Path | None = None) -> list[dict[str, Any]]:
    """Load product-list lines from product_list.csv."""
    path = csv_path or DATA_DIR / "product_list.csv"
    return _read_csv(path)


def read_csv_file(path: Path) -> list[dict[str, Any]]:
    """Read an arbitrary CSV file (e.g. a credit report export passed on the CLI)."""
    return _read_csv(path)

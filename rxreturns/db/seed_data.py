"""Seed DB from CSV files when tables are first created."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session

from rxreturns.db.models.master import PHARMACY_STATUS_PENDING, Pharmacy, ReverseDistributor
from rxreturns.db.models.pricing import CreditReport, PriceObservation
from rxreturns.db.models.product_list import ProductListItem
from rxreturns.utils.csv_loader import (
    load_credit_report_items,
    load_credit_reports,
    load_distributors,
    load_pharmacies,
    load_product_list,
)
from rxreturns.utils.logger import get_logger
from rxreturns.utils.ndc import normalize_ndc

logger = get_logger("rxreturns.db.seed_data")


def _parse_bool(val: Any, default: bool = False) -> bool:
    if isinstance(val, bool):
        return val
    if isinstance(val, str) and val.strip():
        return val.strip().lower() in ("true", "1", "yes")
    return default


def _parse_int(val: Any, default: int = 0) -> int:
    try:
        return int(val) if val is not None and str(val).strip() else default
    except (TypeError, ValueError):
        return default


def _parse_float(val: Any) -> float | None:
    try:
        return float(val) if val is not None and str(val).strip() else None
    except (TypeError, ValueError):
        return None


def _parse_date(val: Any) -> date | None:
    if val is None or not str(val).strip():
        return None
    try:
        return date.fromisoformat(str(val).strip()[:10])
    except (TypeError, ValueError):
        return None


def _text(r: dict[str, Any], key: str) -> str | None:
    return (r.get(key) or "").strip() or None


def seed_demo_data(session: Session) -> None:
    """Read demo data from CSV files under data/ and insert into tables.

    FK order: reverse_distributors, pharmacies, credit_reports (+ price_observations), product_list_items.
    Report dates are relative (days_ago) so the demo always has both fresh and stale prices.
    """
    # 1) Reverse distributors
    code_to_distributor_id: dict[str, int] = {}
    for r in load_distributors():
        code = _text(r, "code")
        if not code:
            continue
        d = ReverseDistributor(
            code=code,
            name=_text(r, "name") or code,
            contact_email=_text(r, "contact_email"),
            is_active=_parse_bool(r.get("is_active"), default=True),
        )
        session.add(d)
        session.flush()
        code_to_distributor_id[code] = d.id
    logger.info("seed_data.distributors", count=len(code_to_distributor_id))

    # 2) Pharmacies
    pharmacy_ids: set[str] = set()
    for r in load_pharmacies():
        pharmacy_id = _text(r, "id")
        if not pharmacy_id:
            continue
        session.add(
            Pharmacy(
                id=pharmacy_id,
                name=_text(r, "name") or pharmacy_id,
                status=_text(r, "status") or PHARMACY_STATUS_PENDING,
                plan_id=_text(r, "plan_id"),
                npi_number=_text(r, "npi_number"),
                dea_number=_text(r, "dea_number"),
            )
        )
        pharmacy_ids.add(pharmacy_id)
    session.flush()
    logger.info("seed_data.pharmacies", count=len(pharmacy_ids))

    # 3) Credit reports; each priced item becomes a price observation as of the report date
    today = datetime.now(timezone.utc).date()
    reports: dict[str, CreditReport] = {}
    for r in load_credit_reports():
        key = _text(r, "report_key")
        pharmacy_id = _text(r, "pharmacy_id")
        distributor_id = code_to_distributor_id.get(_text(r, "distributor") or "")
        if not key or pharmacy_id not in pharmacy_ids or distributor_id is None:
            continue
        report = CreditReport(
            pharmacy_id=pharmacy_id,
            distributor_id=distributor_id,
            report_date=today - timedelta(days=_parse_int(r.get("days_ago"))),
            file_name=_text(r, "file_name"),
            source=_text(r, "source") or "manual_upload",
        )
        session.add(report)
        session.flush()
        reports[key] = report

    observation_count = 0
    for r in load_credit_report_items():
        report = reports.get(_text(r, "report_key") or "")
        ndc = normalize_ndc(r.get("ndc"))
        quantity = _parse_int(r.get("quantity"))
        if report is None or not ndc or quantity <= 0:
            continue
        credit_amount = _parse_float(r.get("credit_amount"))
        unit_price = _parse_float(r.get("price_per_unit"))
        if not unit_price or unit_price <= 0:
            unit_price = credit_amount / quantity if credit_amount else 0.0
        if unit_price <= 0:
            continue
        if credit_amount is None:
            credit_amount = unit_price * quantity
        session.add(
            PriceObservation(
                ndc=ndc,
                distributor_id=report.distributor_id,
                credit_report_id=report.id,
                product_name=_text(r, "product_name"),
                unit_price=unit_price,
                quantity=quantity,
                credit_amount=credit_amount,
                observed_at=datetime.combine(report.report_date, time.min, tzinfo=timezone.utc),
            )
        )
        report.total_credit_amount = round((report.total_credit_amount or 0.0) + credit_amount, 2)
        observation_count += 1
    session.flush()
    logger.info("seed_data.credit_reports", reports=len(reports), observations=observation_count)

    # 4) Product list
    item_count = 0
    for r in load_product_list():
        pharmacy_id = _text(r, "pharmacy_id")
        ndc = _text(r, "ndc")
        if pharmacy_id not in pharmacy_ids or not ndc:
            continue
        session.add(
            ProductListItem(
                pharmacy_id=pharmacy_id,
                ndc=ndc,
                product_name=_text(r, "product_name"),
                quantity=_parse_int(r.get("quantity")),
                lot_number=_text(r, "lot_number"),
                expiration_date=_parse_date(r.get("expiration_date")),
                notes=_text(r, "notes"),
            )
        )
        item_count += 1
    session.flush()
    logger.info("seed_data.product_list", count=item_count)

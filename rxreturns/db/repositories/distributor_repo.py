"""Reverse distributor repository: active distributors and monthly usage per pharmacy."""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from rxreturns.db import get_session
from rxreturns.db.models.master import ReverseDistributor
from rxreturns.db.models.pricing import CreditReport
from rxreturns.models.data import UsageSnapshot
from rxreturns.models.outputs import DistributorOut


def month_bounds(day: date) -> tuple[date, date]:
    """First day of day's month and first day of the following month."""
    start = day.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def find_by_code_or_name(session: Session, value: str) -> Optional[ReverseDistributor]:
    """Exact, case-insensitive match on code first, then on name."""
    needle = (value or "").strip().lower()
    if not needle:
        return None
    row = session.scalars(
        select(ReverseDistributor).where(func.lower(ReverseDistributor.code) == needle)
    ).first()
    if row is not None:
        return row
    return session.scalars(
        select(ReverseDistributor).where(func.lower(ReverseDistributor.name) == needle)
    ).first()


def _like_pattern(needle: str) -> str:
    """Substring LIKE pattern with the wildcards in needle matched literally (escape char is a backslash)."""
    escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def list_active(q: Optional[str] = None) -> list[DistributorOut]:
    """Active distributors ordered by name; optional case-insensitive code/name substring filter."""
    with get_session() as session:
        stmt = select(ReverseDistributor).where(ReverseDistributor.is_active == True)  # noqa: E712
        needle = (q or "").strip().lower()
        if needle:
            pattern = _like_pattern(needle)
            stmt = stmt.where(
                or_(
                    ReverseDistributor.code.ilike(pattern, escape="\\"),
                    ReverseDistributor.name.ilike(pattern, escape="\\"),
                )
            )
        stmt = stmt.order_by(ReverseDistributor.name)
        return [DistributorOut.model_validate(r) for r in session.scalars(stmt).all()]


def usage_snapshot(
    pharmacy_id: str,
    max_distributors: Optional[int],
    today: Optional[date] = None,
) -> UsageSnapshot:
    """Distinct active distributors with a credit report for this pharmacy dated in today's calendar month.

    Deactivated distributors count toward neither the used list nor the total.
    """
    start, end = month_bounds(today or datetime.now(timezone.utc).date())
    with get_session() as session:
        total = session.scalar(
            select(func.count(ReverseDistributor.id)).where(ReverseDistributor.is_active == True)  # noqa: E712
        ) or 0
        used_q = (
            select(ReverseDistributor.name)
            .join(CreditReport, CreditReport.distributor_id == ReverseDistributor.id)
            .where(ReverseDistributor.is_active == True)  # noqa: E712
            .where(CreditReport.pharmacy_id == pharmacy_id)
            .where(CreditReport.report_date >= start, CreditReport.report_date < end)
            .distinct()
            .order_by(ReverseDistributor.name)
        )
        used = list(session.scalars(used_q).all())
    return UsageSnapshot(
        used_distributors=used,
        total_distributors=total,
        max_distributors=max_distributors,
    )

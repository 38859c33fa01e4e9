"""Pharmacy repository: look up the account behind a request."""

from typing import Optional

from sqlalchemy import select

from rxreturns.db import get_session
from rxreturns.db.models.master import Pharmacy


def get_by_id(pharmacy_id: str) -> Optional[Pharmacy]:
    """Return the pharmacy row (detached), or None."""
    with get_session() as session:
        row = session.scalars(select(Pharmacy).where(Pharmacy.id == pharmacy_id)).first()
        if row is not None:
            session.expunge(row)
        return row


def create(
    name: str,
    status: str,
    plan_id: Optional[str] = None,
    pharmacy_id: Optional[str] = None,
) -> Pharmacy:
    """Insert a pharmacy account; pharmacy_id defaults to a new UUID."""
    with get_session() as session:
        row = Pharmacy(name=name, status=status, plan_id=plan_id)
        if pharmacy_id:
            row.id = pharmacy_id
        session.add(row)
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row

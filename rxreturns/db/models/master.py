"""ORM models for master/reference data: ReverseDistributor, Pharmacy."""

import uuid

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rxreturns.db.base import Base, TimestampMixin

PHARMACY_STATUS_ACTIVE = "active"
PHARMACY_STATUS_PENDING = "pending"
PHARMACY_STATUS_SUSPENDED = "suspended"
PHARMACY_STATUS_BLACKLISTED = "blacklisted"


class ReverseDistributor(Base, TimestampMixin):
    """Reverse distributor that buys returned stock and issues credit reports."""

    __tablename__ = "reverse_distributors"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    contact_email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    credit_reports: Mapped[list["CreditReport"]] = relationship(  # noqa: F821
        "CreditReport", back_populates="distributor"
    )


class Pharmacy(Base, TimestampMixin):
    """Pharmacy account. id is the identity issued by the auth provider."""

    __tablename__ = "pharmacies"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=PHARMACY_STATUS_PENDING)
    plan_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    npi_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    dea_number: Mapped[str | None] = mapped_column(String(32), nullable=True)

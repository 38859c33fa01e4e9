"""ORM models for price history: CreditReport and the PriceObservation rows parsed from it."""

from datetime import date, datetime

from sqlalchemy import Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rxreturns.db.base import Base, utcnow


class CreditReport(Base):
    """One credit-report document a reverse distributor issued to a pharmacy."""

    __tablename__ = "credit_reports"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    pharmacy_id: Mapped[str] = mapped_column(ForeignKey("pharmacies.id"), nullable=False, index=True)
    distributor_id: Mapped[int] = mapped_column(ForeignKey("reverse_distributors.id"), nullable=False, index=True)
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    file_name: Mapped[str | None] = mapped_column(String(512), nullable=True)
    source: Mapped[str] = mapped_column(String(32), nullable=False, default="manual_upload")
    total_credit_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    distributor: Mapped["ReverseDistributor"] = relationship(  # noqa: F821
        "ReverseDistributor", back_populates="credit_reports"
    )
    observations: Mapped[list["PriceObservation"]] = relationship(
        "PriceObservation", back_populates="credit_report"
    )


class PriceObservation(Base):
    """Immutable per-NDC unit price a distributor paid, as of the report date."""

    __tablename__ = "price_observations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ndc: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    distributor_id: Mapped[int] = mapped_column(ForeignKey("reverse_distributors.id"), nullable=False, index=True)
    credit_report_id: Mapped[int | None] = mapped_column(ForeignKey("credit_reports.id"), nullable=True, index=True)
    product_name: Mapped[str | None] = mapped_column(String(512), nullable=True)
    unit_price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    credit_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    observed_at: Mapped[datetime] = mapped_column(nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    distributor: Mapped["ReverseDistributor"] = relationship("ReverseDistributor")  # noqa: F821
    credit_report: Mapped["CreditReport | None"] = relationship("CreditReport", back_populates="observations")

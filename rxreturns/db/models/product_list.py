"""ORM model for a pharmacy's product list (candidate-for-return inventory lines)."""

from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rxreturns.db.base import Base, utcnow


class ProductListItem(Base):
    """One inventory line a pharmacy may return."""

    __tablename__ = "product_list_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    pharmacy_id: Mapped[str] = mapped_column(ForeignKey("pharmacies.id"), nullable=False, index=True)
    ndc: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    product_name: Mapped[str | None] = mapped_column(String(512), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    lot_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    added_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, index=True)

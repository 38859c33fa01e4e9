"""Snapshots handed to the allocator: product lines, price observations, distributor usage."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProductLine(BaseModel):
    """One product-list line considered for return."""

    ndc: str
    product_name: Optional[str] = None
    quantity: int
    lot_number: Optional[str] = None
    expiration_date: Optional[date] = None


class PriceObservation(BaseModel):
    """Unit price a distributor paid for an NDC, as of observed_at."""

    ndc: str
    distributor: str
    unit_price: float
    observed_at: datetime


class UsageSnapshot(BaseModel):
    """Distributors the pharmacy used this calendar month, against its plan cap (None = unlimited)."""

    used_distributors: list[str] = Field(default_factory=list)
    total_distributors: int = 0
    max_distributors: Optional[int] = None

    @property
    def used_this_month(self) -> int:
        return len(set(self.used_distributors))

    @property
    def still_available(self) -> int:
        cap = self.total_distributors
        if self.max_distributors is not None:
            cap = min(cap, self.max_distributors)
        return max(0, cap - self.used_this_month)

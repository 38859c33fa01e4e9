"""Re-export all ORM models so Base.metadata has all tables."""

from rxreturns.db.models.master import Pharmacy, ReverseDistributor
from rxreturns.db.models.pricing import CreditReport, PriceObservation
from rxreturns.db.models.product_list import ProductListItem

__all__ = [
    "Pharmacy",
    "ReverseDistributor",
    "CreditReport",
    "PriceObservation",
    "ProductListItem",
]

"""DB repositories: sync functions returning pydantic snapshots for services and routes."""

from rxreturns.db.repositories.distributor_repo import (
    list_active as distributor_list_active,
    usage_snapshot as distributor_usage_snapshot,
)
from rxreturns.db.repositories.pharmacy_repo import get_by_id as pharmacy_get_by_id
from rxreturns.db.repositories.price_repo import (
    fetch_observations as price_fetch_observations,
    record_credit_report as price_record_credit_report,
)
from rxreturns.db.repositories.product_list_repo import (
    add_item as product_list_add_item,
    fetch_lines as product_list_fetch_lines,
    list_items as product_list_list_items,
    remove_item as product_list_remove_item,
)

__all__ = [
    "distributor_list_active",
    "distributor_usage_snapshot",
    "pharmacy_get_by_id",
    "price_fetch_observations",
    "price_record_credit_report",
    "product_list_add_item",
    "product_list_fetch_lines",
    "product_list_list_items",
    "product_list_remove_item",
]

"""Product list API: the pharmacy's lines considered for return."""

from typing import Any

from fastapi import APIRouter, Depends

from rxreturns.api.deps import current_pharmacy
from rxreturns.db.models.master import Pharmacy
from rxreturns.db.repositories import product_list_repo
from rxreturns.errors import NotFoundError
from rxreturns.models.inputs import ProductListItemCreate
from rxreturns.models.outputs import success
from rxreturns.utils.logger import get_logger

logger = get_logger("rxreturns.api.product_list")

router = APIRouter(prefix="/product-list", tags=["product-list"])


@router.get("/items")
def list_items(pharmacy: Pharmacy = Depends(current_pharmacy)) -> dict[str, Any]:
    return success(product_list_repo.list_items(pharmacy.id))


@router.post("/items", status_code=201)
def add_item(body: ProductListItemCreate, pharmacy: Pharmacy = Depends(current_pharmacy)) -> dict[str, Any]:
    item = product_list_repo.add_item(pharmacy.id, body)
    logger.info("product_list.item_added", pharmacy_id=pharmacy.id, item_id=item.id, ndc=item.ndc)
    return success(item)


@router.delete("/items/{item_id}")
def remove_item(item_id: int, pharmacy: Pharmacy = Depends(current_pharmacy)) -> dict[str, Any]:
    """Delete one line; 404 when it does not exist or belongs to another pharmacy."""
    if not product_list_repo.remove_item(pharmacy.id, item_id):
        raise NotFoundError(f"Product list item not found: {item_id}")
    logger.info("product_list.item_removed", pharmacy_id=pharmacy.id, item_id=item_id)
    return success({"id": item_id, "removed": True})

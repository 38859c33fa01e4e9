"""Optimization API: distributor recommendations, packages and ad-hoc suggestions."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from rxreturns.api.deps import current_pharmacy
from rxreturns.db.models.master import Pharmacy
from rxreturns.models.inputs import OptimizationSearch, SuggestionRequest
from rxreturns.models.outputs import success
from rxreturns.optimization import service

router = APIRouter(prefix="/optimization", tags=["optimization"])


@router.get("/recommendations")
def get_recommendations(
    ndc: Optional[str] = Query(None, description="Comma-separated NDC search terms (prefix match)"),
    quantity: Optional[str] = Query(None, description="Comma-separated quantities, one per ndc term"),
    pharmacy: Pharmacy = Depends(current_pharmacy),
) -> dict[str, Any]:
    """Best distributor per product-list line, or per searched NDC when ?ndc= is given."""
    search = OptimizationSearch.from_query(ndc, quantity)
    result = service.get_recommendations(pharmacy.id, plan_id=pharmacy.plan_id, search=search)
    return success(result)


@router.get("/packages")
def get_packages(
    ndc: Optional[str] = Query(None, description="Comma-separated NDC search terms (prefix match)"),
    quantity: Optional[str] = Query(None, description="Comma-separated quantities, one per ndc term"),
    pharmacy: Pharmacy = Depends(current_pharmacy),
) -> dict[str, Any]:
    """Recommendations grouped into one shipment per distributor, for the product list or ?ndc= terms."""
    search = OptimizationSearch.from_query(ndc, quantity)
    return success(service.get_packages(pharmacy.id, plan_id=pharmacy.plan_id, search=search))


@router.post("/suggestions")
def post_suggestions(
    body: SuggestionRequest,
    pharmacy: Pharmacy = Depends(current_pharmacy),
) -> dict[str, Any]:
    return success(service.get_suggestions(pharmacy.id, body.items, plan_id=pharmacy.plan_id))

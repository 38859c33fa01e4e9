"""Distributor API: active reverse distributors and the caller's monthly usage."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from rxreturns.api.deps import current_pharmacy
from rxreturns.db.models.master import Pharmacy
from rxreturns.db.repositories import distributor_repo
from rxreturns.models.outputs import success
from rxreturns.plans import resolve_plan

router = APIRouter(prefix="/distributors", tags=["distributors"])


@router.get("")
def list_distributors(
    q: Optional[str] = Query(None, description="Case-insensitive substring of code or name"),
    pharmacy: Pharmacy = Depends(current_pharmacy),
) -> dict[str, Any]:
    return success(distributor_repo.list_active(q))


@router.get("/usage")
def get_usage(pharmacy: Pharmacy = Depends(current_pharmacy)) -> dict[str, Any]:
    """Distinct distributors used this calendar month against the plan's cap."""
    plan = resolve_plan(pharmacy.plan_id)
    usage = distributor_repo.usage_snapshot(pharmacy.id, plan.get("max_distributors"))
    return success(
        {
            "plan": plan["id"],
            "maxDistributors": usage.max_distributors,
            "usedThisMonth": usage.used_this_month,
            "usedDistributors": usage.used_distributors,
            "totalDistributors": usage.total_distributors,
            "stillAvailable": usage.still_available,
        }
    )

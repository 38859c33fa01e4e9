"""Credit report API: ingest a parsed report as price observations."""

from typing import Any

from fastapi import APIRouter, Depends

from rxreturns.api.deps import current_pharmacy
from rxreturns.db.models.master import Pharmacy
from rxreturns.db.repositories import price_repo
from rxreturns.models.inputs import CreditReportCreate
from rxreturns.models.outputs import success

router = APIRouter(prefix="/credit-reports", tags=["credit-reports"])


@router.post("", status_code=201)
def create_credit_report(
    body: CreditReportCreate,
    pharmacy: Pharmacy = Depends(current_pharmacy),
) -> dict[str, Any]:
    """Record a credit report; each positively priced item becomes a price observation."""
    return success(price_repo.record_credit_report(pharmacy.id, body))

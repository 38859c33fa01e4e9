"""Optimization service: load a pharmacy's snapshots from the DB and run the allocator."""

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from rxreturns.config import STALE_AFTER_DAYS
from rxreturns.db.repositories import distributor_repo, price_repo, product_list_repo
from rxreturns.models.data import ProductLine, UsageSnapshot
from rxreturns.models.inputs import OptimizationSearch, SuggestionItem
from rxreturns.models.outputs import OptimizationResult, PackageRecommendation
from rxreturns.optimization.allocator import build_recommendations
from rxreturns.optimization.packages import build_packages
from rxreturns.optimization.search import resolve_search_lines
from rxreturns.plans import max_distributors_for
from rxreturns.utils.logger import get_logger

logger = get_logger("rxreturns.optimization.service")


def load_usage(pharmacy_id: str, plan_id: Optional[str], now: datetime) -> UsageSnapshot:
    """Monthly distributor usage against the pharmacy's plan cap."""
    return distributor_repo.usage_snapshot(
        pharmacy_id,
        max_distributors=max_distributors_for(plan_id),
        today=now.date(),
    )


def _run(
    pharmacy_id: str,
    plan_id: Optional[str],
    lines: Sequence[ProductLine],
    now: Optional[datetime],
    mode: str,
    observations=None,
) -> tuple[OptimizationResult, int]:
    now = now or datetime.now(timezone.utc)
    if observations is None:
        observations = price_repo.fetch_observations([ln.ndc for ln in lines]) if lines else []
    usage = load_usage(pharmacy_id, plan_id, now)
    result = build_recommendations(
        lines,
        observations,
        usage=usage,
        now=now,
        stale_after=timedelta(days=STALE_AFTER_DAYS),
    )
    logger.info(
        "optimization.recommendations.done",
        pharmacy_id=pharmacy_id,
        mode=mode,
        lines=len(lines),
        observations=len(observations),
        recommendations=len(result.recommendations),
        total_potential_savings=round(result.total_potential_savings, 2),
        still_available=usage.still_available,
    )
    return result, len(lines)


def _search_lines(pharmacy_id: str, search: OptimizationSearch):
    """Search terms resolved against every known observation; returns (lines, observations)."""
    observations = price_repo.fetch_observations(None)
    lines = resolve_search_lines(
        search.ndcs,
        observations,
        product_list=product_list_repo.fetch_lines(pharmacy_id),
        quantities=search.quantities,
    )
    return lines, observations


def get_recommendations(
    pharmacy_id: str,
    plan_id: Optional[str] = None,
    search: Optional[OptimizationSearch] = None,
    now: Optional[datetime] = None,
) -> OptimizationResult:
    """Recommendations for the pharmacy's product list, or for search terms when search is active."""
    if search is not None and search.active:
        lines, observations = _search_lines(pharmacy_id, search)
        result, _ = _run(pharmacy_id, plan_id, lines, now, "search", observations=observations)
        return result
    lines = product_list_repo.fetch_lines(pharmacy_id)
    result, _ = _run(pharmacy_id, plan_id, lines, now, "product_list")
    return result


def get_packages(
    pharmacy_id: str,
    plan_id: Optional[str] = None,
    search: Optional[OptimizationSearch] = None,
    now: Optional[datetime] = None,
) -> PackageRecommendation:
    """Recommendations grouped into one package per distributor.

    Uses the search terms when search is active, otherwise the pharmacy's product list.
    """
    if search is not None and search.active:
        lines, observations = _search_lines(pharmacy_id, search)
        result, total = _run(pharmacy_id, plan_id, lines, now, "packages_search", observations=observations)
    else:
        lines = product_list_repo.fetch_lines(pharmacy_id)
        result, total = _run(pharmacy_id, plan_id, lines, now, "packages")
    return build_packages(result, total_products=total)


def get_suggestions(
    pharmacy_id: str,
    items: Sequence[SuggestionItem],
    plan_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> OptimizationResult:
    """Recommendations for an ad-hoc list of items that is not saved to the product list."""
    lines = [ProductLine(ndc=i.ndc, product_name=i.product_name, quantity=i.quantity) for i in items]
    result, _ = _run(pharmacy_id, plan_id, lines, now, "suggestions")
    return result

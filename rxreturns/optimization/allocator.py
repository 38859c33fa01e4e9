"""Recommendation allocator: pick the best reverse distributor for each product line.

Pure function over three snapshots (product lines, price observations, distributor
usage) plus the clock. No I/O and no module state, so concurrent requests never
interact.

Pricing rules:
- A distributor's candidate price for an NDC is the mean of its observed unit prices.
- Lower unit price is better. expected_price <= worst_price always holds.
- A candidate whose newest observation is older than the staleness window is flagged
  available=False. Stale candidates are never dropped: they stay in the alternatives
  and count toward worst_price. They only lose the recommendation when an available
  candidate exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from rxreturns.models.data import PriceObservation, ProductLine, UsageSnapshot
from rxreturns.models.outputs import (
    AlternativeDistributor,
    DistributorUsage,
    EarningsComparison,
    OptimizationResult,
    Recommendation,
)
from rxreturns.utils.ndc import normalize_ndc

DEFAULT_STALE_AFTER = timedelta(days=30)
UNKNOWN_DISTRIBUTOR = "Unknown Distributor"


@dataclass
class Candidate:
    """One distributor's aggregated quote for one NDC."""

    name: str
    price: float
    last_observed_at: datetime
    observation_count: int
    available: bool


@dataclass
class AllocatedLine:
    """A recommendation plus its candidates in preference order (recommended first)."""

    recommendation: Recommendation
    preferences: list[Candidate]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def group_candidates(
    observations: Iterable[PriceObservation],
    now: datetime,
    stale_after: timedelta = DEFAULT_STALE_AFTER,
) -> dict[str, list[Candidate]]:
    """Group observations by normalized NDC and distributor; return candidates sorted by price.

    Observations with a non-positive price or a blank NDC are ignored. The sort is stable, so
    equal prices keep the order in which their distributor first appeared.
    """
    now = _as_utc(now)
    grouped: dict[str, dict[str, list[PriceObservation]]] = {}
    for obs in observations:
        ndc = normalize_ndc(obs.ndc)
        if not ndc or obs.unit_price <= 0:
            continue
        name = (obs.distributor or "").strip() or UNKNOWN_DISTRIBUTOR
        grouped.setdefault(ndc, {}).setdefault(name, []).append(obs)

    result: dict[str, list[Candidate]] = {}
    for ndc, per_distributor in grouped.items():
        candidates = []
        for name, rows in per_distributor.items():
            last_seen = max(_as_utc(r.observed_at) for r in rows)
            candidates.append(
                Candidate(
                    name=name,
                    price=sum(r.unit_price for r in rows) / len(rows),
                    last_observed_at=last_seen,
                    observation_count=len(rows),
                    available=(now - last_seen) <= stale_after,
                )
            )
        candidates.sort(key=lambda c: c.price)
        result[ndc] = candidates
    return result


def recommend_line(line: ProductLine, candidates: Sequence[Candidate]) -> AllocatedLine:
    """Choose the cheapest available candidate, or the cheapest overall when all are stale."""
    if not candidates:
        raise ValueError(f"No price candidates for NDC {line.ndc!r}")
    recommended = next((c for c in candidates if c.available), candidates[0])
    worst_price = max(c.price for c in candidates)
    others = [c for c in candidates if c is not recommended]

    recommendation = Recommendation(
        ndc=line.ndc,
        product_name=line.product_name or f"Product {line.ndc}",
        quantity=line.quantity,
        recommended_distributor=recommended.name,
        expected_price=recommended.price,
        worst_price=worst_price,
        available=recommended.available,
        alternative_distributors=[
            AlternativeDistributor(
                name=c.name,
                price=c.price,
                difference=c.price - recommended.price,
                available=c.available,
            )
            for c in others
        ],
        savings=(worst_price - recommended.price) * line.quantity,
    )
    # Fresh quotes before stale ones, each group by price
    preferences = [recommended] + [c for c in others if c.available] + [c for c in others if not c.available]
    return AllocatedLine(recommendation=recommendation, preferences=preferences)


def _usable(name: str, used: set[str], opened: set[str]) -> bool:
    return name in used or name in opened


def compare_strategies(lines: Sequence[AllocatedLine], usage: UsageSnapshot) -> EarningsComparison:
    """Cost the portfolio with one distributor for everything vs. the best distributor per line.

    Distributors already used this month are free to use again; a new one may be opened only
    while the plan's remaining capacity lasts. A line with no usable distributor is costed at
    its worst price in both strategies.
    """
    used = set(usage.used_distributors)
    capacity = usage.still_available

    opened: set[str] = set()
    multiple = 0.0
    # Highest-savings lines claim capacity first
    for line in sorted(lines, key=lambda ln: ln.recommendation.savings, reverse=True):
        rec = line.recommendation
        price: Optional[float] = None
        for cand in line.preferences:
            if _usable(cand.name, used, opened):
                price = cand.price
                break
            if len(opened) < capacity:
                opened.add(cand.name)
                price = cand.price
                break
        multiple += (price if price is not None else rec.worst_price) * rec.quantity

    names: list[str] = []
    for line in lines:
        for cand in line.preferences:
            if cand.name not in names:
                names.append(cand.name)
    eligible = [n for n in names if n in used or capacity >= 1]

    if eligible:
        totals = []
        for name in eligible:
            total = 0.0
            for line in lines:
                rec = line.recommendation
                quote = next((c.price for c in line.preferences if c.name == name), rec.worst_price)
                total += quote * rec.quantity
            totals.append(total)
        single = min(totals)
    else:
        single = sum(ln.recommendation.worst_price * ln.recommendation.quantity for ln in lines)

    return EarningsComparison(
        single_distributor_strategy=round(single, 2),
        multiple_distributors_strategy=round(multiple, 2),
        potential_additional_earnings=round(max(0.0, single - multiple), 2),
    )


def build_recommendations(
    product_lines: Sequence[ProductLine],
    observations: Iterable[PriceObservation],
    usage: Optional[UsageSnapshot] = None,
    now: Optional[datetime] = None,
    stale_after: timedelta = DEFAULT_STALE_AFTER,
) -> OptimizationResult:
    """Produce one recommendation per priced product line plus portfolio totals.

    Lines with quantity <= 0 are skipped. Lines whose NDC has no observation are omitted.
    An empty product list is not an error: the result is empty with zero totals.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    usage = usage or UsageSnapshot()

    lines = [ln for ln in product_lines if ln.quantity > 0]
    candidates_by_ndc = group_candidates(observations, now, stale_after) if lines else {}

    allocated: list[AllocatedLine] = []
    for line in lines:
        candidates = candidates_by_ndc.get(normalize_ndc(line.ndc))
        if not candidates:
            continue
        allocated.append(recommend_line(line, candidates))

    recommendations = [a.recommendation for a in allocated]
    return OptimizationResult(
        recommendations=recommendations,
        total_potential_savings=sum(r.savings for r in recommendations),
        generated_at=now,
        distributor_usage=DistributorUsage(
            used_this_month=usage.used_this_month,
            total_distributors=usage.total_distributors,
            still_available=usage.still_available,
        ),
        earnings_comparison=compare_strategies(allocated, usage),
    )

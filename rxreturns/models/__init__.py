"""Pydantic models for rxreturns."""

from rxreturns.models.data import PriceObservation, ProductLine, UsageSnapshot
from rxreturns.models.inputs import (
    CreditReportCreate,
    CreditReportItemIn,
    OptimizationSearch,
    ProductListItemCreate,
    SuggestionItem,
    SuggestionRequest,
)
from rxreturns.models.outputs import (
    AlternativeDistributor,
    CreditReportOut,
    DistributorOut,
    DistributorPackage,
    DistributorUsage,
    EarningsComparison,
    OptimizationResult,
    PackageItem,
    PackageRecommendation,
    PackageSummary,
    ProductListItemOut,
    Recommendation,
    success,
)

__all__ = [
    "PriceObservation",
    "ProductLine",
    "UsageSnapshot",
    "CreditReportCreate",
    "CreditReportItemIn",
    "OptimizationSearch",
    "ProductListItemCreate",
    "SuggestionItem",
    "SuggestionRequest",
    "AlternativeDistributor",
    "CreditReportOut",
    "DistributorOut",
    "DistributorPackage",
    "DistributorUsage",
    "EarningsComparison",
    "OptimizationResult",
    "PackageItem",
    "PackageRecommendation",
    "PackageSummary",
    "ProductListItemOut",
    "Recommendation",
    "success",
]

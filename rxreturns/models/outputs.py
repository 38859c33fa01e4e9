"""Response models. Serialized with camelCase keys (by_alias)."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AlternativeDistributor(CamelModel):
    """Non-recommended candidate; difference is price minus the recommended price."""

    name: str
    price: float
    difference: float
    available: bool


class Recommendation(CamelModel):
    """Suggested distributor for one product line."""

    ndc: str
    product_name: str
    quantity: int
    recommended_distributor: str
    expected_price: float
    worst_price: float
    available: bool
    alternative_distributors: list[AlternativeDistributor] = Field(default_factory=list)
    savings: float


class DistributorUsage(CamelModel):
    used_this_month: int
    total_distributors: int
    still_available: int


class EarningsComparison(CamelModel):
    single_distributor_strategy: float
    multiple_distributors_strategy: float
    potential_additional_earnings: float


class OptimizationResult(CamelModel):
    """Allocator output for one pharmacy."""

    recommendations: list[Recommendation] = Field(default_factory=list)
    total_potential_savings: float = 0.0
    generated_at: datetime
    distributor_usage: DistributorUsage
    earnings_comparison: EarningsComparison


class PackageItem(CamelModel):
    ndc: str
    product_name: str
    quantity: int
    price_per_unit: float
    total_value: float


class DistributorPackage(CamelModel):
    """Every product line that should ship to one distributor."""

    distributor: str
    items: list[PackageItem] = Field(default_factory=list)
    total_items: int
    total_estimated_value: float


class PackageSummary(CamelModel):
    products_with_pricing: int
    products_without_pricing: int
    distributors_used: int


class PackageRecommendation(CamelModel):
    packages: list[DistributorPackage] = Field(default_factory=list)
    total_products: int
    total_packages: int
    total_estimated_value: float
    generated_at: datetime
    summary: PackageSummary


class ProductListItemOut(CamelModel):
    id: int
    ndc: str
    product_name: Optional[str] = None
    quantity: int
    lot_number: Optional[str] = None
    expiration_date: Optional[date] = None
    notes: Optional[str] = None
    added_at: datetime


class DistributorOut(CamelModel):
    id: int
    code: str
    name: str
    is_active: bool


class CreditReportOut(CamelModel):
    """Result of ingesting one credit report."""

    id: int
    distributor: str
    report_date: date
    observations_recorded: int
    skipped_items: int
    total_credit_amount: float


def success(data: Any) -> dict[str, Any]:
    """Wrap a payload in the API's success envelope."""
    if isinstance(data, CamelModel):
        data = data.to_json_dict()
    elif isinstance(data, list):
        data = [d.to_json_dict() if isinstance(d, CamelModel) else d for d in data]
    return {"status": "success", "data": data}

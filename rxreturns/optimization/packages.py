"""Group recommendations into one shipment package per recommended distributor."""

from rxreturns.models.outputs import (
    DistributorPackage,
    OptimizationResult,
    PackageItem,
    PackageRecommendation,
    PackageSummary,
)


def build_packages(result: OptimizationResult, total_products: int) -> PackageRecommendation:
    """Bucket result.recommendations by distributor, most valuable package first.

    total_products is the number of product lines considered, so lines without pricing can be
    reported in the summary.
    """
    buckets: dict[str, list[PackageItem]] = {}
    for rec in result.recommendations:
        buckets.setdefault(rec.recommended_distributor, []).append(
            PackageItem(
                ndc=rec.ndc,
                product_name=rec.product_name,
                quantity=rec.quantity,
                price_per_unit=rec.expected_price,
                total_value=round(rec.expected_price * rec.quantity, 2),
            )
        )

    packages = [
        DistributorPackage(
            distributor=name,
            items=items,
            total_items=sum(i.quantity for i in items),
            total_estimated_value=round(sum(i.total_value for i in items), 2),
        )
        for name, items in buckets.items()
    ]
    packages.sort(key=lambda p: p.total_estimated_value, reverse=True)

    priced = len(result.recommendations)
    return PackageRecommendation(
        packages=packages,
        total_products=total_products,
        total_packages=len(packages),
        total_estimated_value=round(sum(p.total_estimated_value for p in packages), 2),
        generated_at=result.generated_at,
        summary=PackageSummary(
            products_with_pricing=priced,
            products_without_pricing=max(0, total_products - priced),
            distributors_used=len(packages),
        ),
    )

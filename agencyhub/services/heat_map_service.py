"""Product sales heat map."""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from ..domain.enums import HeatLevel, PerformanceBand
from ..schemas.dashboard import HeatMapCell
from ..schemas.records import Product, ProductSale
from .revenue_service import to_cents


def performance_band(intensity: float) -> PerformanceBand:
    """
    Bucket intensity into up/stable/down.

    A snapshot relative to the top product, not a trend over time.
    """
    if intensity > 66:
        return PerformanceBand.UP
    if intensity > 33:
        return PerformanceBand.STABLE
    return PerformanceBand.DOWN


def heat_level(intensity: float) -> HeatLevel:
    if intensity <= 0:
        return HeatLevel.NONE
    if intensity < 25:
        return HeatLevel.LOW
    if intensity < 50:
        return HeatLevel.MEDIUM
    if intensity < 75:
        return HeatLevel.HIGH
    return HeatLevel.VERY_HIGH


def intensity_of(revenue: Decimal, max_revenue: Decimal) -> float:
    """Revenue relative to the best product, clamped to [0, 100]."""
    if max_revenue <= 0:
        return 0.0
    score = float(revenue / max_revenue * 100)
    return min(max(score, 0.0), 100.0)


def build_heat_map(products: Sequence[Product], sales: Iterable[ProductSale]) -> List[HeatMapCell]:
    """
    Build one heat-map cell per product, in product order.

    Args:
        products: Product catalogue
        sales: Product sale records; sales for unknown products are ignored

    Returns:
        List of HeatMapCell with sales count, revenue and intensity
    """
    counts: Dict[int, int] = defaultdict(int)
    revenues: Dict[int, Decimal] = defaultdict(Decimal)
    for sale in sales:
        counts[sale.product_id] += 1
        revenues[sale.product_id] += sale.amount

    max_revenue = max((revenues[product.id] for product in products), default=Decimal("0"))

    cells = []
    for product in products:
        revenue = revenues[product.id]
        intensity = intensity_of(revenue, max_revenue)
        cells.append(
            HeatMapCell(
                product_id=product.id,
                product_name=product.name,
                sales_count=counts[product.id],
                revenue=to_cents(revenue),
                intensity=intensity,
                performance_band=performance_band(intensity).value,
                heat_level=heat_level(intensity).value,
            )
        )
    return cells

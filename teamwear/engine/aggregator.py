"""Per-product, per-size aggregation of normalized roster members."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Union

from teamwear.data.models import (
    ApparelSelection,
    Product,
    ProductSizeBreakdown,
    RosterMember,
    SizeEntry,
)
from teamwear.engine.sizes import size_label, size_sort_key
from teamwear.logging import get_logger

logger = get_logger(__name__)

ProductLike = Union[ApparelSelection, Product]


class AggregationMode(str, Enum):
    # Each member carries its own product (order line items)
    ORDER = "order"
    # One roster replicated across every selected apparel item
    DESIGN_REQUEST = "design_request"


@dataclass
class _SizeBucket:
    size: str
    quantity: int = 0
    jersey_numbers: List[str] = field(default_factory=list)
    player_names: List[str] = field(default_factory=list)
    player_ids: List[str] = field(default_factory=list)
    payment_statuses: List[bool] = field(default_factory=list)

    def add(self, member: RosterMember, quantity: int) -> None:
        self.quantity += quantity
        if member.jersey_number:
            self.jersey_numbers.append(member.jersey_number)
        if member.display_name:
            self.player_names.append(member.display_name)
        self.player_ids.append(member.player_id or "")
        self.payment_statuses.append(member.paid)

    def freeze(self) -> SizeEntry:
        return SizeEntry(
            size=self.size,
            quantity=self.quantity,
            jersey_numbers=list(self.jersey_numbers),
            player_names=list(self.player_names),
            player_ids=list(self.player_ids),
            payment_statuses=list(self.payment_statuses),
        )


@dataclass
class _ProductBucket:
    product_id: int
    product_name: str
    unit_price_cents: int
    images: List[str] = field(default_factory=list)
    sizes: Dict[str, _SizeBucket] = field(default_factory=dict)
    total_price_cents: int = 0

    def add(self, member: RosterMember, quantity: int, unit_price_cents: Optional[int] = None) -> None:
        size = size_label(member.size)
        if size not in self.sizes:
            self.sizes[size] = _SizeBucket(size=size)
        self.sizes[size].add(member, quantity)
        # Each line item contributes at its own price
        price = self.unit_price_cents if unit_price_cents is None else unit_price_cents
        self.total_price_cents += price * quantity

    def freeze(self) -> ProductSizeBreakdown:
        entries = [self.sizes[s] for s in sorted(self.sizes, key=size_sort_key)]
        total_quantity = sum(e.quantity for e in entries)
        return ProductSizeBreakdown(
            product_id=self.product_id,
            product_name=self.product_name,
            images=list(self.images),
            sizes=[e.freeze() for e in entries],
            total_quantity=total_quantity,
            unit_price_cents=self.unit_price_cents,
            total_price_cents=self.total_price_cents,
        )


def _product_name(product: ProductLike) -> str:
    return product.product_name if isinstance(product, ApparelSelection) else product.name


def _product_price(product: ProductLike) -> int:
    if isinstance(product, ApparelSelection):
        return product.unit_price_cents
    return product.base_price_cents


def _aggregate_order(
    products: Sequence[ProductLike], members: Iterable[RosterMember]
) -> Dict[int, _ProductBucket]:
    catalogue = {p.product_id: p for p in products}
    buckets: Dict[int, _ProductBucket] = {}
    for member in members:
        if member.product_id is None:
            logger.warning(f"Skipping roster member {member.player_id!r} without a product in order mode")
            continue
        bucket = buckets.get(member.product_id)
        if bucket is None:
            known = catalogue.get(member.product_id)
            name = member.product_name or (_product_name(known) if known else "")
            images = member.images or (known.images if known else [])
            bucket = _ProductBucket(
                product_id=member.product_id,
                product_name=name,
                unit_price_cents=member.unit_price_cents,
                images=list(images),
            )
            buckets[member.product_id] = bucket
        bucket.add(member, member.quantity, member.unit_price_cents)
    return buckets


def _aggregate_design_request(
    products: Sequence[ProductLike], members: Iterable[RosterMember]
) -> Dict[int, _ProductBucket]:
    members = list(members)
    buckets: Dict[int, _ProductBucket] = {}
    for product in products:
        if product.product_id in buckets:
            continue
        bucket = _ProductBucket(
            product_id=product.product_id,
            product_name=_product_name(product),
            unit_price_cents=_product_price(product),
            images=list(product.images),
        )
        # Every member needs one of every selected item
        for member in members:
            bucket.add(member, 1)
        buckets[product.product_id] = bucket
    return buckets


def aggregate(
    products: Optional[Sequence[ProductLike]],
    members: Iterable[RosterMember],
    mode: Union[AggregationMode, str] = AggregationMode.ORDER,
) -> List[ProductSizeBreakdown]:
    """Group roster members by product, then by size.

    Args:
        products: In design-request mode, the selected apparel (one
            breakdown each). In order mode, an optional catalogue used for
            names/images the line items lack.
        members: Normalized roster members. In order mode the first member
            seen for a product sets its displayed unit price, while the total
            sums every member's own line-item price.
        mode: AggregationMode.ORDER or AggregationMode.DESIGN_REQUEST.
    Returns:
        List[ProductSizeBreakdown]: One breakdown per product, in first-seen
        (order) or selection (design request) order, sizes in canonical order.
    """
    mode = AggregationMode(mode)
    products = list(products or [])
    if mode is AggregationMode.ORDER:
        buckets = _aggregate_order(products, members)
    else:
        buckets = _aggregate_design_request(products, members)

    breakdowns = [bucket.freeze() for bucket in buckets.values()]
    logger.debug(f"Aggregated {len(breakdowns)} product breakdowns in {mode.value} mode")
    return breakdowns

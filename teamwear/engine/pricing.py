"""Tiered quantity/fabric pricing.

All functions are pure: tier and fabric tables are supplied by the caller
(see teamwear.services.pricing for the data-access side).
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from teamwear.config import get_config
from teamwear.data.models import FabricOption, PriceQuote, PricingTier, Product, TierInfo
from teamwear.errors import FabricNotFoundError, InvalidQuantityError, PricingConfigurationError
from teamwear.logging import get_logger

logger = get_logger(__name__)

# Standard discount bands (min, max, % off base price), used when a product
# has no tier rows of its own
DISCOUNT_BANDS: Tuple[Tuple[int, Optional[int], Decimal], ...] = (
    (1, 4, Decimal("0")),
    (5, 9, Decimal("25")),
    (10, 24, Decimal("50")),
    (25, 49, Decimal("52.5")),
    (50, 99, Decimal("55")),
    (100, None, Decimal("57.5")),
)


def round_half_up(value) -> int:
    """Round to a whole minor unit, halves away from zero."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def band_tiers(base_price_cents: int) -> Tuple[PricingTier, ...]:
    """Build a tier table from DISCOUNT_BANDS applied to a base price."""
    tiers = []
    for low, high, discount in DISCOUNT_BANDS:
        price = round_half_up(Decimal(base_price_cents) * (100 - discount) / 100)
        tiers.append(PricingTier(min_quantity=low, max_quantity=high, price_per_unit_cents=price))
    return tuple(tiers)


def validate_tiers(tiers: Iterable[PricingTier]) -> Tuple[PricingTier, ...]:
    """Return the tiers ordered by min_quantity, or raise on a malformed table.

    A valid table starts at 1, has no gaps or overlaps, ends with exactly one
    open-ended tier, and never raises the per-unit price as quantity grows.
    """
    ordered = tuple(sorted(tiers, key=lambda t: t.min_quantity))
    if not ordered:
        raise PricingConfigurationError("Tier table is empty")
    if ordered[0].min_quantity != 1:
        raise PricingConfigurationError(
            f"Tier table must start at quantity 1, starts at {ordered[0].min_quantity}"
        )

    for prev, nxt in zip(ordered, ordered[1:]):
        if prev.max_quantity is None:
            raise PricingConfigurationError(
                f"Open-ended tier starting at {prev.min_quantity} is not the last tier"
            )
        if prev.max_quantity < prev.min_quantity:
            raise PricingConfigurationError(
                f"Tier [{prev.min_quantity}, {prev.max_quantity}] has max below min"
            )
        if nxt.min_quantity <= prev.max_quantity:
            raise PricingConfigurationError(
                f"Tiers overlap at quantity {nxt.min_quantity}"
            )
        if nxt.min_quantity > prev.max_quantity + 1:
            raise PricingConfigurationError(
                f"Gap in tier table between {prev.max_quantity} and {nxt.min_quantity}"
            )
        if nxt.price_per_unit_cents > prev.price_per_unit_cents:
            raise PricingConfigurationError(
                f"Per-unit price increases at quantity {nxt.min_quantity}"
            )

    if ordered[-1].max_quantity is not None:
        raise PricingConfigurationError(
            f"Last tier must be open-ended, ends at {ordered[-1].max_quantity}"
        )
    return ordered


def select_tier(tiers: Sequence[PricingTier], quantity: int) -> PricingTier:
    """Pick the single tier containing `quantity` from a validated table."""
    matches = [t for t in tiers if t.contains(quantity)]
    if len(matches) != 1:
        raise PricingConfigurationError(
            f"Expected exactly one tier for quantity {quantity}, found {len(matches)}"
        )
    return matches[0]


def resolve_fabric(
    fabrics: Iterable[FabricOption],
    fabric_id: Optional[str],
    baseline_fabric_name: Optional[str] = None,
) -> FabricOption:
    """Find the requested fabric; None selects the baseline fabric by name."""
    fabrics = list(fabrics)
    if fabric_id is None:
        baseline = baseline_fabric_name or get_config().baseline_fabric_name
        for fabric in fabrics:
            if fabric.name == baseline:
                logger.debug(f"No fabric selected, using baseline '{baseline}' ({fabric.fabric_id})")
                return fabric
        raise FabricNotFoundError(None)

    for fabric in fabrics:
        if fabric.fabric_id == fabric_id:
            return fabric
    raise FabricNotFoundError(fabric_id)


class PricingCalculator:
    """Quantity/fabric price calculator over caller-supplied tables.

    Tables are read-only; the calculator keeps no state between calls.

    Args:
        fabrics: Every selectable fabric.
        tiers_by_product: Tier rows per product id. Products without rows
            are priced with DISCOUNT_BANDS over their base price.
        currency: Currency code reported on quotes. Defaults to config.
        baseline_fabric_name: Fabric auto-selected when none is chosen.
            Defaults to config.
    """

    def __init__(
        self,
        fabrics: Iterable[FabricOption],
        tiers_by_product: Optional[Mapping[int, Sequence[PricingTier]]] = None,
        currency: Optional[str] = None,
        baseline_fabric_name: Optional[str] = None,
    ) -> None:
        config = get_config()
        self.fabrics = tuple(fabrics)
        self.tiers_by_product = dict(tiers_by_product or {})
        self.currency = currency or config.currency
        self.baseline_fabric_name = baseline_fabric_name or config.baseline_fabric_name

    def tiers_for(self, product: Product) -> Tuple[PricingTier, ...]:
        rows = self.tiers_by_product.get(product.product_id)
        if not rows:
            logger.debug(f"No tier rows for product {product.product_id}, using discount bands")
            return band_tiers(product.base_price_cents)
        return validate_tiers(rows)

    def calculate(self, product: Product, quantity: int, fabric_id: Optional[str] = None) -> PriceQuote:
        """Price `quantity` units of `product` in the given fabric.

        Raises:
            InvalidQuantityError: quantity is below 1.
            FabricNotFoundError: the fabric (or baseline fabric) is unknown.
            PricingConfigurationError: the product's tier table is malformed.
        """
        if quantity < 1:
            raise InvalidQuantityError(quantity)

        fabric = resolve_fabric(self.fabrics, fabric_id, self.baseline_fabric_name)
        tiers = self.tiers_for(product)
        tier = select_tier(tiers, quantity)

        modifier = fabric.price_modifier_cents
        unit_price = tier.price_per_unit_cents + modifier
        total_price = unit_price * quantity
        # tiers[0] covers quantity 1 and carries the highest per-unit price
        retail_price = (tiers[0].price_per_unit_cents + modifier) * quantity
        savings = max(0, retail_price - total_price)

        return PriceQuote(
            product_id=product.product_id,
            quantity=quantity,
            fabric_id=fabric.fabric_id,
            base_price_cents=product.base_price_cents,
            fabric_modifier_cents=modifier,
            unit_price_cents=unit_price,
            subtotal_cents=total_price,
            total_price_cents=total_price,
            retail_price_cents=retail_price,
            savings_cents=savings,
            tier=TierInfo.from_tier(tier),
            currency=self.currency,
        )

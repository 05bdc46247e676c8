from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PricingTier(BaseModel):
    """Quantity range [min_quantity, max_quantity] mapped to a per-unit price."""
    model_config = ConfigDict(frozen=True)

    min_quantity: int = Field(ge=1, description="First quantity covered by the tier")
    max_quantity: Optional[int] = Field(default=None, description="Last quantity covered; None means open-ended")
    price_per_unit_cents: int = Field(ge=0, description="Per-unit price in minor currency units")

    def contains(self, quantity: int) -> bool:
        if quantity < self.min_quantity:
            return False
        return self.max_quantity is None or quantity <= self.max_quantity


class TierInfo(BaseModel):
    """Tier applied to a quote, as exposed by the pricing query contract."""
    model_config = ConfigDict(frozen=True)

    min_quantity: int
    max_quantity: Optional[int] = None
    price_per_unit_cents: int

    @classmethod
    def from_tier(cls, tier: PricingTier) -> "TierInfo":
        return cls(
            min_quantity=tier.min_quantity,
            max_quantity=tier.max_quantity,
            price_per_unit_cents=tier.price_per_unit_cents,
        )


class PricingQuery(BaseModel):
    """Request parameters of a pricing query."""
    model_config = ConfigDict(frozen=True)

    product_id: int = Field(description="Product to price")
    quantity: int = Field(ge=1, description="Number of units")
    fabric_id: Optional[str] = Field(default=None, description="Fabric; None selects the baseline fabric")
    bundle_code: Optional[str] = Field(default=None, description="Active bundle, if any")


class PriceQuote(BaseModel):
    """Result of a pricing calculation, optionally adjusted by a bundle."""
    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: int
    fabric_id: str
    base_price_cents: int
    fabric_modifier_cents: int
    unit_price_cents: int
    subtotal_cents: int = Field(description="unit_price_cents * quantity, before any bundle discount")
    total_price_cents: int
    retail_price_cents: int
    savings_cents: int
    tier: TierInfo
    currency: str = "CLP"
    bundle_code: Optional[str] = None
    bundle_discount_pct: float = 0.0
    bundle_discount_cents: int = 0

"""Bundle selection and discount application."""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from teamwear.data.models import Bundle, PriceQuote
from teamwear.engine.pricing import round_half_up
from teamwear.errors import BundleNotFoundError
from teamwear.logging import get_logger

logger = get_logger(__name__)


class BundleSelection(BaseModel):
    """Which bundle (if any) is active. At most one is active at a time."""
    model_config = ConfigDict(frozen=True)

    active_code: Optional[str] = None

    def toggle(self, code: str) -> "BundleSelection":
        """Select `code`, deselecting any other; selecting the active bundle clears it."""
        if self.active_code == code:
            return BundleSelection(active_code=None)
        return BundleSelection(active_code=code)

    def active_bundle(self, bundles: Iterable[Bundle]) -> Optional[Bundle]:
        if self.active_code is None:
            return None
        return find_bundle(bundles, self.active_code)

    def for_product(self, bundles: Iterable[Bundle], type_slug: Optional[str]) -> "BundleSelection":
        """Drop the active bundle when the product being priced is not one of its components."""
        try:
            bundle = self.active_bundle(bundles)
        except BundleNotFoundError:
            logger.warning(f"Active bundle {self.active_code} is no longer offered, clearing selection")
            return BundleSelection(active_code=None)
        if bundle is None or applies_to(bundle, type_slug):
            return self
        logger.debug(f"Bundle {bundle.code} does not cover {type_slug!r}, clearing selection")
        return BundleSelection(active_code=None)


def find_bundle(bundles: Iterable[Bundle], code: str) -> Bundle:
    for bundle in bundles:
        if bundle.code == code:
            return bundle
    raise BundleNotFoundError(code)


def apply_bundle(quote: PriceQuote, bundle: Optional[Bundle]) -> PriceQuote:
    """Apply a bundle's percentage discount to a quote's subtotal.

    The bundle's components are not priced here. Passing None returns the
    quote unchanged.
    """
    if bundle is None:
        return quote

    pct = Decimal(str(bundle.discount_pct))
    total = round_half_up(Decimal(quote.subtotal_cents) * (100 - pct) / 100)
    discount = quote.subtotal_cents - total
    logger.debug(
        f"Bundle {bundle.code} ({bundle.discount_pct}%) on product {quote.product_id}: "
        f"{quote.subtotal_cents} -> {total}"
    )
    return quote.model_copy(update={
        "total_price_cents": total,
        "savings_cents": max(0, quote.retail_price_cents - total),
        "bundle_code": bundle.code,
        "bundle_discount_pct": bundle.discount_pct,
        "bundle_discount_cents": discount,
    })


def missing_component_types(bundle: Bundle, available_type_slugs: Iterable[str]) -> List[str]:
    """Component garment types of `bundle` that are not among the available ones."""
    available = set(available_type_slugs)
    missing = []
    for component in bundle.components:
        if component.type_slug not in available and component.type_slug not in missing:
            missing.append(component.type_slug)
    return missing


def is_eligible(bundle: Bundle, available_type_slugs: Iterable[str]) -> bool:
    return not missing_component_types(bundle, available_type_slugs)


def applies_to(bundle: Bundle, type_slug: Optional[str]) -> bool:
    """Whether a product of garment type `type_slug` is one of the bundle's components."""
    if not type_slug:
        return False
    return any(component.type_slug == type_slug for component in bundle.components)

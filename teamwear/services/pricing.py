"""Pricing queries against the data store, and a last-write-wins quote session."""
from __future__ import annotations

import asyncio
from typing import Optional

from pydantic import BaseModel, ConfigDict

from teamwear.data.interface import DataAccess
from teamwear.data.models import PriceQuote, PricingQuery
from teamwear.data.util import get_data_access
from teamwear.engine.bundles import apply_bundle, find_bundle
from teamwear.engine.pricing import PricingCalculator
from teamwear.errors import ProductNotFoundError
from teamwear.logging import get_logger
from teamwear.services.util import LatestOnly, call_blocking

logger = get_logger(__name__)


class PricingService:
    """Answers pricing queries from the product, tier, fabric and bundle tables."""

    def __init__(self, data_access: Optional[DataAccess] = None) -> None:
        self.data_access = data_access or get_data_access()

    def quote(self, query: PricingQuery) -> PriceQuote:
        """Price a query synchronously.

        Raises:
            ProductNotFoundError: unknown product.
            BundleNotFoundError: unknown bundle code.
            FabricNotFoundError, PricingConfigurationError: see PricingCalculator.
        """
        product = self.data_access.get_product(query.product_id)
        if product is None:
            raise ProductNotFoundError(query.product_id)

        calculator = PricingCalculator(
            fabrics=self.data_access.list_fabrics(),
            tiers_by_product={product.product_id: self.data_access.list_pricing_tiers(product.product_id)},
        )
        quote = calculator.calculate(product, query.quantity, query.fabric_id)

        if query.bundle_code:
            bundle = find_bundle(self.data_access.list_bundles(), query.bundle_code)
            quote = apply_bundle(quote, bundle)

        logger.info(
            f"Quoted product {quote.product_id} x{quote.quantity} ({quote.fabric_id}): "
            f"{quote.total_price_cents} {quote.currency}"
        )
        return quote

    async def fetch_quote(self, query: PricingQuery, timeout: Optional[float] = None) -> PriceQuote:
        """Async boundary around `quote`; the store is read in a worker thread."""
        return await call_blocking(self.quote, query, timeout=timeout)


class QuoteState(BaseModel):
    """Snapshot of a pricing session. Replaced wholesale, never mutated."""
    model_config = ConfigDict(frozen=True)

    query: Optional[PricingQuery] = None
    quote: Optional[PriceQuote] = None
    error: Optional[str] = None
    generation: int = 0


class PricingSession:
    """Interactive quote state driven by successive queries.

    Each request supersedes the previous one: a still-running request is
    cancelled and its response is never applied. A failed request keeps
    the last good quote and records the error.
    """

    def __init__(self, service: PricingService) -> None:
        self.service = service
        self.state = QuoteState()
        self._latest = LatestOnly()

    async def request(self, query: PricingQuery) -> QuoteState:
        generation, task = self._latest.start(self.service.fetch_quote(query))
        try:
            quote = await task
        except asyncio.CancelledError:
            if self._latest.is_current(generation):
                raise
            logger.debug(f"Pricing request {generation} superseded")
            return self.state
        except Exception as e:
            if not self._latest.is_current(generation):
                return self.state
            logger.error(f"Pricing request {generation} failed for product {query.product_id}: {e}")
            self.state = QuoteState(query=query, quote=self.state.quote, error=str(e) or type(e).__name__, generation=generation)
            return self.state

        if not self._latest.is_current(generation):
            logger.debug(f"Discarding stale pricing response {generation}")
            return self.state
        self.state = QuoteState(query=query, quote=quote, generation=generation)
        return self.state

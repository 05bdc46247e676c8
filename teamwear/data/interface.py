from __future__ import annotations

from typing import List, Optional, Protocol

from .models import (
    # Catalogue and pricing
    Bundle,
    FabricOption,
    PricingTier,
    Product,
    Design,
    # Orders and payments
    OrderHeader,
    OrderLineItem,
    PaymentContribution,
    PlayerInfoSubmission,
    # Teams and design requests
    DesignRequest,
    DesignRequestRosterRow,
    Team,
)


# ---- Data access protocol ----

class DataAccess(Protocol):
    """
    Backend-agnostic read contract for the pricing and size-allocation engine.

    The engine never writes back. Lookups by id return None when the record
    does not exist; list queries return an empty list.
    """

    # Catalogue and pricing tables

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get a single product."""
        ...

    def list_products(self) -> List[Product]:
        """List all products."""
        ...

    def list_fabrics(self) -> List[FabricOption]:
        """List all fabrics, in display order."""
        ...

    def list_pricing_tiers(self, product_id: int) -> List[PricingTier]:
        """List the tier rows configured for a product (may be empty)."""
        ...

    def list_bundles(self) -> List[Bundle]:
        """List all bundles."""
        ...

    def list_designs(self) -> List[Design]:
        """List all catalogue designs."""
        ...

    # Orders and payments

    def get_order(self, order_id: str) -> Optional[OrderHeader]:
        """Get an order header."""
        ...

    def list_order_items(self, order_id: str) -> List[OrderLineItem]:
        """List the line items of an order."""
        ...

    def list_contributions(self, order_id: str) -> List[PaymentContribution]:
        """List payment contributions towards an order."""
        ...

    # Teams, rosters and design requests

    def get_team(self, team_id: str) -> Optional[Team]:
        """Get a team with its jersey display settings."""
        ...

    def list_player_submissions(self, team_id: str) -> List[PlayerInfoSubmission]:
        """List the player info submissions of a team."""
        ...

    def get_design_request(self, design_request_id: int) -> Optional[DesignRequest]:
        """Get a design request with its selected apparel."""
        ...

    def list_roster_members(self, design_request_id: int) -> List[DesignRequestRosterRow]:
        """List the roster rows of a design request."""
        ...

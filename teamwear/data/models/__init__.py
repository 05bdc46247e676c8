from .data_filters import DesignFilters

from .products import Product
from .fabrics import FabricOption
from .pricing import PricingTier, TierInfo, PricingQuery, PriceQuote
from .bundles import Bundle, BundleComponent
from .orders import (
    PAID_STATUSES,
    OrderHeader,
    OrderLineItem,
    PlayerInfoSubmission,
    PaymentContribution,
)
from .teams import JerseyDisplayConfig, JerseyNameStyle, Team
from .design_requests import ApparelSelection, DesignRequest, DesignRequestRosterRow
from .roster import RosterMember
from .breakdowns import SizeEntry, ProductSizeBreakdown
from .designs import Design

__all__ = [
    # Filter classes
    "DesignFilters",
    # Catalogue and pricing
    "Product",
    "FabricOption",
    "PricingTier",
    "TierInfo",
    "PricingQuery",
    "PriceQuote",
    "Bundle",
    "BundleComponent",
    # Orders and payments
    "PAID_STATUSES",
    "OrderHeader",
    "OrderLineItem",
    "PlayerInfoSubmission",
    "PaymentContribution",
    # Teams and design requests
    "JerseyDisplayConfig",
    "JerseyNameStyle",
    "Team",
    "ApparelSelection",
    "DesignRequest",
    "DesignRequestRosterRow",
    # View models
    "RosterMember",
    "SizeEntry",
    "ProductSizeBreakdown",
    "Design",
]

"""Exception taxonomy for the pricing and size-allocation engine.

Configuration errors are fatal and must reach the caller. Missing-data gaps
(no contribution, no submission, no size) are never raised; they resolve to
documented defaults inside the engine.
"""


class TeamwearError(Exception):
    """Base class for all engine errors."""


class PricingConfigurationError(TeamwearError):
    """The tier table for a product is malformed (gap, overlap, no open tier)."""


class FabricNotFoundError(TeamwearError, LookupError):
    """The requested fabric (or the baseline fabric) does not exist."""

    def __init__(self, fabric_id):
        self.fabric_id = fabric_id
        if fabric_id is None:
            super().__init__("Baseline fabric not found")
        else:
            super().__init__(f"Fabric not found: {fabric_id}")


class ProductNotFoundError(TeamwearError, LookupError):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class BundleNotFoundError(TeamwearError, LookupError):
    def __init__(self, bundle_code):
        self.bundle_code = bundle_code
        super().__init__(f"Bundle not found: {bundle_code}")


class OrderNotFoundError(TeamwearError, LookupError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class DesignRequestNotFoundError(TeamwearError, LookupError):
    def __init__(self, design_request_id):
        self.design_request_id = design_request_id
        super().__init__(f"Design request not found: {design_request_id}")


class InvalidQuantityError(TeamwearError, ValueError):
    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f"Invalid quantity: {quantity} (must be >= 1)")

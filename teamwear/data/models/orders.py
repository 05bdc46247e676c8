from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import OptionalText

# Contribution statuses that count as paid
PAID_STATUSES = frozenset({"completed", "approved"})


class OrderHeader(BaseModel):
    """Team order header."""
    model_config = ConfigDict(frozen=True)

    order_id: str = Field(description="Unique order identifier")
    team_id: Optional[str] = Field(default=None, description="Team that owns the order")
    order_number: Optional[str] = Field(default=None, description="Human-readable order number")
    status: str = Field(default="pending", description="Order lifecycle status")
    total_amount_cents: int = Field(default=0, description="Order total in minor currency units")


class OrderLineItem(BaseModel):
    """Order line item, optionally assigned to a player."""
    model_config = ConfigDict(frozen=True)

    item_id: str = Field(description="Unique line item identifier")
    order_id: str = Field(description="Order this item belongs to")
    product_id: int = Field(description="Product identifier")
    product_name: str = Field(default="", description="Product name at time of order")
    quantity: Optional[int] = Field(default=None, description="Units ordered; missing means 1")
    unit_price_cents: int = Field(default=0, description="Unit price at time of order")
    player_id: OptionalText = Field(default=None, description="Assigned player account id")
    player_name: OptionalText = Field(default=None, description="Assigned player name")
    jersey_number: OptionalText = Field(default=None, description="Jersey number printed on the item")
    customization: Dict[str, Any] = Field(default_factory=dict, description="Customization payload (size, position, ...)")
    images: List[str] = Field(default_factory=list, description="Product images")

    @property
    def effective_quantity(self) -> int:
        return self.quantity or 1

    @property
    def size(self) -> Optional[str]:
        value = self.customization.get("size")
        if value is None:
            return None
        return str(value).strip() or None

    @property
    def position(self) -> Optional[str]:
        value = self.customization.get("position")
        if value is None:
            return None
        return str(value).strip() or None


class PlayerInfoSubmission(BaseModel):
    """Size/number details a player submitted for their team."""
    model_config = ConfigDict(frozen=True)

    user_id: str = Field(description="Submitting player's account id")
    team_id: Optional[str] = Field(default=None, description="Team the submission belongs to")
    player_name: OptionalText = Field(default=None, description="Player name")
    jersey_number: OptionalText = Field(default=None, description="Requested jersey number")
    size: OptionalText = Field(default=None, description="Garment size")
    position: OptionalText = Field(default=None, description="Playing position")


class PaymentContribution(BaseModel):
    """Payment made by one payer towards an order."""
    model_config = ConfigDict(frozen=True)

    contribution_id: str = Field(description="Unique contribution identifier")
    order_id: str = Field(description="Order being paid")
    user_id: OptionalText = Field(default=None, description="Payer account id")
    amount_cents: int = Field(default=0, description="Amount in minor currency units")
    status: str = Field(default="pending", description="pending, approved, completed, rejected, cancelled or refunded")

    @property
    def is_paid(self) -> bool:
        return self.status in PAID_STATUSES

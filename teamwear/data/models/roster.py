from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RosterMember(BaseModel):
    """Canonical per-player record produced by the roster normalizer."""
    model_config = ConfigDict(frozen=True)

    player_id: Optional[str] = Field(default=None, description="Account id, or member id when no account exists")
    player_name: Optional[str] = Field(default=None, description="Identity name, never substituted")
    display_name: Optional[str] = Field(default=None, description="Name shown/printed after the jersey display policy")
    size: str = Field(description="Size label, or the missing-size sentinel")
    jersey_number: Optional[str] = Field(default=None, description="Jersey number")
    position: Optional[str] = Field(default=None, description="Playing position")
    paid: bool = Field(default=False, description="Whether a completed/approved contribution exists")

    # Order linkage, only set for members sourced from order line items
    product_id: Optional[int] = Field(default=None, description="Ordered product")
    product_name: Optional[str] = Field(default=None, description="Ordered product name")
    quantity: int = Field(default=1, ge=1, description="Units ordered for this member")
    unit_price_cents: int = Field(default=0, description="Unit price of the line item")
    images: List[str] = Field(default_factory=list, description="Product images of the line item")

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SizeEntry(BaseModel):
    """Members of one product grouped under one size.

    player_ids and payment_statuses get one entry per member and are the
    alignment key; jersey_numbers and player_names only hold present values.
    """
    model_config = ConfigDict(frozen=True)

    size: str = Field(description="Size label (case preserved)")
    quantity: int = Field(default=0, description="Units in this size")
    jersey_numbers: List[str] = Field(default_factory=list)
    player_names: List[str] = Field(default_factory=list)
    player_ids: List[str] = Field(default_factory=list)
    payment_statuses: List[bool] = Field(default_factory=list)


class ProductSizeBreakdown(BaseModel):
    """Per-product, per-size view model used for display and export."""
    model_config = ConfigDict(frozen=True)

    product_id: int = Field(description="Product identifier")
    product_name: str = Field(description="Product name")
    images: List[str] = Field(default_factory=list, description="Product images")
    sizes: List[SizeEntry] = Field(default_factory=list, description="Size entries in canonical size order")
    total_quantity: int = Field(default=0, description="Sum of size quantities")
    unit_price_cents: int = Field(default=0, description="Unit price in minor currency units")
    total_price_cents: int = Field(default=0, description="Sum of unit price times quantity over every grouped item")

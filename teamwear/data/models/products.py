from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Catalogue product as seen by a pricing request."""
    model_config = ConfigDict(frozen=True)

    product_id: int = Field(description="Unique product identifier")
    name: str = Field(description="Display name")
    base_price_cents: int = Field(ge=0, description="Base price in minor currency units")
    product_type_slug: Optional[str] = Field(default=None, description="Garment type (jersey, shorts, ...)")
    is_bundle: bool = Field(default=False, description="Whether the product is sold as a bundle")
    images: List[str] = Field(default_factory=list, description="Image URLs, first one is the cover")

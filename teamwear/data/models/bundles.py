from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class BundleComponent(BaseModel):
    """Garment type and how many of it a bundle includes."""
    model_config = ConfigDict(frozen=True)

    quantity: int = Field(ge=1, description="Units of this garment type per bundle")
    type_slug: str = Field(description="Garment type slug (jersey, shorts, socks, ...)")


class Bundle(BaseModel):
    """Named set of garment types sold together at a percentage discount."""
    model_config = ConfigDict(frozen=True)

    bundle_id: int = Field(description="Unique bundle identifier")
    code: str = Field(description="Short bundle code (B1, B5, ...)")
    name: str = Field(description="Display name")
    components: List[BundleComponent] = Field(default_factory=list, description="Descriptive component list")
    discount_pct: float = Field(default=0.0, ge=0, le=100, description="Percentage discount on the subtotal")

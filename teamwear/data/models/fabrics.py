from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FabricOption(BaseModel):
    """Selectable fabric with its per-unit price delta."""
    model_config = ConfigDict(frozen=True)

    fabric_id: str = Field(description="Unique fabric identifier")
    name: str = Field(description="Fabric name; the baseline fabric is matched by name")
    price_modifier_cents: int = Field(default=0, ge=0, description="Per-unit price delta in minor currency units")
    composition: Optional[str] = Field(default=None, description="Material composition")
    gsm: Optional[int] = Field(default=None, description="Fabric weight in grams per square metre")
    description: Optional[str] = Field(default=None, description="Free-form description")
    use_case: Optional[str] = Field(default=None, description="Recommended use")
    sort_order: int = Field(default=0, description="Display order")

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Design(BaseModel):
    """Catalogue design, as listed and exported by the admin screens."""
    model_config = ConfigDict(frozen=True)

    design_id: str = Field(description="Unique design identifier")
    name: str = Field(description="Design name")
    slug: str = Field(description="URL slug")
    active: bool = Field(default=True, description="Visible in the catalogue")
    featured: bool = Field(default=False, description="Highlighted in the catalogue")
    sports: List[str] = Field(default_factory=list, description="Sport slugs the design applies to")
    mockup_count: Optional[int] = Field(default=None, description="Number of mockup images")

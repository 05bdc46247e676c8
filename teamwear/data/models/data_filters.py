from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DesignFilters(BaseModel):
    """Filter state for the design catalogue, replaced as a whole on every change."""
    model_config = ConfigDict(frozen=True)

    search: Optional[str] = Field(default=None, description="Case-insensitive match on name or slug")
    sport: Optional[str | list[str]] = Field(default=None, description="Sport filter (single sport or list of sports)")
    active_only: bool = Field(default=False, description="Only active designs")
    featured_only: bool = Field(default=False, description="Only featured designs")

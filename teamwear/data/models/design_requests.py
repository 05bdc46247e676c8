from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .common import OptionalText
from .teams import JerseyNameStyle


class ApparelSelection(BaseModel):
    """Apparel item selected for a design request, with its stored price."""
    model_config = ConfigDict(frozen=True)

    product_id: int = Field(description="Product identifier")
    product_name: str = Field(description="Product name")
    unit_price_cents: int = Field(default=0, ge=0, description="Stored unit price in minor currency units")
    images: List[str] = Field(default_factory=list, description="Product images")


class DesignRequest(BaseModel):
    """Design request placed by a team before an itemized order exists."""
    model_config = ConfigDict(frozen=True)

    design_request_id: int = Field(description="Unique design request identifier")
    team_id: Optional[str] = Field(default=None, description="Requesting team")
    status: str = Field(default="pending", description="Design request status")
    selected_apparel: List[ApparelSelection] = Field(default_factory=list, description="Apparel every roster member needs")
    jersey_name_style: Optional[JerseyNameStyle] = Field(default=None, description="Override of the team's jersey name style")
    jersey_team_name: Optional[str] = Field(default=None, description="Override of the team's printed team name")


class DesignRequestRosterRow(BaseModel):
    """Raw roster record of a design request.

    Accepts both the current column names and the legacy ones
    (name/full_name, number, size_label, paid).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    member_id: str = Field(
        validation_alias=AliasChoices("member_id", "id"),
        description="Roster member identifier",
    )
    user_id: OptionalText = Field(default=None, description="Player account id, when the member has one")
    player_name: OptionalText = Field(
        default=None,
        validation_alias=AliasChoices("player_name", "name", "full_name"),
        description="Player name",
    )
    jersey_number: OptionalText = Field(
        default=None,
        validation_alias=AliasChoices("jersey_number", "number"),
        description="Jersey number",
    )
    size: OptionalText = Field(
        default=None,
        validation_alias=AliasChoices("size", "size_label"),
        description="Garment size",
    )
    position: OptionalText = Field(default=None, description="Playing position")
    payment_paid: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("payment_paid", "paid"),
        description="Explicit paid flag, when the roster tracks it",
    )

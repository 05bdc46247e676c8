from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

JerseyNameStyle = Literal["player_name", "team_name", "none"]


class JerseyDisplayConfig(BaseModel):
    """Policy for the name displayed (and printed) for each roster member."""
    model_config = ConfigDict(frozen=True)

    style: JerseyNameStyle = Field(default="player_name", description="player_name, team_name or none")
    team_name: Optional[str] = Field(default=None, max_length=50, description="Name shown for every member when style is team_name")

    @model_validator(mode="after")
    def _require_team_name(self) -> "JerseyDisplayConfig":
        if self.style == "team_name" and not (self.team_name and self.team_name.strip()):
            raise ValueError("team_name is required when style is 'team_name'")
        return self


class Team(BaseModel):
    """Team with its jersey display settings."""
    model_config = ConfigDict(frozen=True)

    team_id: str = Field(description="Unique team identifier")
    name: str = Field(description="Team name")
    slug: Optional[str] = Field(default=None, description="URL slug")
    jersey_name_style: Optional[JerseyNameStyle] = Field(default=None, description="Configured jersey name style")
    jersey_team_name: Optional[str] = Field(default=None, description="Team name printed when style is team_name")

"""Roster record normalization.

Order line items (joined with player submissions) and design-request roster
rows are two differently shaped sources of the same thing: one player with a
size, a jersey number and a payment status. `normalize` turns either source
into a list of RosterMember records.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, Iterable, List, Literal, Mapping, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from teamwear.config import get_config
from teamwear.data.models import (
    DesignRequestRosterRow,
    JerseyDisplayConfig,
    OrderLineItem,
    PaymentContribution,
    PlayerInfoSubmission,
    RosterMember,
)
from teamwear.engine.sizes import size_label
from teamwear.logging import get_logger

logger = get_logger(__name__)


class OrderRosterSource(BaseModel):
    """Confirmed order items plus the team's player submissions."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["order"] = "order"
    items: List[OrderLineItem] = Field(default_factory=list)
    submissions: List[PlayerInfoSubmission] = Field(default_factory=list)
    contributions: List[PaymentContribution] = Field(default_factory=list)


class DesignRequestRosterSource(BaseModel):
    """Roster rows of a design request; authoritative on their own."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["design_request"] = "design_request"
    members: List[DesignRequestRosterRow] = Field(default_factory=list)
    contributions: List[PaymentContribution] = Field(default_factory=list)


RosterSource = Annotated[
    Union[OrderRosterSource, DesignRequestRosterSource],
    Field(discriminator="kind"),
]

_source_adapter = TypeAdapter(RosterSource)


def parse_source(data: Mapping[str, Any]) -> Union[OrderRosterSource, DesignRequestRosterSource]:
    """Build a roster source from raw records tagged with `kind`."""
    return _source_adapter.validate_python(data)


def paid_player_ids(contributions: Iterable[PaymentContribution]) -> Set[str]:
    return {c.user_id for c in contributions if c.user_id and c.is_paid}


def is_paid(player_id: Optional[str], contributions: Iterable[PaymentContribution]) -> bool:
    """True only if a completed/approved contribution exists for the player."""
    if not player_id:
        return False
    return player_id in paid_player_ids(contributions)


def display_name_for(name: Optional[str], jersey_display: JerseyDisplayConfig) -> Optional[str]:
    if jersey_display.style == "team_name":
        return jersey_display.team_name.strip()
    if jersey_display.style == "none":
        return get_config().no_name_placeholder
    return name


def jersey_sort_value(number: Optional[str]) -> int:
    """Jersey number as an int; missing or non-numeric numbers count as 0."""
    if number is None:
        return 0
    try:
        return int(str(number).strip())
    except ValueError:
        return 0


def sort_roster(members: Iterable[RosterMember]) -> List[RosterMember]:
    """Order members by jersey number, keeping source order for ties."""
    return sorted(members, key=lambda m: jersey_sort_value(m.jersey_number))


def _normalize_order(source: OrderRosterSource, jersey_display: JerseyDisplayConfig) -> List[RosterMember]:
    submissions: Dict[str, PlayerInfoSubmission] = {}
    for submission in source.submissions:
        submissions.setdefault(submission.user_id, submission)
    paid = paid_player_ids(source.contributions)

    members = []
    for item in source.items:
        submission = submissions.get(item.player_id) if item.player_id else None
        # The order item is authoritative; the submission only fills gaps
        name = item.player_name or (submission.player_name if submission else None)
        number = item.jersey_number or (submission.jersey_number if submission else None)
        size = item.size or (submission.size if submission else None)
        position = item.position or (submission.position if submission else None)

        members.append(RosterMember(
            player_id=item.player_id,
            player_name=name,
            display_name=display_name_for(name, jersey_display),
            size=size_label(size),
            jersey_number=number,
            position=position,
            paid=bool(item.player_id) and item.player_id in paid,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.effective_quantity,
            unit_price_cents=item.unit_price_cents,
            images=item.images,
        ))
    return members


def _normalize_design_request(
    source: DesignRequestRosterSource, jersey_display: JerseyDisplayConfig
) -> List[RosterMember]:
    paid = paid_player_ids(source.contributions)

    members = []
    for row in source.members:
        player_id = row.user_id or row.member_id
        if row.payment_paid is not None:
            has_paid = row.payment_paid
        else:
            has_paid = player_id in paid
        members.append(RosterMember(
            player_id=player_id,
            player_name=row.player_name,
            display_name=display_name_for(row.player_name, jersey_display),
            size=size_label(row.size),
            jersey_number=row.jersey_number,
            position=row.position,
            paid=has_paid,
        ))
    return members


def normalize(
    source: Union[OrderRosterSource, DesignRequestRosterSource],
    jersey_display: Optional[JerseyDisplayConfig] = None,
) -> List[RosterMember]:
    """Map either roster source into canonical RosterMember records.

    Args:
        source: Order or design-request source (see RosterSource).
        jersey_display: Display-name policy. Defaults to player names.
    Returns:
        List[RosterMember]: One record per order item or roster row, in
        source order.
    """
    jersey_display = jersey_display or JerseyDisplayConfig()
    if source.kind == "order":
        members = _normalize_order(source, jersey_display)
    elif source.kind == "design_request":
        members = _normalize_design_request(source, jersey_display)
    else:
        raise ValueError(f"Unknown roster source kind: {source.kind}")

    logger.debug(f"Normalized {len(members)} roster members from {source.kind} source")
    return members

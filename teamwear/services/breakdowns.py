"""Size breakdowns for orders and design requests, loaded from the data store.

The `*_breakdowns` functions are pure over already-fetched records; the
`build_*` helpers fetch synchronously; `BreakdownLoader` fetches concurrently
and keeps the last good breakdowns when a refresh fails.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamwear.data.interface import DataAccess
from teamwear.data.models import (
    DesignRequest,
    DesignRequestRosterRow,
    JerseyDisplayConfig,
    OrderLineItem,
    PaymentContribution,
    PlayerInfoSubmission,
    Product,
    ProductSizeBreakdown,
    Team,
)
from teamwear.data.util import get_data_access
from teamwear.engine.aggregator import AggregationMode, aggregate
from teamwear.engine.roster import DesignRequestRosterSource, OrderRosterSource, normalize, sort_roster
from teamwear.errors import DesignRequestNotFoundError, OrderNotFoundError
from teamwear.logging import get_logger
from teamwear.services.util import LatestOnly, call_blocking

logger = get_logger(__name__)


def resolve_jersey_display(
    team: Optional[Team], design_request: Optional[DesignRequest] = None
) -> JerseyDisplayConfig:
    """A design request's own jersey style overrides the team setting.

    A stored team_name style without a team name falls back to player names.
    """
    team_name = team.jersey_team_name if team else None
    if design_request is not None and design_request.jersey_name_style:
        style = design_request.jersey_name_style
        team_name = design_request.jersey_team_name or team_name
        owner = f"design request {design_request.design_request_id}"
    elif team is not None and team.jersey_name_style:
        style = team.jersey_name_style
        owner = f"team {team.team_id}"
    else:
        return JerseyDisplayConfig()

    if style == "team_name" and not (team_name and team_name.strip()):
        logger.warning(f"Jersey style 'team_name' without a team name for {owner}, showing player names")
        return JerseyDisplayConfig()
    return JerseyDisplayConfig(style=style, team_name=team_name)


def order_breakdowns(
    products: Iterable[Product],
    items: Iterable[OrderLineItem],
    submissions: Iterable[PlayerInfoSubmission] = (),
    contributions: Iterable[PaymentContribution] = (),
    team: Optional[Team] = None,
) -> List[ProductSizeBreakdown]:
    source = OrderRosterSource(items=list(items), submissions=list(submissions), contributions=list(contributions))
    # Line-item order is kept so the first item of a product sets its unit price
    members = normalize(source, resolve_jersey_display(team))
    return aggregate(list(products), members, AggregationMode.ORDER)


def design_request_breakdowns(
    design_request: DesignRequest,
    rows: Iterable[DesignRequestRosterRow],
    contributions: Iterable[PaymentContribution] = (),
    team: Optional[Team] = None,
) -> List[ProductSizeBreakdown]:
    source = DesignRequestRosterSource(members=list(rows), contributions=list(contributions))
    members = sort_roster(normalize(source, resolve_jersey_display(team, design_request)))
    return aggregate(design_request.selected_apparel, members, AggregationMode.DESIGN_REQUEST)


def build_order_breakdowns(data_access: DataAccess, order_id: str) -> List[ProductSizeBreakdown]:
    order = data_access.get_order(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    team = data_access.get_team(order.team_id) if order.team_id else None
    submissions = data_access.list_player_submissions(order.team_id) if order.team_id else []
    return order_breakdowns(
        data_access.list_products(),
        data_access.list_order_items(order_id),
        submissions,
        data_access.list_contributions(order_id),
        team,
    )


def build_design_request_breakdowns(data_access: DataAccess, design_request_id: int) -> List[ProductSizeBreakdown]:
    design_request = data_access.get_design_request(design_request_id)
    if design_request is None:
        raise DesignRequestNotFoundError(design_request_id)
    team = data_access.get_team(design_request.team_id) if design_request.team_id else None
    return design_request_breakdowns(
        design_request,
        data_access.list_roster_members(design_request_id),
        team=team,
    )


class BreakdownState(BaseModel):
    """Snapshot of the loaded breakdowns. Replaced wholesale on every refresh."""
    model_config = ConfigDict(frozen=True)

    kind: Optional[AggregationMode] = None
    source_id: Optional[str] = None
    breakdowns: List[ProductSizeBreakdown] = Field(default_factory=list)
    error: Optional[str] = None
    generation: int = 0


class BreakdownLoader:
    """Loads breakdowns for one order or design request at a time.

    A refresh supersedes any refresh still in flight. On failure the
    previous breakdowns are kept and the error recorded on the state.
    """

    def __init__(self, data_access: Optional[DataAccess] = None, timeout: Optional[float] = None) -> None:
        self.data_access = data_access or get_data_access()
        self.timeout = timeout
        self.state = BreakdownState()
        self._latest = LatestOnly()

    async def _call(self, fn, *args):
        return await call_blocking(fn, *args, timeout=self.timeout)

    async def _load_order(self, order_id: str) -> List[ProductSizeBreakdown]:
        da = self.data_access
        order, items, contributions, products = await asyncio.gather(
            self._call(da.get_order, order_id),
            self._call(da.list_order_items, order_id),
            self._call(da.list_contributions, order_id),
            self._call(da.list_products),
        )
        if order is None:
            raise OrderNotFoundError(order_id)

        team, submissions = None, []
        if order.team_id:
            team, submissions = await asyncio.gather(
                self._call(da.get_team, order.team_id),
                self._call(da.list_player_submissions, order.team_id),
            )
        return order_breakdowns(products, items, submissions, contributions, team)

    async def _load_design_request(self, design_request_id: int) -> List[ProductSizeBreakdown]:
        da = self.data_access
        design_request, rows = await asyncio.gather(
            self._call(da.get_design_request, design_request_id),
            self._call(da.list_roster_members, design_request_id),
        )
        if design_request is None:
            raise DesignRequestNotFoundError(design_request_id)

        team = None
        if design_request.team_id:
            team = await self._call(da.get_team, design_request.team_id)
        return design_request_breakdowns(design_request, rows, team=team)

    async def _refresh(self, kind: AggregationMode, source_id: str, load) -> BreakdownState:
        generation, task = self._latest.start(load)
        try:
            breakdowns = await task
        except asyncio.CancelledError:
            if self._latest.is_current(generation):
                raise
            logger.debug(f"Breakdown refresh {generation} superseded")
            return self.state
        except Exception as e:
            if not self._latest.is_current(generation):
                return self.state
            logger.error(f"Failed to load breakdowns for {kind.value} {source_id}: {e}")
            self.state = self.state.model_copy(update={
                "error": str(e) or type(e).__name__,
                "generation": generation,
            })
            return self.state

        if not self._latest.is_current(generation):
            return self.state
        logger.info(f"Loaded {len(breakdowns)} product breakdowns for {kind.value} {source_id}")
        self.state = BreakdownState(
            kind=kind,
            source_id=source_id,
            breakdowns=breakdowns,
            generation=generation,
        )
        return self.state

    async def refresh_order(self, order_id: str) -> BreakdownState:
        return await self._refresh(AggregationMode.ORDER, str(order_id), self._load_order(order_id))

    async def refresh_design_request(self, design_request_id: int) -> BreakdownState:
        return await self._refresh(
            AggregationMode.DESIGN_REQUEST,
            str(design_request_id),
            self._load_design_request(design_request_id),
        )

"""Lookup session: owns the API client, its response cache and live chart handles."""

from typing import Any, Dict, List, Optional, Protocol, Union

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict

from ftc_dashboard.api.cache import ResponseCache
from ftc_dashboard.api.ftcscout_client import FTCScoutClient
from ftc_dashboard.calculation.analytics import derive_analytics
from ftc_dashboard.calculation.statistics import combine_season_stats, overall_record
from ftc_dashboard.config.settings import AppSettings, settings as default_settings
from ftc_dashboard.models.analytics import MatchAnalytics
from ftc_dashboard.models.event import EventBucket
from ftc_dashboard.models.stats import CombinedStats, Record
from ftc_dashboard.models.team import Team
from ftc_dashboard.normalization.normalizer import MatchNormalizer
from ftc_dashboard.utils.seasons import parse_team_number, resolve_season, season_range


class ChartHandle(Protocol):
    def destroy(self) -> None: ...


class LookupResult(BaseModel):
    """Everything the presentation layer receives for one lookup."""

    model_config = ConfigDict(frozen=True)

    team: Team
    season: int
    seasons: List[int]
    events: Dict[str, EventBucket]
    record: Record
    stats: CombinedStats
    analytics: MatchAnalytics


class DashboardSession:
    """Runs team lookups against one client and cache.

    Lookups are sequential chains of awaited requests. Two lookups started on
    the same session share the cache and do not cancel each other.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        client: Optional[FTCScoutClient] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or default_settings
        self.client = client or FTCScoutClient(
            client=http_client, settings=self.settings
        )
        self._charts: Dict[str, Any] = {}

    @property
    def cache(self) -> ResponseCache:
        return self.client.cache

    # -- Chart handles ---------------------------------------------------

    def register_chart(self, name: str, handle: ChartHandle) -> None:
        """Tracks a live chart, destroying whatever was registered under ``name``."""
        previous = self._charts.pop(name, None)
        if previous is not None:
            previous.destroy()
        self._charts[name] = handle

    def destroy_charts(self) -> None:
        while self._charts:
            _, handle = self._charts.popitem()
            handle.destroy()

    @property
    def charts(self) -> Dict[str, Any]:
        return dict(self._charts)

    # -- Lookup ----------------------------------------------------------

    async def lookup(
        self, team_number: Union[str, int], season: Optional[int] = None
    ) -> LookupResult:
        """Fetches, normalizes and analyzes one team's season.

        Raises FetchError/NotFoundError when the team or its event list cannot
        be retrieved; an event whose matches fail to load is skipped.
        """
        number = parse_team_number(team_number)
        team = await self.client.get_team(number)
        current = self.settings.current_season
        season = resolve_season(season, team.rookie_year, current)
        logger.info(f"Looking up team {number} for the {season} season")

        events = await self.client.get_team_events(number, season)
        quick_stats = await self.client.get_quick_stats(number, season)
        stats = combine_season_stats(quick_stats, events)

        event_matches = await MatchNormalizer(number).collect(
            self.client, season, events
        )

        return LookupResult(
            team=team,
            season=season,
            seasons=season_range(team.rookie_year, current),
            events=event_matches,
            record=overall_record(event_matches),
            stats=stats,
            analytics=derive_analytics(event_matches),
        )

    # -- Teardown --------------------------------------------------------

    async def close(self) -> None:
        self.destroy_charts()
        await self.client.close()

    async def __aenter__(self) -> "DashboardSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

# ftc_dashboard/api/ftcscout_client.py

from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ftc_dashboard.config.settings import AppSettings, settings as default_settings
from ftc_dashboard.models.event import RawEvent
from ftc_dashboard.models.match import RawMatch
from ftc_dashboard.models.team import Team
from .base_client import BaseApiClient, FetchError, NotFoundError
from .cache import ResponseCache

T = TypeVar("T")


class FTCScoutClient(BaseApiClient):
    """Client for the FTCScout REST API.

    Every GET goes through the response cache, so repeated lookups within
    the configured TTL cost no network traffic.
    """

    source_name: str = "FTCScout"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        settings: Optional[AppSettings] = None,
        cache: Optional[ResponseCache] = None,
    ):
        self.settings = settings or default_settings
        super().__init__(client=client, timeout=self.settings.request_timeout)
        self.cache = cache if cache is not None else ResponseCache(self._get_json)
        self.base_url = self.settings.api_base_url.rstrip("/")

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def _get_cached(self, path: str) -> Any:
        return await self.cache.get(self.url_for(path), self.settings.cache_ttl_ms)

    def _parse(self, model: Type[T], payload: Any, path: str) -> T:
        try:
            return TypeAdapter(model).validate_python(payload)
        except ValidationError as e:
            url = self.url_for(path)
            logger.error(f"Unexpected {self.source_name} payload shape for {path}: {e}")
            # A payload that does not validate is a failed fetch; keep it out of the cache
            self.cache.invalidate(url)
            raise FetchError(f"Malformed payload from {path}", url=url) from e

    async def get_team(self, number: int) -> Team:
        path = f"/teams/{number}"
        payload = await self._get_cached(path)
        if not payload:
            raise NotFoundError(f"No data found for team {number}")
        return self._parse(Team, payload, path)

    async def get_team_events(self, number: int, season: int) -> List[RawEvent]:
        path = f"/teams/{number}/events/{season}"
        payload = await self._get_cached(path)
        events = self._parse(List[RawEvent], payload or [], path)
        logger.info(f"Team {number} attended {len(events)} event(s) in {season}")
        return events

    async def get_event_matches(self, season: int, event_code: str) -> List[RawMatch]:
        path = f"/events/{season}/{event_code}/matches"
        payload = await self._get_cached(path)
        return self._parse(List[RawMatch], payload or [], path)

    async def get_quick_stats(self, number: int, season: int) -> Dict[str, Any]:
        path = f"/teams/{number}/quick-stats?season={season}"
        payload = await self._get_cached(path)
        if payload is None:
            logger.info(f"No quick-stats for team {number} in {season}")
            return {}
        return self._parse(Dict[str, Any], payload, path)

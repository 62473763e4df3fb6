"""Shared pytest fixtures for the ftc_dashboard test suite.

Raw payload factories mirror the FTCScout REST JSON (camelCase keys); the
``fake_api`` fixture serves them through ``httpx.MockTransport`` so the real
client, cache and session code run without network access.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from ftc_dashboard.api.ftcscout_client import FTCScoutClient
from ftc_dashboard.config.settings import AppSettings
from ftc_dashboard.models.match import AllianceScore, NormalizedMatch

BASE_URL = "https://api.test/rest/v1"
TEAM = 12345


class FakeFTCScout:
    """Canned FTCScout responses keyed by path (query string included).

    A route value may be a JSON-able payload, ``None`` (served as ``null``) or
    a ready ``httpx.Response``. Unknown paths answer 404.
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.raw_path.decode().removeprefix("/rest/v1")
        self.calls.append(path)
        if path not in self.routes:
            return httpx.Response(404, json={"error": "not found"})
        payload = self.routes[path]
        if isinstance(payload, httpx.Response):
            return payload
        if payload is None:
            return httpx.Response(
                200, content=b"null", headers={"content-type": "application/json"}
            )
        return httpx.Response(200, json=payload)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def count(self, path: str) -> int:
        return self.calls.count(path)


@pytest.fixture
def test_settings() -> AppSettings:
    return AppSettings(
        api_base_url=BASE_URL,
        cache_ttl_ms=300_000,
        current_season=2024,
        log_level="INFO",
    )


@pytest.fixture
def fake_api() -> FakeFTCScout:
    return FakeFTCScout()


@pytest.fixture
def make_client(
    test_settings: AppSettings,
) -> Callable[[FakeFTCScout], FTCScoutClient]:
    def _make(fake: FakeFTCScout) -> FTCScoutClient:
        return FTCScoutClient(client=fake.http_client(), settings=test_settings)

    return _make


# ---------------------------------------------------------------------------
# Raw payload factories
# ---------------------------------------------------------------------------


def _score(auto: int = 0, dc: int = 0, total: int | None = None, total_np: int | None = None) -> dict[str, Any]:
    score: dict[str, Any] = {"autoPoints": auto, "dcPoints": dc}
    score["totalPoints"] = total if total is not None else auto + dc
    if total_np is not None:
        score["totalPointsNp"] = total_np
    return score


def _participant(team_number: int, alliance: str, station: int, **flags: bool) -> dict[str, Any]:
    return {
        "teamNumber": team_number,
        "alliance": alliance,
        "station": station,
        "surrogate": flags.get("surrogate", False),
        "noShow": flags.get("noShow", False),
        "dq": flags.get("dq", False),
    }


def _raw_match(
    match_id: int,
    level: str = "Quals",
    red_teams: tuple[int, ...] = (TEAM, 1111),
    blue_teams: tuple[int, ...] = (2222, 3333),
    red: dict[str, Any] | None = None,
    blue: dict[str, Any] | None = None,
) -> dict[str, Any]:
    teams = [_participant(t, "Red", i + 1) for i, t in enumerate(red_teams)]
    teams += [_participant(t, "Blue", i + 1) for i, t in enumerate(blue_teams)]
    return {
        "id": match_id,
        "tournamentLevel": level,
        "teams": teams,
        "scores": {
            "red": red if red is not None else _score(20, 60, total_np=80),
            "blue": blue if blue is not None else _score(10, 40, total_np=50),
        },
    }


def _raw_event(
    code: str,
    start_date: str | None = "2024-01-01",
    name: str | None = None,
    stats: dict[str, Any] | None = None,
) -> dict[str, Any]:
    event: dict[str, Any] = {
        "eventCode": code,
        "name": name or f"{code} Qualifier",
        "startDate": start_date,
        "endDate": start_date,
        "location": {"city": "Springfield", "state": "IL", "country": "USA"},
    }
    if stats is not None:
        event["stats"] = stats
    return event


@pytest.fixture
def score() -> Callable[..., dict[str, Any]]:
    return _score


@pytest.fixture
def participant() -> Callable[..., dict[str, Any]]:
    return _participant


@pytest.fixture
def raw_match() -> Callable[..., dict[str, Any]]:
    return _raw_match


@pytest.fixture
def raw_event() -> Callable[..., dict[str, Any]]:
    return _raw_event


@pytest.fixture
def normalized_match() -> Callable[..., NormalizedMatch]:
    """Build a NormalizedMatch directly from own/opponent point totals."""

    def _make(
        alliance: str = "RED",
        red: tuple[int, int, int | None] = (20, 60, 80),
        blue: tuple[int, int, int | None] = (10, 40, 50),
        match_number: int = 1,
        match_type: str = "Quals",
    ) -> NormalizedMatch:
        return NormalizedMatch(
            match_number=match_number,
            match_type=match_type,
            alliance=alliance,
            station=1,
            red_score=AllianceScore(
                auto_points=red[0], dc_points=red[1], total_points_np=red[2]
            ),
            blue_score=AllianceScore(
                auto_points=blue[0], dc_points=blue[1], total_points_np=blue[2]
            ),
        )

    return _make

"""Unit tests for ftc_dashboard.normalization.normalizer."""

from __future__ import annotations

import asyncio

import httpx

from ftc_dashboard.models.event import RawEvent
from ftc_dashboard.models.match import RawMatch
from ftc_dashboard.normalization.normalizer import MatchNormalizer, match_sort_key

TEAM = 12345

# ── normalize_match ─────────────────────────────────────────────────────────


def test_normalize_match_takes_the_teams_seat(raw_match, participant) -> None:
    payload = raw_match(7, red_teams=(1111, 2222), blue_teams=(3333, TEAM))
    payload["teams"][3] = participant(TEAM, "Blue", 2, surrogate=True, dq=True)
    match = MatchNormalizer(TEAM).normalize_match(RawMatch.model_validate(payload))

    assert match is not None
    assert match.match_number == 7
    assert match.match_type == "Quals"
    assert match.alliance == "BLUE"
    assert match.station == 2
    assert match.surrogate and match.dq and not match.no_show
    assert [t.team_number for t in match.teams.red] == [1111, 2222]
    assert [t.team_number for t in match.teams.blue] == [3333, TEAM]


def test_normalize_match_keeps_both_scores_unmodified(raw_match, score) -> None:
    red, blue = score(5, 10, total=30, total_np=15), score(7, 8, total=20)
    raw = RawMatch.model_validate(raw_match(1, red=red, blue=blue))
    match = MatchNormalizer(TEAM).normalize_match(raw)

    assert match.red_score == raw.scores.red
    assert match.blue_score == raw.scores.blue
    assert match.blue_score.total_points_np is None
    assert match.own_score is match.red_score


def test_normalize_match_skips_other_teams_matches(raw_match) -> None:
    raw = RawMatch.model_validate(raw_match(1, red_teams=(1, 2), blue_teams=(3, 4)))
    assert MatchNormalizer(TEAM).normalize_match(raw) is None


def test_unplayed_match_has_no_scores(raw_match) -> None:
    payload = raw_match(3)
    payload["scores"] = None
    match = MatchNormalizer(TEAM).normalize_match(RawMatch.model_validate(payload))
    assert match.red_score is None and match.blue_score is None
    assert match.own_score is None


# ── normalize_event ─────────────────────────────────────────────────────────


def test_event_matches_sorted_by_level_then_number(raw_event, raw_match) -> None:
    event = RawEvent.model_validate(raw_event("E1"))
    raw_matches = [
        RawMatch.model_validate(raw_match(n, level=level))
        for n, level in [
            (40, "Finals"),
            (12, "Quals"),
            (30, "Semis"),
            (3, "Quals"),
            (31, "Semis"),
        ]
    ]
    bucket = MatchNormalizer(TEAM).normalize_event(event, raw_matches)

    order = [(m.match_type, m.match_number) for m in bucket.matches]
    assert order == [
        ("Quals", 3),
        ("Quals", 12),
        ("Semis", 30),
        ("Semis", 31),
        ("Finals", 40),
    ]
    keys = [match_sort_key(m) for m in bucket.matches]
    assert keys == sorted(keys)


def test_unknown_level_sorts_after_finals(raw_event, raw_match) -> None:
    event = RawEvent.model_validate(raw_event("E1"))
    raw_matches = [
        RawMatch.model_validate(raw_match(1, level="DoubleElim")),
        RawMatch.model_validate(raw_match(9, level="Finals")),
    ]
    bucket = MatchNormalizer(TEAM).normalize_event(event, raw_matches)
    assert [m.match_type for m in bucket.matches] == ["Finals", "DoubleElim"]


def test_event_without_team_matches_is_none(raw_event, raw_match) -> None:
    event = RawEvent.model_validate(raw_event("E1"))
    other = RawMatch.model_validate(raw_match(1, red_teams=(1, 2)))
    assert MatchNormalizer(TEAM).normalize_event(event, [other]) is None
    assert MatchNormalizer(TEAM).normalize_event(event, []) is None


def test_missing_event_stats_default_to_zero(raw_event, raw_match) -> None:
    event = RawEvent.model_validate(raw_event("E1", name="State Championship"))
    bucket = MatchNormalizer(TEAM).normalize_event(
        event, [RawMatch.model_validate(raw_match(1))]
    )
    stats = bucket.details.stats
    assert bucket.details.name == "State Championship"
    assert bucket.details.start_date == "2024-01-01"
    assert (stats.wins, stats.losses, stats.ties) == (0, 0, 0)
    assert (stats.rp, stats.rank, stats.tb1, stats.tb2) == (0, 0, 0, 0)


# ── collect ─────────────────────────────────────────────────────────────────


def test_collect_skips_failed_and_empty_events(
    fake_api, make_client, raw_event, raw_match
) -> None:
    events = [
        RawEvent.model_validate(raw_event(code)) for code in ("E1", "BROKEN", "E2", "E3")
    ]
    fake_api.routes["/events/2024/E1/matches"] = [raw_match(2), raw_match(1)]
    fake_api.routes["/events/2024/BROKEN/matches"] = httpx.Response(503)
    fake_api.routes["/events/2024/E2/matches"] = [raw_match(1, red_teams=(1, 2))]
    fake_api.routes["/events/2024/E3/matches"] = [raw_match(5, level="Finals")]

    result = asyncio.run(
        MatchNormalizer(TEAM).collect(make_client(fake_api), 2024, events)
    )

    assert list(result) == ["E1", "E3"]
    assert [m.match_number for m in result["E1"].matches] == [1, 2]
    # Sequential, in event order
    assert fake_api.calls == [
        "/events/2024/E1/matches",
        "/events/2024/BROKEN/matches",
        "/events/2024/E2/matches",
        "/events/2024/E3/matches",
    ]


def test_collect_with_no_events_is_empty(fake_api, make_client) -> None:
    result = asyncio.run(MatchNormalizer(TEAM).collect(make_client(fake_api), 2024, []))
    assert result == {}
    assert fake_api.calls == []


def test_named_station_keeps_the_event(fake_api, make_client, raw_event, raw_match) -> None:
    payload = raw_match(1)
    payload["teams"][0]["station"] = "One"
    payload["teams"][0]["surrogate"] = None
    fake_api.routes["/events/2024/E1/matches"] = [payload]
    events = [RawEvent.model_validate(raw_event("E1"))]

    result = asyncio.run(
        MatchNormalizer(TEAM).collect(make_client(fake_api), 2024, events)
    )

    assert list(result) == ["E1"]
    match = result["E1"].matches[0]
    assert match.station == "One"
    assert match.surrogate is False
    assert result["E1"].matches[0].teams.red[1].station == 2


def test_null_event_stats_fall_back_to_zero(raw_event, raw_match) -> None:
    event = RawEvent.model_validate(
        raw_event("E1", stats={"rp": None, "rank": None, "wins": 4, "tb1": None})
    )
    bucket = MatchNormalizer(TEAM).normalize_event(
        event, [RawMatch.model_validate(raw_match(1))]
    )
    stats = bucket.details.stats
    assert (stats.rp, stats.rank, stats.tb1, stats.wins) == (0, 0, 0, 4)

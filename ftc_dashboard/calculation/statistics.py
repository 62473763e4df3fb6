from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from loguru import logger

from ftc_dashboard.models.enums import Alliance, MatchResult
from ftc_dashboard.models.event import EventBucket, RawEvent
from ftc_dashboard.models.match import AllianceScore, NormalizedMatch
from ftc_dashboard.models.stats import CombinedStats, Record


def effective_score(score: Optional[AllianceScore]) -> int:
    """No-penalty total when reported, else the total, else 0."""
    if score is None:
        return 0
    if score.total_points_np is not None:
        return score.total_points_np
    if score.total_points is not None:
        return score.total_points
    return 0


def determine_result(match: NormalizedMatch) -> MatchResult:
    """Outcome of ``match`` for the team's own alliance."""
    red = effective_score(match.red_score)
    blue = effective_score(match.blue_score)

    if match.alliance == Alliance.RED.value:
        ours, theirs = red, blue
    elif match.alliance == Alliance.BLUE.value:
        ours, theirs = blue, red
    else:
        return MatchResult.NOT_AVAILABLE

    if ours > theirs:
        return MatchResult.WON
    if ours < theirs:
        return MatchResult.LOST
    return MatchResult.TIE


def compute_record(matches: Iterable[NormalizedMatch]) -> Record:
    """Tallies results; matches without a recognized alliance are not counted."""
    wins = losses = ties = 0
    for match in matches:
        result = determine_result(match)
        if result is MatchResult.WON:
            wins += 1
        elif result is MatchResult.LOST:
            losses += 1
        elif result is MatchResult.TIE:
            ties += 1
    return Record(wins=wins, losses=losses, ties=ties)


def flatten_matches(events: Mapping[str, EventBucket]) -> List[NormalizedMatch]:
    """All matches, bucket by bucket, in bucket order."""
    return [match for bucket in events.values() for match in bucket.matches]


def overall_record(events: Mapping[str, EventBucket]) -> Record:
    """Season record across every event. Recomputed on each call."""
    return compute_record(flatten_matches(events))


def _start_key(event: RawEvent) -> datetime:
    if not event.start_date:
        return datetime.min
    try:
        started = datetime.fromisoformat(event.start_date)
    except ValueError:
        logger.debug(
            f"Unparseable start date {event.start_date!r} for {event.event_code}"
        )
        return datetime.min
    if started.tzinfo is not None:
        # Compare instants; naive dates are taken as UTC
        started = started.astimezone(timezone.utc).replace(tzinfo=None)
    return started


def latest_event(events: List[RawEvent]) -> Optional[RawEvent]:
    """The most recently started event; the first one listed wins a tie."""
    if not events:
        return None
    return max(events, key=_start_key)


def combine_season_stats(
    quick_stats: Mapping[str, Any], events: List[RawEvent]
) -> CombinedStats:
    """Merges season quick-stats with the latest event's stats.

    Keys from the event stats override quick-stats keys of the same name, and
    the full event list is attached under ``events``.
    """
    event_stats: Dict[str, Any] = {}
    latest = latest_event(events)
    if latest is not None and latest.stats is not None:
        event_stats = latest.stats.model_dump(by_alias=True, exclude_unset=True)
        logger.debug(f"Using stats from latest event {latest.event_code}")

    merged = {**quick_stats, **event_stats, "events": events}
    return CombinedStats.model_validate(merged)

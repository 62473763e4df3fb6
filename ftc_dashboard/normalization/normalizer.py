from typing import Dict, Iterable, List, Optional

from loguru import logger

from ftc_dashboard.api.base_client import FetchError
from ftc_dashboard.api.ftcscout_client import FTCScoutClient
from ftc_dashboard.models.enums import (
    Alliance,
    TOURNAMENT_LEVEL_RANK,
    UNKNOWN_LEVEL_RANK,
)
from ftc_dashboard.models.event import EventBucket, EventDetails, EventStats, RawEvent
from ftc_dashboard.models.match import (
    AllianceTeams,
    NormalizedMatch,
    RawMatch,
)

# Event code -> bucket, in the order the events were processed
EventMatchMap = Dict[str, EventBucket]


def match_sort_key(match: NormalizedMatch) -> tuple:
    """Quals before Semis before Finals, then by match number."""
    rank = TOURNAMENT_LEVEL_RANK.get(match.match_type, UNKNOWN_LEVEL_RANK)
    return rank, match.match_number


class MatchNormalizer:
    """Reshapes an event's full match list into one team's view of it."""

    def __init__(self, team_number: int):
        self.team_number = team_number

    def normalize_match(self, raw_match: RawMatch) -> Optional[NormalizedMatch]:
        """Returns the team's view of ``raw_match``, or None if it did not play."""
        ours = raw_match.participant(self.team_number)
        if ours is None:
            return None

        scores = raw_match.scores
        red = [t for t in raw_match.teams if Alliance.parse(t.alliance) is Alliance.RED]
        blue = [
            t for t in raw_match.teams if Alliance.parse(t.alliance) is Alliance.BLUE
        ]
        return NormalizedMatch(
            match_number=raw_match.id,
            match_type=raw_match.tournament_level,
            alliance=ours.alliance.upper(),
            station=ours.station,
            red_score=scores.red if scores else None,
            blue_score=scores.blue if scores else None,
            surrogate=ours.surrogate,
            no_show=ours.no_show,
            dq=ours.dq,
            teams=AllianceTeams(red=red, blue=blue),
        )

    def normalize_event(
        self, event: RawEvent, raw_matches: Iterable[RawMatch]
    ) -> Optional[EventBucket]:
        """Builds the event's bucket; None when the team has no match there."""
        matches: List[NormalizedMatch] = []
        for raw_match in raw_matches:
            normalized = self.normalize_match(raw_match)
            if normalized is not None:
                matches.append(normalized)

        if not matches:
            logger.debug(
                f"Team {self.team_number} played no matches at {event.event_code}"
            )
            return None

        matches.sort(key=match_sort_key)
        details = EventDetails(
            name=event.name,
            start_date=event.start_date,
            end_date=event.end_date,
            location=event.location,
            stats=event.stats or EventStats(),
        )
        return EventBucket(details=details, matches=matches)

    async def collect(
        self, client: FTCScoutClient, season: int, events: Iterable[RawEvent]
    ) -> EventMatchMap:
        """Fetches each event's matches in turn and buckets the team's matches.

        Events are fetched one at a time so the output keeps the event order.
        An event whose matches cannot be fetched is logged and left out.
        """
        event_matches: EventMatchMap = {}
        for event in events:
            try:
                raw_matches = await client.get_event_matches(season, event.event_code)
            except FetchError as e:
                logger.warning(
                    f"Skipping event {event.event_code}: could not fetch matches ({e})"
                )
                continue

            bucket = self.normalize_event(event, raw_matches)
            if bucket is not None:
                event_matches[event.event_code] = bucket

        logger.info(
            f"Normalization complete. Team {self.team_number} has matches at {len(event_matches)} event(s)."
        )
        return event_matches


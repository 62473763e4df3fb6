from enum import Enum
from typing import Optional


class Alliance(str, Enum):
    RED = "RED"
    BLUE = "BLUE"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Alliance"]:
        """Maps any casing of an alliance name ("Red", "red") to the enum."""
        if not value:
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None


class TournamentLevel(str, Enum):
    QUALS = "Quals"
    SEMIS = "Semis"
    FINALS = "Finals"


# Sort rank of each tournament level; unknown levels sort after finals
TOURNAMENT_LEVEL_RANK = {
    TournamentLevel.QUALS.value: 0,
    TournamentLevel.SEMIS.value: 1,
    TournamentLevel.FINALS.value: 2,
}
UNKNOWN_LEVEL_RANK = len(TOURNAMENT_LEVEL_RANK)


class MatchResult(str, Enum):
    WON = "Won"
    LOST = "Lost"
    TIE = "Tie"
    NOT_AVAILABLE = "N/A"

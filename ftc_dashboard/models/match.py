from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .data_models import ApiModel, OpenApiModel
from .enums import Alliance


class Participant(ApiModel):
    """One team's slot in a match."""

    team_number: int
    alliance: str
    station: Optional[Union[int, str]] = None  # Display only, e.g. 1 or "One"
    surrogate: bool = False
    no_show: bool = False
    dq: bool = False

    @field_validator("surrogate", "no_show", "dq", mode="before")
    @classmethod
    def _null_flag_is_false(cls, value):
        return False if value is None else value


class AllianceScore(OpenApiModel):
    auto_points: Optional[int] = None
    dc_points: Optional[int] = None
    total_points: Optional[int] = None
    total_points_np: Optional[int] = None  # Total without penalty points


class MatchScores(ApiModel):
    red: Optional[AllianceScore] = None
    blue: Optional[AllianceScore] = None


class RawMatch(ApiModel):
    """A match as returned by /events/{season}/{eventCode}/matches."""

    id: int
    tournament_level: str
    teams: List[Participant] = []
    scores: Optional[MatchScores] = None

    def participant(self, team_number: int) -> Optional[Participant]:
        return next((t for t in self.teams if t.team_number == team_number), None)


class AllianceTeams(BaseModel):
    model_config = ConfigDict(frozen=True)

    red: List[Participant] = []
    blue: List[Participant] = []


class NormalizedMatch(BaseModel):
    """A match seen from one team's seat.

    ``alliance`` is always upper case; anything other than RED or BLUE is an
    unrecognized alliance and yields no result.
    """

    model_config = ConfigDict(frozen=True)

    match_number: int
    match_type: str
    alliance: str
    station: Optional[Union[int, str]] = None
    red_score: Optional[AllianceScore] = None
    blue_score: Optional[AllianceScore] = None
    surrogate: bool = False
    no_show: bool = False
    dq: bool = False
    teams: AllianceTeams = AllianceTeams()

    @property
    def own_score(self) -> Optional[AllianceScore]:
        """Score block of the alliance this team played on."""
        alliance = Alliance.parse(self.alliance)
        if alliance is Alliance.RED:
            return self.red_score
        if alliance is Alliance.BLUE:
            return self.blue_score
        return None

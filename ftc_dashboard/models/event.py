from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from .data_models import ApiModel, OpenApiModel
from .match import NormalizedMatch


class EventStats(OpenApiModel):
    """Per-event ranking data; extra keys such as avg/max are kept."""

    wins: int = 0
    losses: int = 0
    ties: int = 0
    rp: float = 0
    rank: int = 0
    tb1: float = 0
    tb2: float = 0

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class RawEvent(ApiModel):
    """An event the team attended, from /teams/{number}/events/{season}."""

    event_code: str
    name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    location: Optional[Any] = None
    stats: Optional[EventStats] = None


class EventDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    location: Optional[Any] = None
    stats: EventStats = EventStats()


class EventBucket(BaseModel):
    """All of one team's matches at a single event.

    Only built for events where the team played at least one match; the
    matches are ordered by tournament level, then match number.
    """

    model_config = ConfigDict(frozen=True)

    details: EventDetails
    matches: List[NormalizedMatch]

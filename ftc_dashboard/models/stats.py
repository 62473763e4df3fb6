from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .data_models import ApiModel, OpenApiModel
from .event import RawEvent


class Record(BaseModel):
    """Win/loss/tie tally. Always derived from matches, never stored."""

    model_config = ConfigDict(frozen=True)

    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.ties

    def __str__(self) -> str:
        return f"{self.wins}W - {self.losses}L - {self.ties}T"


class RankedValue(ApiModel):
    value: Optional[float] = None
    rank: Optional[int] = None


class PointBreakdown(OpenApiModel):
    auto_points: Optional[float] = None
    dc_points: Optional[float] = None
    total_points: Optional[float] = None
    total_points_np: Optional[float] = None


class RankingRow(BaseModel):
    category: str
    value: Optional[float] = None
    rank: Optional[int] = None
    count: Optional[int] = None


class BreakdownRow(BaseModel):
    phase: str
    avg: Optional[float] = None
    max: Optional[float] = None


class CombinedStats(OpenApiModel):
    """Season quick-stats merged with the latest event's ranking stats.

    Quick-stats supply the season-wide OPR rankings (auto, dc, eg, tot,
    count); the latest event's stats override any shared key and add the
    event record, ranking points and avg/max point breakdowns.
    """

    auto: Optional[RankedValue] = None
    dc: Optional[RankedValue] = None
    eg: Optional[RankedValue] = None
    tot: Optional[RankedValue] = None
    count: Optional[int] = None

    avg: Optional[PointBreakdown] = None
    max_points: Optional[PointBreakdown] = Field(None, alias="max")

    wins: Optional[int] = None
    losses: Optional[int] = None
    ties: Optional[int] = None
    rank: Optional[int] = None
    rp: Optional[float] = None
    tb1: Optional[float] = None
    tb2: Optional[float] = None

    events: List[RawEvent] = []

    def ranking_rows(self) -> List[RankingRow]:
        """Season ranking per scoring category."""
        categories = [
            ("Auto", self.auto),
            ("Driver Control", self.dc),
            ("Endgame", self.eg),
        ]
        return [
            RankingRow(
                category=label,
                value=ranked.value if ranked else None,
                rank=ranked.rank if ranked else None,
                count=self.count,
            )
            for label, ranked in categories
        ]

    def breakdown_rows(self) -> List[BreakdownRow]:
        """Average and best match points per phase."""
        avg = self.avg or PointBreakdown()
        best = self.max_points or PointBreakdown()
        return [
            BreakdownRow(phase="Auto", avg=avg.auto_points, max=best.auto_points),
            BreakdownRow(
                phase="Driver Control", avg=avg.dc_points, max=best.dc_points
            ),
            BreakdownRow(
                phase="Total (No Penalties)",
                avg=avg.total_points_np,
                max=best.total_points_np,
            ),
            BreakdownRow(
                phase="Total (With Penalties)",
                avg=avg.total_points,
                max=best.total_points,
            ),
        ]

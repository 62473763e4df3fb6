from typing import List

from pydantic import BaseModel, ConfigDict


class PhaseBreakdown(BaseModel):
    """Stacked auto/teleop points per match, with the mean total as overlay."""

    model_config = ConfigDict(frozen=True)

    labels: List[str] = []
    auto: List[int] = []
    teleop: List[int] = []
    average: List[float] = []


class PhaseDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    auto_points: int = 0
    teleop_points: int = 0
    auto_percent: float = 0.0
    teleop_percent: float = 0.0

    @property
    def labels(self) -> List[str]:
        return [
            f"Auto ({self.auto_percent:.1f}%)",
            f"TeleOp ({self.teleop_percent:.1f}%)",
        ]

    @property
    def values(self) -> List[int]:
        return [self.auto_points, self.teleop_points]


class ResultSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    wins: int = 0
    losses: int = 0
    ties: int = 0
    total_matches: int = 0
    win_rate: str = "0.0"  # Percentage with one decimal place

    @property
    def labels(self) -> List[str]:
        return [
            f"Wins ({self.wins})",
            f"Losses ({self.losses})",
            f"Ties ({self.ties})",
        ]

    @property
    def title(self) -> str:
        return f"Win/Loss Record ({self.win_rate}% Win Rate)"


class PerformanceTrend(BaseModel):
    model_config = ConfigDict(frozen=True)

    labels: List[str] = []
    scores: List[int] = []
    moving_average: List[float] = []
    window: int = 3


class MatchAnalytics(BaseModel):
    """Everything the chart collaborator needs, precomputed."""

    model_config = ConfigDict(frozen=True)

    phase_breakdown: PhaseBreakdown = PhaseBreakdown()
    phase_distribution: PhaseDistribution = PhaseDistribution()
    results: ResultSummary = ResultSummary()
    trend: PerformanceTrend = PerformanceTrend()

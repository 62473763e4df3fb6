"""Chart-ready series derived from a team's normalized matches.

Nothing here renders; each function returns the labels and numbers that a
charting collaborator plots as-is.
"""

from typing import List, Mapping, Sequence

from loguru import logger

from ftc_dashboard.models.analytics import (
    MatchAnalytics,
    PerformanceTrend,
    PhaseBreakdown,
    PhaseDistribution,
    ResultSummary,
)
from ftc_dashboard.models.enums import MatchResult
from ftc_dashboard.models.event import EventBucket
from ftc_dashboard.models.match import NormalizedMatch
from .statistics import determine_result, flatten_matches

TREND_WINDOW = 3


def _match_labels(matches: Sequence[NormalizedMatch]) -> List[str]:
    return [f"Match {i + 1}" for i in range(len(matches))]


def _own_points(match: NormalizedMatch) -> tuple:
    """(auto, teleop, no-penalty total) for the team's alliance, 0 when missing."""
    score = match.own_score
    if score is None:
        return 0, 0, 0
    return (
        score.auto_points or 0,
        score.dc_points or 0,
        score.total_points_np or 0,
    )


def phase_breakdown(matches: Sequence[NormalizedMatch]) -> PhaseBreakdown:
    points = [_own_points(match) for match in matches]
    totals = [total for _, _, total in points]
    mean_total = sum(totals) / len(totals) if totals else 0.0
    return PhaseBreakdown(
        labels=_match_labels(matches),
        auto=[auto for auto, _, _ in points],
        teleop=[teleop for _, teleop, _ in points],
        average=[mean_total] * len(points),
    )


def phase_distribution(matches: Sequence[NormalizedMatch]) -> PhaseDistribution:
    """Share of auto vs teleop points; both shares are 0% when no points were scored."""
    auto_total = teleop_total = 0
    for match in matches:
        auto, teleop, _ = _own_points(match)
        auto_total += auto
        teleop_total += teleop

    total = auto_total + teleop_total
    if total == 0:
        return PhaseDistribution()
    return PhaseDistribution(
        auto_points=auto_total,
        teleop_points=teleop_total,
        auto_percent=auto_total / total * 100,
        teleop_percent=teleop_total / total * 100,
    )


def result_summary(matches: Sequence[NormalizedMatch]) -> ResultSummary:
    results = [determine_result(match) for match in matches]
    wins = results.count(MatchResult.WON)
    total = len(matches)
    win_rate = f"{wins / total * 100:.1f}" if total > 0 else "0.0"
    return ResultSummary(
        wins=wins,
        losses=results.count(MatchResult.LOST),
        ties=results.count(MatchResult.TIE),
        total_matches=total,
        win_rate=win_rate,
    )


def moving_average(values: Sequence[float], window: int = TREND_WINDOW) -> List[float]:
    """Trailing mean; the first ``window - 1`` points average what exists so far."""
    if window < 1:
        raise ValueError("window must be at least 1")
    averages = []
    for i in range(len(values)):
        chunk = values[max(0, i - window + 1) : i + 1]
        averages.append(sum(chunk) / len(chunk))
    return averages


def performance_trend(
    matches: Sequence[NormalizedMatch], window: int = TREND_WINDOW
) -> PerformanceTrend:
    scores = [_own_points(match)[2] for match in matches]
    return PerformanceTrend(
        labels=_match_labels(matches),
        scores=scores,
        moving_average=moving_average(scores, window),
        window=window,
    )


def derive_analytics(events: Mapping[str, EventBucket]) -> MatchAnalytics:
    matches = flatten_matches(events)
    logger.debug(f"Deriving analytics over {len(matches)} match(es)")
    return MatchAnalytics(
        phase_breakdown=phase_breakdown(matches),
        phase_distribution=phase_distribution(matches),
        results=result_summary(matches),
        trend=performance_trend(matches),
    )

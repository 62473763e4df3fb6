import sys
import asyncio
from typing import Optional

# --- Settings/Logging ---
from ftc_dashboard.logging.setup import setup_logging
from ftc_dashboard.config.settings import settings

setup_logging()

from loguru import logger

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ftc_dashboard.api.base_client import ApiError
from ftc_dashboard.calculation.statistics import (
    compute_record,
    determine_result,
    effective_score,
)
from ftc_dashboard.models.event import EventBucket
from ftc_dashboard.session import DashboardSession, LookupResult
from ftc_dashboard.utils.seasons import InvalidLookupError

app = typer.Typer(help="Look up an FTC team's season on FTCScout.")
console = Console()

LEVEL_ABBREVIATIONS = {"Quals": "Q", "Semis": "SF", "Finals": "F"}


def _fmt(value: Optional[float]) -> str:
    return f"{value:.2f}" if isinstance(value, (int, float)) else "0.00"


def render_team_header(result: LookupResult) -> None:
    team = result.team
    body = (
        f"[bold]Location:[/bold] {team.location}\n"
        f"[bold]Rookie Year:[/bold] {team.rookie_year or 'Unknown'}\n"
        f"[bold]Overall Record:[/bold] {result.record}"
    )
    console.print(Panel(body, title=team.display_name, expand=False))


def render_season_stats(result: LookupResult) -> None:
    stats = result.stats
    rankings = Table(title=f"Season Rankings ({result.season})")
    rankings.add_column("Category")
    rankings.add_column("Value", justify="right")
    rankings.add_column("Rank", justify="right")
    for row in stats.ranking_rows():
        rankings.add_row(
            row.category, _fmt(row.value), f"{row.rank or 'N/A'} of {row.count or 'N/A'}"
        )

    breakdown = Table(title="Average Match Breakdown")
    breakdown.add_column("Phase")
    breakdown.add_column("Avg", justify="right")
    breakdown.add_column("Max", justify="right")
    for row in stats.breakdown_rows():
        breakdown.add_row(row.phase, _fmt(row.avg), str(int(row.max or 0)))

    console.print(rankings)
    console.print(breakdown)


def render_event(event_code: str, bucket: EventBucket) -> None:
    stats = bucket.details.stats
    event_record = compute_record(bucket.matches)
    table = Table(
        title=f"{event_code} - {bucket.details.name or ''}",
        caption=(
            f"Rank {stats.rank} | Record {stats.wins}-{stats.losses}-{stats.ties} | "
            f"RP {stats.rp:.2f} | TB1 {stats.tb1:.1f} | TB2 {stats.tb2:.1f} | "
            f"Played {event_record}"
        ),
    )
    for column in ("Match", "Alliance", "Red", "Blue", "Auto", "TeleOp", "Result", "Status"):
        table.add_column(column)

    for match in bucket.matches:
        own = match.own_score
        flags = [
            label
            for label, flag in (
                ("Surrogate", match.surrogate),
                ("No Show", match.no_show),
                ("Disqualified", match.dq),
            )
            if flag
        ]
        level = LEVEL_ABBREVIATIONS.get(match.match_type, match.match_type)
        table.add_row(
            f"{level}-{match.match_number}",
            f"{match.alliance} {match.station or ''}".strip(),
            str(effective_score(match.red_score)),
            str(effective_score(match.blue_score)),
            str((own.auto_points if own else None) or 0),
            str((own.dc_points if own else None) or 0),
            determine_result(match).value,
            ", ".join(flags),
        )
    console.print(table)


def render_analytics(result: LookupResult) -> None:
    analytics = result.analytics
    if not analytics.trend.scores:
        return
    distribution = analytics.phase_distribution
    trend = analytics.trend
    lines = [
        analytics.results.title,
        " / ".join(analytics.results.labels),
        " / ".join(distribution.labels),
        f"Mean no-penalty score: {analytics.phase_breakdown.average[0]:.1f}",
        f"{trend.window}-match average (latest): {trend.moving_average[-1]:.1f}",
    ]
    console.print(Panel("\n".join(lines), title="Analytics", expand=False))


def render(result: LookupResult) -> None:
    render_team_header(result)
    render_season_stats(result)
    console.rule("Event Statistics")
    if not result.events:
        console.print("No match data available")
        return
    for event_code, bucket in result.events.items():
        render_event(event_code, bucket)
    render_analytics(result)


async def run_lookup(team: str, season: Optional[int]) -> LookupResult:
    async with DashboardSession(settings=settings) as session:
        return await session.lookup(team, season)


@app.command()
def lookup(
    team: str = typer.Argument(..., help="FTC team number."),
    season: Optional[int] = typer.Option(
        None, "--season", "-s", help="Season year (defaults to the current season)."
    ),
) -> None:
    """Show a team's record, rankings, matches and analytics for a season."""
    try:
        result = asyncio.run(run_lookup(team, season))
    except (ApiError, InvalidLookupError) as e:
        logger.error(f"Lookup for team {team} failed: {e}")
        console.print(
            Panel(str(e), title="[red]Lookup failed[/red]", border_style="red")
        )
        raise typer.Exit(code=1)
    render(result)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)

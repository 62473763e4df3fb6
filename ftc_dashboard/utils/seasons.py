# ftc_dashboard/utils/seasons.py
from typing import List, Optional, Union


class InvalidLookupError(ValueError):
    """The requested team number or season cannot be looked up."""

    pass


def parse_team_number(value: Union[str, int]) -> int:
    """Accepts ``"12345"``, ``" 12345 "`` or ``12345``."""
    text = str(value).strip()
    if not text.isdigit() or int(text) <= 0:
        raise InvalidLookupError(f"Invalid team number: {value!r}")
    return int(text)


def season_range(rookie_year: Optional[int], current_season: int) -> List[int]:
    """Selectable seasons, newest first, back to the team's rookie year."""
    first = rookie_year or current_season
    return list(range(current_season, min(first, current_season) - 1, -1))


def resolve_season(
    requested: Optional[int], rookie_year: Optional[int], current_season: int
) -> int:
    """The season to look up; defaults to the current one."""
    if requested is None:
        return current_season
    seasons = season_range(rookie_year, current_season)
    if requested not in seasons:
        raise InvalidLookupError(
            f"Season {requested} is outside {seasons[-1]}-{seasons[0]}"
        )
    return requested

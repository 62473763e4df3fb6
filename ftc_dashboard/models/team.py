# ftc_dashboard/models/team.py
from typing import Optional

from .data_models import ApiModel


class Team(ApiModel):
    """An FTC team as returned by /teams/{number}."""

    number: int
    name: Optional[str] = None
    rookie_year: Optional[int] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None

    @property
    def location(self) -> str:
        parts = [part for part in (self.city, self.state, self.country) if part]
        return ", ".join(parts) or "Location Unknown"

    @property
    def display_name(self) -> str:
        return f"{self.number} - {self.name or 'Unknown Team'}"

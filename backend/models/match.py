from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class EventTime(BaseModel):
    date: str               # "YYYY-MM-DD"
    time: str               # "HH:MM" or "HH:MM:SS"
    source_assumed_utc: bool = True  # False: fields are display-zone wall clock already


class TargetInstant(BaseModel):
    """
    Event instant shifted into the app-wide display zone.

    `instant` is the UTC instant plus the fixed offset, so its UTC fields
    read as the wall clock in the display zone.
    """

    model_config = ConfigDict(frozen=True)

    instant: datetime
    offset_minutes: int


class KickoffInfo(BaseModel):
    label: str                      # e.g. "Tomorrow, 8:30 PM IST"
    countdown: Optional[str] = None  # None once the match has started
    starts_at: Optional[str] = None  # ISO-8601 with the display-zone offset


class Match(BaseModel):
    """TheSportsDB event, reduced to what the app displays."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="idEvent")
    name: Optional[str] = Field(default=None, alias="strEvent")
    league: Optional[str] = Field(default=None, alias="strLeague")
    home_team: Optional[str] = Field(default=None, alias="strHomeTeam")
    away_team: Optional[str] = Field(default=None, alias="strAwayTeam")
    home_team_id: Optional[str] = Field(default=None, alias="idHomeTeam")
    away_team_id: Optional[str] = Field(default=None, alias="idAwayTeam")
    home_score: Optional[str] = Field(default=None, alias="intHomeScore")
    away_score: Optional[str] = Field(default=None, alias="intAwayScore")
    status: Optional[str] = Field(default=None, alias="strStatus")
    date: Optional[str] = Field(default=None, alias="dateEvent")
    time: Optional[str] = Field(default=None, alias="strTime")
    kickoff: Optional[KickoffInfo] = None

from datetime import datetime, timezone
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from matchtime.formatter import kickoff_info
from models.match import EventTime, KickoffInfo, Match
from sportsdb.client import SportsDBClient
from sportsdb.config import SPORTSDB_PAST_SEASON, SPORTSDB_SEASON

router = APIRouter(tags=["matches"])


# ---------- Dependencies ----------

def get_sportsdb() -> Iterator[SportsDBClient]:
    with SportsDBClient() as client:
        yield client


# ---------- Helpers ----------

def _to_matches(events: list[dict], now: datetime) -> list[Match]:
    """Parse raw events and attach kickoff info; rows without an id are dropped."""
    matches = []
    for event in events:
        try:
            match = Match.model_validate(event)
        except ValidationError:
            continue
        match.kickoff = kickoff_info(match.date, match.time, now)
        matches.append(match)
    return matches


def _require(row: Optional[dict], what: str) -> dict:
    if row is None:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return row


# ---------- Endpoints ----------

@router.get("/kickoff", response_model=KickoffInfo)
async def get_kickoff(event_time: EventTime = Depends()):
    """Display label and countdown for raw dateEvent / strTime values."""
    return kickoff_info(
        event_time.date,
        event_time.time,
        datetime.now(timezone.utc),
        assume_utc=event_time.source_assumed_utc,
    )


@router.get("/leagues")
def list_leagues(client: SportsDBClient = Depends(get_sportsdb)):
    return client.all_leagues()


@router.get("/leagues/{league_id}")
def get_league(league_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return _require(client.league_details(league_id), "League")


@router.get("/leagues/{league_id}/upcoming", response_model=list[Match])
def upcoming_matches(league_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return _to_matches(client.upcoming_events(league_id), datetime.now(timezone.utc))


@router.get("/leagues/{league_id}/live", response_model=list[Match])
def live_matches(league_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return _to_matches(client.live_events(league_id), datetime.now(timezone.utc))


@router.get("/leagues/{league_id}/events", response_model=list[Match])
def season_matches(
    league_id: str,
    season: str = SPORTSDB_SEASON,
    client: SportsDBClient = Depends(get_sportsdb),
):
    return _to_matches(client.events_by_league(league_id, season), datetime.now(timezone.utc))


@router.get("/leagues/{league_id}/past", response_model=list[Match])
def past_matches(
    league_id: str,
    season: str = SPORTSDB_PAST_SEASON,
    client: SportsDBClient = Depends(get_sportsdb),
):
    return _to_matches(client.past_events(league_id, season), datetime.now(timezone.utc))


@router.get("/leagues/{league_id}/table")
def league_table(league_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return client.league_table(league_id)


@router.get("/leagues/{league_id}/teams")
def league_teams(league_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return client.teams_by_league(league_id)


@router.get("/live", response_model=list[Match])
def all_live_matches(client: SportsDBClient = Depends(get_sportsdb)):
    return _to_matches(client.live_events(), datetime.now(timezone.utc))


@router.get("/events/search", response_model=list[Match])
def search_matches(q: str = Query(..., min_length=1), client: SportsDBClient = Depends(get_sportsdb)):
    return _to_matches(client.search_events(q), datetime.now(timezone.utc))


@router.get("/events/{event_id}", response_model=Match)
def get_match(event_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    event = _require(client.event_details(event_id), "Event")
    matches = _to_matches([event], datetime.now(timezone.utc))
    if not matches:
        raise HTTPException(status_code=404, detail="Event not found")
    return matches[0]


@router.get("/teams/search")
def search_teams(name: str = Query(..., min_length=1), client: SportsDBClient = Depends(get_sportsdb)):
    return client.search_teams(name)


@router.get("/teams/{team_id}")
def get_team(team_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return _require(client.team_details(team_id), "Team")


@router.get("/teams/{team_id}/players")
def team_players(team_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return client.players_by_team(team_id)


@router.get("/players/search")
def search_players(name: str = Query(..., min_length=1), client: SportsDBClient = Depends(get_sportsdb)):
    return client.search_players(name)


@router.get("/players/{player_id}")
def get_player(player_id: str, client: SportsDBClient = Depends(get_sportsdb)):
    return _require(client.player_details(player_id), "Player")

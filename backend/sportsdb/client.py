"""
TheSportsDB v1 client.

Thin request/response wrapper: every lookup returns a list (possibly empty)
or a single dict (possibly None). Transport errors, HTTP errors and odd
payloads are logged and swallowed here so screens never have to handle them.
"""

import logging
from typing import Any, Optional

import httpx

from sportsdb.config import (
    SPORTSDB_BASE_URL,
    SPORTSDB_PAST_SEASON,
    SPORTSDB_SEASON,
    SPORTSDB_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class SportsDBClient:
    def __init__(
        self,
        *,
        base_url: str = SPORTSDB_BASE_URL,
        timeout_seconds: float = SPORTSDB_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SportsDBClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ─── Plumbing ──────────────────────────────────────────────────────

    def _get(self, endpoint: str, params: dict[str, Any]) -> Optional[dict]:
        url = f"{self.base_url}/{endpoint}"
        logger.debug("GET %s %s", url, params)
        try:
            resp = self._client.get(url, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("TheSportsDB %s %s failed: %s", endpoint, params, exc)
            return None
        if not isinstance(payload, dict):
            logger.warning("TheSportsDB %s returned a non-object payload", endpoint)
            return None
        return payload

    def _list(self, endpoint: str, key: str, **params: Any) -> list[dict]:
        payload = self._get(endpoint, params)
        rows = payload.get(key) if payload else None
        # The API answers "no results" with null, or with a string on some endpoints
        if not isinstance(rows, list):
            return []
        rows = [row for row in rows if isinstance(row, dict)]
        logger.debug("TheSportsDB %s -> %d %s", endpoint, len(rows), key)
        return rows

    def _first(self, endpoint: str, key: str, **params: Any) -> Optional[dict]:
        rows = self._list(endpoint, key, **params)
        return rows[0] if rows else None

    # ─── Leagues ───────────────────────────────────────────────────────

    def all_leagues(self) -> list[dict]:
        return self._list("all_leagues.php", "leagues")

    def league_details(self, league_id: str) -> Optional[dict]:
        return self._first("lookupleague.php", "leagues", id=league_id)

    def league_table(self, league_id: str, season: str = SPORTSDB_PAST_SEASON) -> list[dict]:
        return self._list("lookuptable.php", "table", l=league_id, s=season)

    def teams_by_league(self, league_id: str) -> list[dict]:
        return self._list("lookup_all_teams.php", "teams", id=league_id)

    # ─── Events ────────────────────────────────────────────────────────

    def events_by_league(self, league_id: str, season: str = SPORTSDB_SEASON) -> list[dict]:
        return self._list("eventsseason.php", "events", id=league_id, s=season)

    def past_events(self, league_id: str, season: str = SPORTSDB_PAST_SEASON) -> list[dict]:
        return self._list("eventsseason.php", "events", id=league_id, s=season)

    def upcoming_events(self, league_id: str) -> list[dict]:
        return self._list("eventsnextleague.php", "events", id=league_id)

    def live_events(self, league_id: Optional[str] = None) -> list[dict]:
        if league_id:
            return self._list("livescore.php", "events", l=league_id)
        return self._list("livescore.php", "events")

    def event_details(self, event_id: str) -> Optional[dict]:
        return self._first("lookupevent.php", "events", id=event_id)

    def search_events(self, query: str) -> list[dict]:
        return self._list("searchevents.php", "event", e=query)

    # ─── Teams & players ───────────────────────────────────────────────

    def team_details(self, team_id: str) -> Optional[dict]:
        return self._first("lookupteam.php", "teams", id=team_id)

    def search_teams(self, name: str) -> list[dict]:
        return self._list("searchteams.php", "teams", t=name)

    def players_by_team(self, team_id: str) -> list[dict]:
        return self._list("lookup_all_players.php", "player", id=team_id)

    def player_details(self, player_id: str) -> Optional[dict]:
        return self._first("lookupplayer.php", "players", id=player_id)

    def search_players(self, name: str) -> list[dict]:
        return self._list("searchplayers.php", "player", p=name)

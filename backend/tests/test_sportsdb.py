"""
Tests for the TheSportsDB client. Requests are served by httpx.MockTransport.
"""

import httpx

from sportsdb.client import SportsDBClient


def _client(handler) -> SportsDBClient:
    return SportsDBClient(base_url="https://sportsdb.test/api/v1/json/3", transport=httpx.MockTransport(handler))


class TestLookups:
    def test_all_leagues(self):
        def handler(request):
            assert request.url.path == "/api/v1/json/3/all_leagues.php"
            return httpx.Response(200, json={"leagues": [
                {"idLeague": "4328", "strLeague": "English Premier League"},
                {"idLeague": "4335", "strLeague": "Spanish La Liga"},
            ]})

        leagues = _client(handler).all_leagues()
        assert [l["idLeague"] for l in leagues] == ["4328", "4335"]

    def test_query_parameters(self):
        seen = []

        def handler(request):
            seen.append((request.url.path.rsplit("/", 1)[-1], dict(request.url.params)))
            return httpx.Response(200, json={})

        client = _client(handler)
        client.upcoming_events("4328")
        client.events_by_league("4328")
        client.past_events("4328", "2023-2024")
        client.live_events("4328")
        client.live_events()
        client.search_players("Bukayo Saka")
        client.league_table("4328")

        assert seen == [
            ("eventsnextleague.php", {"id": "4328"}),
            ("eventsseason.php", {"id": "4328", "s": "2024"}),
            ("eventsseason.php", {"id": "4328", "s": "2023-2024"}),
            ("livescore.php", {"l": "4328"}),
            ("livescore.php", {}),
            ("searchplayers.php", {"p": "Bukayo Saka"}),
            ("lookuptable.php", {"l": "4328", "s": "2024-2025"}),
        ]

    def test_single_entity_lookups_return_first_row(self):
        def handler(request):
            endpoint = request.url.path.rsplit("/", 1)[-1]
            payloads = {
                "lookupevent.php": {"events": [{"idEvent": "1"}, {"idEvent": "2"}]},
                "lookupplayer.php": {"players": [{"idPlayer": "34145937"}]},
                "lookupteam.php": {"teams": [{"idTeam": "133604"}]},
                "lookupleague.php": {"leagues": [{"idLeague": "4328"}]},
            }
            return httpx.Response(200, json=payloads[endpoint])

        client = _client(handler)
        assert client.event_details("1") == {"idEvent": "1"}
        assert client.player_details("34145937") == {"idPlayer": "34145937"}
        assert client.team_details("133604") == {"idTeam": "133604"}
        assert client.league_details("4328") == {"idLeague": "4328"}

    def test_result_keys_differ_per_endpoint(self):
        def handler(request):
            endpoint = request.url.path.rsplit("/", 1)[-1]
            if endpoint == "searchevents.php":
                return httpx.Response(200, json={"event": [{"idEvent": "9"}]})
            if endpoint == "lookup_all_players.php":
                return httpx.Response(200, json={"player": [{"idPlayer": "7"}]})
            return httpx.Response(200, json={"teams": [{"idTeam": "3"}]})

        client = _client(handler)
        assert client.search_events("Arsenal_vs_Chelsea") == [{"idEvent": "9"}]
        assert client.players_by_team("133604") == [{"idPlayer": "7"}]
        assert client.teams_by_league("4328") == [{"idTeam": "3"}]
        assert client.search_teams("Arsenal") == [{"idTeam": "3"}]


class TestFailuresAreSwallowed:
    def test_null_results(self):
        client = _client(lambda r: httpx.Response(200, json={"events": None}))
        assert client.upcoming_events("4328") == []
        assert client.event_details("1") is None

    def test_string_results(self):
        client = _client(lambda r: httpx.Response(200, json={"player": "No data"}))
        assert client.search_players("nobody") == []

    def test_http_error(self):
        client = _client(lambda r: httpx.Response(500, text="oops"))
        assert client.all_leagues() == []
        assert client.player_details("1") is None

    def test_invalid_json(self):
        client = _client(lambda r: httpx.Response(200, text="<!doctype html>"))
        assert client.live_events() == []

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        assert _client(handler).search_teams("Arsenal") == []

    def test_non_dict_rows_dropped(self):
        client = _client(lambda r: httpx.Response(200, json={"teams": [{"idTeam": "1"}, "junk", None]}))
        assert client.search_teams("x") == [{"idTeam": "1"}]

"""
TheSportsDB settings.

The public "3" key needs no signup; set SPORTSDB_BASE_URL to use a paid key.
"""

import os

SPORTSDB_BASE_URL = os.environ.get(
    "SPORTSDB_BASE_URL", "https://www.thesportsdb.com/api/v1/json/3"
).rstrip("/")

SPORTSDB_TIMEOUT_SECONDS = float(os.environ.get("SPORTSDB_TIMEOUT_SECONDS", "15"))

# eventsseason.php for the match list uses a single year, tables and past
# results use the split-year season name
SPORTSDB_SEASON = os.environ.get("SPORTSDB_SEASON", "2024")
SPORTSDB_PAST_SEASON = os.environ.get("SPORTSDB_PAST_SEASON", "2024-2025")

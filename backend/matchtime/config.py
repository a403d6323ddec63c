"""
Display timezone for every match time the app shows.

One fixed offset for the whole process, independent of the server's local
zone. Defaults to India Standard Time (UTC+05:30). Read once at import.
"""

import os
from datetime import timedelta

TARGET_OFFSET_MINUTES = int(os.environ.get("MATCH_TZ_OFFSET_MINUTES", "330"))
TARGET_OFFSET = timedelta(minutes=TARGET_OFFSET_MINUTES)
ZONE_LABEL = os.environ.get("MATCH_TZ_LABEL", "IST")

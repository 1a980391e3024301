"""Centralized constants for the Ascend logbook.

Grade vocabulary bounds and adapter defaults live here so every layer
imports from a single source of truth.
"""

# ---------- V-scale ----------
V_SCALE_MIN = 0
V_SCALE_MAX = 17

# ---------- YDS ----------
YDS_UNLETTERED = (6, 7, 8, 9)  # 5.6 - 5.9 carry no letter suffix
YDS_LETTERED_MIN = 10
YDS_LETTERED_MAX = 15
YDS_LETTERS = ("a", "b", "c", "d")
YDS_LETTER_STEP = 0.25  # each letter is a quarter of the integer grade

# ---------- Progress buckets ----------
ISO_WEEK_KEY_FORMAT = "{year:04d}-W{week:02d}"
MONTH_KEY_FORMAT = "{year:04d}-{month:02d}"

# ---------- Session API / HTTP ----------
DEFAULT_API_URL = "http://127.0.0.1:8080"
SESSIONS_ENDPOINT = "/api/sessions"
REQUEST_TIMEOUT = 15.0

# ---------- Logbook file ----------
LOGBOOK_SESSIONS_KEY = "sessions"

"""
Constants for the Fencing Scout application.

This module contains the fixed vocabularies and configuration defaults used
throughout the application.
"""

# Countdown clock
CLOCK_LENGTH_SECONDS = 60
TICK_INTERVAL_SECONDS = 1.0

# Persistence
SAVE_DEBOUNCE_SECONDS = 1.0
COLLECTION_NAME = "fencing_scout_matches"
DOCUMENT_NAME = "current_match"

# Archive slots for finalized match reports
MAX_ARCHIVED_REPORTS = 3

# Athletes
DEFAULT_ATHLETE_NAMES = {
    "A": "Athlete A",
    "B": "Athlete B",
}

# Track zones, in their default order on the piste
ZONES = ("Home", "Square", "House")
DEFAULT_ZONE_ORDER = list(ZONES)

# Tactical actions that can be tagged against a zone
TACTICAL_ACTIONS = ("Offensive", "Attack", "Defense", "Retreat", "Counter-Attack")

# Synthetic labels written to the log when a point is scored
POINT_LABELS = {
    "A": "Point for A",
    "B": "Point for B",
}

# Every category the analysis dashboard counts
ACTION_CATEGORIES = TACTICAL_ACTIONS + (POINT_LABELS["A"], POINT_LABELS["B"])

# Report text framing
REPORT_HEADER = "--- Match Scouting Report ({name_a} vs {name_b}) ---"
REPORT_FOOTER = "--- End of Report ---"

"""Shared dashboard constants.

Centralizes repeat values used across ingestion and aggregation so we can
document and adjust them in one place.
"""

# Activity distances arrive in meters; goals and display are kilometers
METERS_PER_KM = 1000.0

# Profile returned for an athlete no source has ever described
UNKNOWN_FIRST_NAME = "Unknown"
UNKNOWN_LAST_NAME = ""

# Goal CSV layout: [_, full name, athlete id, goal week 1, goal week 2, ...]
GOAL_NAME_COL = 1
GOAL_ID_COL = 2
GOAL_FIRST_WEEK_COL = 3

# Store key for an uploaded goals CSV that overrides the configured source
GOALS_OVERRIDE_KEY = "goals_csv"

"""Shared application constants.

Centralizes repeat values used by the API and the client views so we can
document and adjust them in one place.
"""

# Largest accepted photo upload (bytes)
PHOTO_MAX_BYTES = 10 * 1024 * 1024

# Fixed primary key of the single stored photo
PHOTO_ID = "photo"

# Weekly feature history page size (default and hard cap)
HISTORY_DEFAULT_LIMIT = 10
HISTORY_MAX_LIMIT = 50

# A job application with no follow-up becomes overdue after this many days
JOB_FOLLOW_UP_DAYS = 7

# Goals due within this many days land in "This Week" / "soon"
GOAL_SOON_DAYS = 7

# Goal buckets in display order
GOAL_BUCKETS = ["Overdue", "Today", "This Week", "Later", "No Due Date"]

# Default sticky-note color (light pastel)
NOTE_DEFAULT_COLOR = "#FEF3C7"

# Section label for notes without one
NOTE_UNCATEGORIZED = "Uncategorized"

# Fallback weekly targets on the completion card
COMPLETION_DEFAULT_TARGET = 5

"""Internal constants shared across the library."""

USER_AGENT = "pyvehicleops/1"

#: Label used when an event has no category for a histogram dimension.
UNKNOWN_LABEL = "Unknown"

#: Number of events shown in the activity feed of the reference dashboard.
DEFAULT_RECENT_FEED_SIZE = 6

EVENTS_PATH = "/events/"
SNAPSHOT_PATH_TEMPLATE = "/cameras/{camera_id}/snapshot"
DEFAULT_CAMERA_ID = 1

# ------------------------------------------------------------------
# Load gauge bounds (display only; averages are never clamped)
# ------------------------------------------------------------------

LOAD_GAUGE_MIN = 0.0
LOAD_GAUGE_MAX = 100.0


def clamp_load(value: float) -> float:
    """Clamp a load percentage into the ``0-100`` gauge range."""
    return min(LOAD_GAUGE_MAX, max(LOAD_GAUGE_MIN, float(value)))

"""pyvehicleops - Async client and aggregation engine for vehicle detection dashboards."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyvehicleops")
except PackageNotFoundError:
    __version__ = "0+local"
from pyvehicleops.aggregation import average_load, build_views, categorical_histogram, recent_feed
from pyvehicleops.client import VehicleOpsClient
from pyvehicleops.config import FeedConfig
from pyvehicleops.dashboard import Dashboard, RefreshChannel
from pyvehicleops.exceptions import (
    VehicleOpsConfigError,
    VehicleOpsDecodeError,
    VehicleOpsError,
    VehicleOpsTransportError,
)
from pyvehicleops.models import (
    CameraSnapshot,
    CategoryCount,
    DashboardViews,
    EventField,
    FeedOrder,
    VehicleEvent,
)
from pyvehicleops.state.store import EventStore

__all__ = [
    "__version__",
    "CameraSnapshot",
    "CategoryCount",
    "Dashboard",
    "DashboardViews",
    "EventField",
    "EventStore",
    "FeedConfig",
    "FeedOrder",
    "RefreshChannel",
    "VehicleEvent",
    "VehicleOpsClient",
    "VehicleOpsConfigError",
    "VehicleOpsDecodeError",
    "VehicleOpsError",
    "VehicleOpsTransportError",
    "average_load",
    "build_views",
    "categorical_histogram",
    "recent_feed",
]

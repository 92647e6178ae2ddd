"""Data models for vehicle analytics payloads and derived views."""

from pyvehicleops.models.event import EventField, VehicleEvent
from pyvehicleops.models.snapshot import CameraSnapshot
from pyvehicleops.models.views import CategoryCount, DashboardViews, FeedOrder

__all__ = [
    "CameraSnapshot",
    "CategoryCount",
    "DashboardViews",
    "EventField",
    "FeedOrder",
    "VehicleEvent",
]

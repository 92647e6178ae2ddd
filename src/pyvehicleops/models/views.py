"""Derived view models handed to the rendering layer."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyvehicleops._constants import clamp_load
from pyvehicleops.models.event import VehicleEvent


class FeedOrder(StrEnum):
    """How the activity feed picks its events."""

    SOURCE = "source"
    """Take the first events in delivered order (upstream sends newest first)."""
    NEWEST_FIRST = "newest_first"
    """Sort by timestamp descending first; events without one go last."""


class CategoryCount(BaseModel):
    """One bucket of a categorical histogram."""

    model_config = ConfigDict(frozen=True)

    label: str
    count: int = Field(ge=0)


class DashboardViews(BaseModel):
    """Every derived view for one event collection.

    Built by :func:`pyvehicleops.aggregation.build_views`; never cached.
    """

    model_config = ConfigDict(frozen=True)

    vehicle_mix: list[CategoryCount] = Field(default_factory=list)
    material_mix: list[CategoryCount] = Field(default_factory=list)
    average_load: float = 0.0
    """Unrounded, unclamped mean of the valid load percentages."""
    recent: list[VehicleEvent] = Field(default_factory=list)
    total_events: int = 0
    last_capture: datetime | None = None
    """Timestamp of the first feed entry, if any."""

    @property
    def load_gauge(self) -> float:
        """Average load clamped to ``0-100`` for gauge display."""
        return clamp_load(self.average_load)

    @property
    def is_empty(self) -> bool:
        return self.total_events == 0

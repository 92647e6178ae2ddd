"""Dashboard controller.

Owns the current event collection and the current camera snapshot.
``refresh_events`` and ``refresh_snapshot`` are the only mutators; they fail
independently, and a failure leaves the previously held state in place
(stale-while-revalidate). Derived views are recomputed on every read.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Protocol

from pyvehicleops._constants import DEFAULT_RECENT_FEED_SIZE
from pyvehicleops.aggregation import build_views
from pyvehicleops.client import VehicleOpsClient
from pyvehicleops.exceptions import VehicleOpsError
from pyvehicleops.models.event import VehicleEvent
from pyvehicleops.models.snapshot import CameraSnapshot
from pyvehicleops.models.views import DashboardViews, FeedOrder
from pyvehicleops.state.snapshot import SnapshotSlot
from pyvehicleops.state.store import EventStore

_logger = logging.getLogger(__name__)


class RefreshChannel(StrEnum):
    EVENTS = "events"
    SNAPSHOT = "snapshot"


ErrorObserver = Callable[[RefreshChannel, VehicleOpsError], None]


class EventSource(Protocol):
    """What the dashboard needs from a client."""

    async def get_events(self) -> list[VehicleEvent]: ...

    async def get_snapshot(self, camera_id: int | str | None = None) -> CameraSnapshot: ...


class Dashboard:
    """Explicit state container behind the operations dashboard.

    Parameters
    ----------
    source
        Anything providing ``get_events`` and ``get_snapshot``, normally a
        :class:`~pyvehicleops.client.VehicleOpsClient`.
    recent_size
        Length of the activity feed.
    feed_order
        Ordering rule for the activity feed.
    camera_id
        Camera passed to ``get_snapshot``; ``None`` uses the source default.
    on_error
        Called with the channel and exception whenever a refresh fails.
    store
        Event store to use; a fresh one by default.
    """

    def __init__(
        self,
        source: EventSource,
        *,
        recent_size: int = DEFAULT_RECENT_FEED_SIZE,
        feed_order: FeedOrder = FeedOrder.SOURCE,
        camera_id: int | str | None = None,
        on_error: ErrorObserver | None = None,
        store: EventStore | None = None,
    ) -> None:
        if recent_size < 0:
            raise ValueError(f"recent_size must be >= 0, got {recent_size}")
        self._source = source
        self._recent_size = recent_size
        self._feed_order = feed_order
        self._camera_id = camera_id
        self._on_error = on_error
        self._store = store if store is not None else EventStore()
        self._snapshot = SnapshotSlot()
        self._events_error: VehicleOpsError | None = None
        self._requested_generation = 0

    @classmethod
    def from_client(cls, client: VehicleOpsClient, *, on_error: ErrorObserver | None = None) -> Dashboard:
        """Build a dashboard using the feed settings of *client*'s config."""
        config = client.config
        return cls(
            client,
            recent_size=config.recent_feed_size,
            feed_order=config.feed_order,
            camera_id=config.camera_id,
            on_error=on_error,
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    async def refresh_events(self) -> bool:
        """Replace the event collection with a fresh fetch.

        Returns ``True`` when the collection was replaced. On failure the
        previous collection stays current. A refresh that completes after a
        later-issued one has already been applied is discarded.
        """
        self._requested_generation += 1
        generation = self._requested_generation
        try:
            events = await self._source.get_events()
        except VehicleOpsError as exc:
            # A superseded request's failure says nothing about the current data.
            if generation == self._requested_generation:
                self._events_error = exc
            self._report(RefreshChannel.EVENTS, exc)
            return False

        replaced = self._store.replace_all(events, generation=generation)
        if replaced:
            self._events_error = None
            _logger.debug("Event collection replaced (%d events, generation %d)", len(events), generation)
        return replaced

    async def refresh_snapshot(self) -> bool:
        """Fetch a new snapshot; on failure the previous image stays active."""
        try:
            snapshot = await self._source.get_snapshot(self._camera_id)
        except VehicleOpsError as exc:
            self._snapshot.record_failure(exc)
            self._report(RefreshChannel.SNAPSHOT, exc)
            return False

        self._snapshot.store(snapshot)
        return True

    async def refresh_all(self) -> tuple[bool, bool]:
        """Run both refreshes concurrently; neither waits on the other."""
        events_ok, snapshot_ok = await asyncio.gather(self.refresh_events(), self.refresh_snapshot())
        return events_ok, snapshot_ok

    def _report(self, channel: RefreshChannel, exc: VehicleOpsError) -> None:
        _logger.warning("%s refresh failed, keeping previous data: %s", channel.value.capitalize(), exc)
        if self._on_error is not None:
            self._on_error(channel, exc)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def views(self) -> DashboardViews:
        """Derived views for the current collection, recomputed on each call."""
        return build_views(self._store.current(), recent_size=self._recent_size, order=self._feed_order)

    @property
    def events(self) -> tuple[VehicleEvent, ...]:
        return self._store.current()

    @property
    def snapshot(self) -> CameraSnapshot | None:
        return self._snapshot.current

    @property
    def last_events_error(self) -> VehicleOpsError | None:
        return self._events_error

    @property
    def last_snapshot_error(self) -> BaseException | None:
        return self._snapshot.last_error

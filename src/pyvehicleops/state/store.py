"""In-memory event store.

Holds the one event collection the aggregation engine reads. A refresh
replaces the collection wholesale; there is no merge, diff or per-event
update.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from pyvehicleops.models.event import VehicleEvent

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def should_accept_generation(*, current: int | None, incoming: int | None) -> bool:
    """Decide whether a refresh result may replace the stored collection.

    Results without a generation ticket always win (completion order).
    A ticketed result is rejected only when a newer ticket was applied.
    """
    if incoming is None or current is None:
        return True
    return incoming >= current


class EventStore:
    """Current event collection, replaced atomically on each refresh.

    Readers get an immutable tuple, so an aggregation pass never observes a
    partially replaced collection.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._events: tuple[VehicleEvent, ...] = ()
        self._generation: int | None = None
        self._replaced_at: datetime | None = None

    def replace_all(self, events: Iterable[VehicleEvent], *, generation: int | None = None) -> bool:
        """Swap in a new collection.

        Parameters
        ----------
        events
            The complete new collection, in source order.
        generation
            Optional request ticket. A result carrying a ticket older than
            the last applied one is dropped.

        Returns
        -------
        bool
            ``True`` when the collection was replaced.
        """
        if not should_accept_generation(current=self._generation, incoming=generation):
            _logger.debug(
                "Dropping superseded event refresh (generation %s < %s)",
                generation,
                self._generation,
            )
            return False

        self._events = tuple(events)
        if generation is not None:
            self._generation = generation
        self._replaced_at = self._clock()
        return True

    def current(self) -> tuple[VehicleEvent, ...]:
        return self._events

    @property
    def replaced_at(self) -> datetime | None:
        """When the collection was last replaced, ``None`` before the first refresh."""
        return self._replaced_at

    @property
    def generation(self) -> int | None:
        return self._generation

    def __len__(self) -> int:
        return len(self._events)

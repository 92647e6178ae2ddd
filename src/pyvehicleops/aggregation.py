"""Aggregation engine.

Pure functions from an event collection to the dashboard's derived views.
Nothing here performs I/O or keeps state: every view is recomputed from the
collection it is given. Malformed fields were already normalized when the
events were decoded, so none of these functions raise on bad data.
"""

from __future__ import annotations

from collections.abc import Sequence

from pyvehicleops._constants import DEFAULT_RECENT_FEED_SIZE
from pyvehicleops.models.event import EventField, VehicleEvent
from pyvehicleops.models.views import CategoryCount, DashboardViews, FeedOrder


def categorical_histogram(events: Sequence[VehicleEvent], field: EventField) -> list[CategoryCount]:
    """Count events per label of *field*.

    Missing or empty labels are counted under ``"Unknown"``. Buckets are
    returned in the order their label was first seen, not sorted.
    """
    selected = EventField(field)
    counts: dict[str, int] = {}
    for event in events:
        label = event.label(selected)
        counts[label] = counts.get(label, 0) + 1
    return [CategoryCount(label=label, count=count) for label, count in counts.items()]


def average_load(events: Sequence[VehicleEvent]) -> float:
    """Mean of every valid ``load_percentage``; ``0.0`` when there is none.

    Absent and non-numeric loads are left out of both the sum and the count.
    Values outside ``0-100`` are averaged as reported.
    """
    loads = [event.load_percentage for event in events if event.load_percentage is not None]
    if not loads:
        return 0.0
    return sum(loads) / len(loads)


def _newest_first(events: Sequence[VehicleEvent]) -> list[VehicleEvent]:
    # sorted() is stable, so events sharing a timestamp keep source order.
    dated = sorted(
        (event for event in events if event.timestamp is not None),
        key=lambda event: event.timestamp,  # type: ignore[arg-type,return-value]
        reverse=True,
    )
    undated = [event for event in events if event.timestamp is None]
    return dated + undated


def recent_feed(
    events: Sequence[VehicleEvent],
    k: int = DEFAULT_RECENT_FEED_SIZE,
    *,
    order: FeedOrder = FeedOrder.SOURCE,
) -> list[VehicleEvent]:
    """Return the first ``min(k, len(events))`` events.

    With ``FeedOrder.SOURCE`` this is a plain prefix of the collection and
    relies on the upstream service delivering newest first.
    ``FeedOrder.NEWEST_FIRST`` sorts by timestamp before taking the prefix.

    Raises
    ------
    ValueError
        If *k* is negative.
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")
    if FeedOrder(order) is FeedOrder.NEWEST_FIRST:
        return _newest_first(events)[:k]
    return list(events[:k])


def build_views(
    events: Sequence[VehicleEvent],
    *,
    recent_size: int = DEFAULT_RECENT_FEED_SIZE,
    order: FeedOrder = FeedOrder.SOURCE,
) -> DashboardViews:
    """Compute every derived view for *events* in one pass."""
    recent = recent_feed(events, recent_size, order=order)
    return DashboardViews(
        vehicle_mix=categorical_histogram(events, EventField.VEHICLE_TYPE),
        material_mix=categorical_histogram(events, EventField.MATERIAL_TYPE),
        average_load=average_load(events),
        recent=recent,
        total_events=len(events),
        last_capture=recent[0].timestamp if recent else None,
    )

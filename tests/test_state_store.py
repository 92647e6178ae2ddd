from __future__ import annotations

from datetime import UTC, datetime

from pyvehicleops.exceptions import VehicleOpsTransportError
from pyvehicleops.models.event import VehicleEvent
from pyvehicleops.models.snapshot import CameraSnapshot
from pyvehicleops.state.snapshot import SnapshotSlot
from pyvehicleops.state.store import EventStore, should_accept_generation


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def _events(*types: str) -> list[VehicleEvent]:
    return [VehicleEvent(vehicle_type=vehicle_type) for vehicle_type in types]


def test_store_starts_empty() -> None:
    store = EventStore(clock=_dt)

    assert store.current() == ()
    assert store.replaced_at is None
    assert len(store) == 0


def test_replace_all_swaps_whole_collection() -> None:
    store = EventStore(clock=_dt)

    store.replace_all(_events("car", "van"))
    store.replace_all(_events("truck"))

    assert [event.vehicle_type for event in store.current()] == ["truck"]
    assert store.replaced_at == _dt()


def test_replace_with_empty_leaves_no_residual_state() -> None:
    store = EventStore(clock=_dt)
    store.replace_all(_events("car", "van"))

    assert store.replace_all([]) is True

    assert store.current() == ()


def test_current_is_immutable_snapshot_of_input() -> None:
    store = EventStore(clock=_dt)
    source = _events("car")
    store.replace_all(source)

    source.append(VehicleEvent(vehicle_type="van"))

    assert isinstance(store.current(), tuple)
    assert len(store.current()) == 1


def test_superseded_generation_is_dropped() -> None:
    store = EventStore(clock=_dt)

    assert store.replace_all(_events("new"), generation=2) is True
    assert store.replace_all(_events("old"), generation=1) is False

    assert [event.vehicle_type for event in store.current()] == ["new"]
    assert store.generation == 2


def test_untagged_replace_uses_completion_order() -> None:
    store = EventStore(clock=_dt)
    store.replace_all(_events("tagged"), generation=5)

    assert store.replace_all(_events("untagged")) is True
    assert [event.vehicle_type for event in store.current()] == ["untagged"]


def test_should_accept_generation() -> None:
    assert should_accept_generation(current=None, incoming=1)
    assert should_accept_generation(current=3, incoming=None)
    assert should_accept_generation(current=3, incoming=3)
    assert should_accept_generation(current=3, incoming=4)
    assert not should_accept_generation(current=3, incoming=2)


def test_snapshot_slot_keeps_image_on_failure() -> None:
    slot = SnapshotSlot()
    image = CameraSnapshot(camera_id=1, content=b"img", fetched_at=_dt())
    slot.store(image)

    error = VehicleOpsTransportError("boom")
    slot.record_failure(error)

    assert slot.current is image
    assert slot.last_error is error


def test_snapshot_slot_success_clears_error() -> None:
    slot = SnapshotSlot()
    slot.record_failure(VehicleOpsTransportError("boom"))

    slot.store(CameraSnapshot(camera_id=1, content=b"img"))

    assert slot.last_error is None

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from pyvehicleops.client import VehicleOpsClient
from pyvehicleops.config import FeedConfig
from pyvehicleops.dashboard import Dashboard
from pyvehicleops.exceptions import VehicleOpsDecodeError, VehicleOpsError, VehicleOpsTransportError

_JPEG = b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9"


@dataclass
class FakeAnalyticsBackend:
    events: Any = field(default_factory=list)
    events_status: int = 200
    events_body: str | None = None
    snapshot_status: int = 200
    snapshot_delay: float = 0.0
    calls: dict[str, int] = field(default_factory=dict)

    def _record_call(self, endpoint: str) -> None:
        self.calls[endpoint] = self.calls.get(endpoint, 0) + 1

    async def handle_events(self, request: web.Request) -> web.Response:
        self._record_call(request.path)
        if self.events_body is not None:
            return web.Response(status=self.events_status, text=self.events_body, content_type="application/json")
        return web.json_response(self.events, status=self.events_status)

    async def handle_snapshot(self, request: web.Request) -> web.Response:
        self._record_call(request.path)
        if self.snapshot_delay:
            await asyncio.sleep(self.snapshot_delay)
        if self.snapshot_status != 200:
            return web.Response(status=self.snapshot_status, text="camera offline")
        return web.Response(body=_JPEG, content_type="image/jpeg")

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/events/", self.handle_events)
        app.router.add_get("/cameras/{camera_id}/snapshot", self.handle_snapshot)
        return app


_SAMPLE_EVENTS = [
    {
        "id": 12,
        "timestamp": "2026-10-18T09:15:00Z",
        "vehicle_type": "truck",
        "material_type": "gravel",
        "load_percentage": 80,
        "entry_exit": "entry",
        "gate_id": 1,
        "camera_id": 1,
        "confidence": 0.91,
    },
    {"id": 11, "timestamp": "2026-10-18T09:10:00Z", "vehicle_type": "", "load_percentage": "abc"},
    {"id": 10, "timestamp": "2026-10-18T09:05:00Z", "vehicle_type": "truck", "material_type": "sand", "load_percentage": 40},
]


@pytest.fixture
def backend() -> FakeAnalyticsBackend:
    return FakeAnalyticsBackend(events=list(_SAMPLE_EVENTS))


@pytest_asyncio.fixture
async def config(backend: FakeAnalyticsBackend) -> AsyncIterator[FeedConfig]:
    async with test_utils.TestServer(backend.app()) as server:
        yield FeedConfig(base_url=f"http://{server.host}:{server.port}", request_timeout=2.0)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_fetch_events_and_build_views(config: FeedConfig, backend: FakeAnalyticsBackend) -> None:
    async with VehicleOpsClient(config) as client:
        dashboard = Dashboard.from_client(client)
        assert await dashboard.refresh_events() is True

    views = dashboard.views()
    assert views.total_events == 3
    assert [(b.label, b.count) for b in views.vehicle_mix] == [("truck", 2), ("Unknown", 1)]
    assert [(b.label, b.count) for b in views.material_mix] == [("gravel", 1), ("Unknown", 1), ("sand", 1)]
    assert views.average_load == 60
    assert [event.id for event in views.recent] == [12, 11, 10]
    assert views.recent[0].confidence == 0.91
    assert views.last_capture is not None
    assert backend.calls == {"/events/": 1}


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_snapshot_bytes_returned_verbatim(config: FeedConfig, backend: FakeAnalyticsBackend) -> None:
    async with VehicleOpsClient(config) as client:
        snapshot = await client.get_snapshot()
        other = await client.get_snapshot(camera_id=3)

    assert snapshot.content == _JPEG
    assert snapshot.content_type == "image/jpeg"
    assert snapshot.camera_id == 1
    assert other.camera_id == 3
    assert backend.calls == {"/cameras/1/snapshot": 1, "/cameras/3/snapshot": 1}


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_http_error_maps_to_transport_error(config: FeedConfig, backend: FakeAnalyticsBackend) -> None:
    backend.events_status = 503
    backend.events = {"detail": "maintenance"}

    async with VehicleOpsClient(config) as client:
        with pytest.raises(VehicleOpsTransportError) as exc_info:
            await client.get_events()

    assert exc_info.value.status_code == 503
    assert exc_info.value.endpoint == "/events/"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_non_array_body_is_decode_error(config: FeedConfig, backend: FakeAnalyticsBackend) -> None:
    backend.events = {"events": []}

    async with VehicleOpsClient(config) as client:
        with pytest.raises(VehicleOpsDecodeError):
            await client.get_events()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_invalid_json_is_decode_error(config: FeedConfig, backend: FakeAnalyticsBackend) -> None:
    backend.events_body = "[{not json"

    async with VehicleOpsClient(config) as client:
        with pytest.raises(VehicleOpsDecodeError):
            await client.get_events()


@pytest.mark.asyncio
@pytest.mark.e2e
@pytest.mark.parametrize(
    "body",
    [
        '[{"load_percentage": ' + "9" * 5000 + "}]",
        "[" * 100_000 + "]" * 100_000,
    ],
    ids=["oversized-int-literal", "deep-nesting"],
)
async def test_e2e_undecodable_body_reported_to_observer(
    config: FeedConfig, backend: FakeAnalyticsBackend, body: str
) -> None:
    errors: list[VehicleOpsError] = []

    async with VehicleOpsClient(config) as client:
        dashboard = Dashboard.from_client(client, on_error=lambda _channel, exc: errors.append(exc))
        assert await dashboard.refresh_events() is True

        backend.events_body = body
        assert await dashboard.refresh_events() is False

    assert len(errors) == 1
    assert isinstance(errors[0], VehicleOpsDecodeError)
    assert dashboard.views().total_events == 3


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_snapshot_failure_isolated_from_events(config: FeedConfig, backend: FakeAnalyticsBackend) -> None:
    async with VehicleOpsClient(config) as client:
        dashboard = Dashboard.from_client(client)
        await dashboard.refresh_all()
        first_image = dashboard.snapshot
        before = dashboard.views()

        backend.snapshot_status = 500
        assert await dashboard.refresh_snapshot() is False

    assert first_image is not None
    assert dashboard.snapshot is first_image
    assert isinstance(dashboard.last_snapshot_error, VehicleOpsTransportError)
    assert dashboard.views() == before


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_timeout_maps_to_transport_error(backend: FakeAnalyticsBackend) -> None:
    backend.snapshot_delay = 1.0
    async with test_utils.TestServer(backend.app()) as server:
        config = FeedConfig(base_url=f"http://{server.host}:{server.port}", request_timeout=0.1)
        async with VehicleOpsClient(config) as client:
            with pytest.raises(VehicleOpsTransportError, match="timed out"):
                await client.get_snapshot()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_connection_refused_maps_to_transport_error() -> None:
    config = FeedConfig(base_url="http://127.0.0.1:9", request_timeout=2.0)

    async with VehicleOpsClient(config) as client:
        with pytest.raises(VehicleOpsTransportError):
            await client.get_events()


@pytest.mark.asyncio
async def test_external_session_is_not_closed(config: FeedConfig) -> None:
    async with aiohttp.ClientSession() as session:
        async with VehicleOpsClient(config, session=session) as client:
            await client.get_events()
        assert not session.closed


@pytest.mark.asyncio
async def test_client_requires_context_manager(config: FeedConfig) -> None:
    client = VehicleOpsClient(config)

    with pytest.raises(VehicleOpsError):
        await client.get_events()

"""High-level async client for the vehicle analytics backend."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyvehicleops._api.events import fetch_events
from pyvehicleops._api.snapshot import fetch_snapshot
from pyvehicleops._transport import HttpTransport, Transport
from pyvehicleops.config import FeedConfig
from pyvehicleops.exceptions import VehicleOpsError
from pyvehicleops.models.event import VehicleEvent
from pyvehicleops.models.snapshot import CameraSnapshot

_logger = logging.getLogger(__name__)


class VehicleOpsClient:
    """Async client for the event and snapshot endpoints.

    Usage::

        async with VehicleOpsClient(config) as client:
            events = await client.get_events()
            snapshot = await client.get_snapshot()
    """

    def __init__(
        self,
        config: FeedConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> FeedConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> VehicleOpsClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise VehicleOpsError("Client not initialized. Use 'async with VehicleOpsClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_events(self) -> list[VehicleEvent]:
        """Fetch the whole event collection in source order."""
        return await fetch_events(self._config, self._require_transport())

    async def get_snapshot(self, camera_id: int | str | None = None) -> CameraSnapshot:
        """Fetch the latest snapshot for *camera_id* (default: ``config.camera_id``)."""
        snapshot = await fetch_snapshot(self._config, self._require_transport(), camera_id)
        _logger.debug("Fetched %d byte snapshot for camera %s", snapshot.size, snapshot.camera_id)
        return snapshot

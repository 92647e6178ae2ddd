"""Event collection endpoint."""

from __future__ import annotations

import logging

from pydantic import TypeAdapter

from pyvehicleops._transport import Transport
from pyvehicleops.config import FeedConfig
from pyvehicleops.exceptions import VehicleOpsDecodeError
from pyvehicleops.models.event import VehicleEvent

_logger = logging.getLogger(__name__)

_EVENTS_ADAPTER = TypeAdapter(list[VehicleEvent])


async def fetch_events(config: FeedConfig, transport: Transport) -> list[VehicleEvent]:
    """Fetch and decode the full event collection.

    Records are decoded leniently and kept in the order the server sent
    them. Only a body that is not a JSON array is treated as a failure.
    """
    endpoint = config.events_path
    decoded = await transport.get_json(endpoint)

    if not isinstance(decoded, list):
        raise VehicleOpsDecodeError(
            f"Expected a JSON array from {endpoint}, got {type(decoded).__name__}",
            endpoint=endpoint,
        )

    events = _EVENTS_ADAPTER.validate_python(decoded)
    _logger.debug("Decoded %d events from %s", len(events), endpoint)
    return events

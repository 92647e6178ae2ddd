"""Camera snapshot endpoint."""

from __future__ import annotations

from pyvehicleops._transport import Transport
from pyvehicleops.config import FeedConfig
from pyvehicleops.exceptions import VehicleOpsTransportError
from pyvehicleops.models.snapshot import CameraSnapshot


async def fetch_snapshot(
    config: FeedConfig,
    transport: Transport,
    camera_id: int | str | None = None,
) -> CameraSnapshot:
    """Fetch the latest image for *camera_id* without interpreting it."""
    camera = config.camera_id if camera_id is None else camera_id
    endpoint = config.snapshot_path(camera)
    content, content_type = await transport.get_bytes(endpoint)
    if not content:
        raise VehicleOpsTransportError(f"Empty snapshot payload from {endpoint}", endpoint=endpoint)
    return CameraSnapshot(camera_id=camera, content=content, content_type=content_type)

"""Camera snapshot model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class CameraSnapshot(BaseModel):
    """Raw image returned by the snapshot endpoint.

    The payload is kept as opaque bytes; decoding and display belong to
    the rendering layer.

    Parameters
    ----------
    camera_id : int or str
        Camera the image was requested for.
    content : bytes
        Image payload exactly as received.
    content_type : str
        ``Content-Type`` reported by the server.
    fetched_at : datetime
        When the image was received (UTC).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    camera_id: int | str
    content: bytes
    content_type: str = "application/octet-stream"
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def size(self) -> int:
        return len(self.content)

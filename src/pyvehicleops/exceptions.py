"""Custom exception hierarchy for pyvehicleops."""

from __future__ import annotations


class VehicleOpsError(Exception):
    """Base exception for all pyvehicleops errors."""


class VehicleOpsConfigError(VehicleOpsError):
    """Invalid or missing configuration."""


class VehicleOpsTransportError(VehicleOpsError):
    """HTTP-level failure (network, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class VehicleOpsDecodeError(VehicleOpsTransportError):
    """Response body could not be decoded into the expected shape.

    Raised when the event collection endpoint answers with something that
    is not a JSON array.  Individual malformed records never raise; they are
    normalized field by field during decoding.
    """

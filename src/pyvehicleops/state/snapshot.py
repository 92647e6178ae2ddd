"""Holder for the most recent camera snapshot."""

from __future__ import annotations

from pyvehicleops.models.snapshot import CameraSnapshot


class SnapshotSlot:
    """Active snapshot plus the outcome of the last fetch attempt.

    A failed fetch never clears the active image.
    """

    def __init__(self) -> None:
        self._current: CameraSnapshot | None = None
        self._last_error: BaseException | None = None

    def store(self, snapshot: CameraSnapshot) -> None:
        self._current = snapshot
        self._last_error = None

    def record_failure(self, exc: BaseException) -> None:
        self._last_error = exc

    @property
    def current(self) -> CameraSnapshot | None:
        return self._current

    @property
    def last_error(self) -> BaseException | None:
        return self._last_error

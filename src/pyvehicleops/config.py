"""Client configuration for pyvehicleops."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyvehicleops._constants import (
    DEFAULT_CAMERA_ID,
    DEFAULT_RECENT_FEED_SIZE,
    EVENTS_PATH,
    SNAPSHOT_PATH_TEMPLATE,
    USER_AGENT,
)
from pyvehicleops.exceptions import VehicleOpsConfigError
from pyvehicleops.models.views import FeedOrder


def _env_number(env: Mapping[str, str], key: str, cast: type[int] | type[float]) -> Any:
    raw = env.get(key)
    if raw is None:
        return None
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise VehicleOpsConfigError(f"{key} must be a number, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class FeedConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend base URL, e.g. ``"http://localhost:8000"``.
    events_path : str
        Path of the event collection resource.
    snapshot_path_template : str
        Path of the snapshot resource; ``{camera_id}`` is substituted.
    camera_id : int or str
        Camera whose snapshot is fetched when none is given explicitly.
    recent_feed_size : int
        Number of events kept in the activity feed (``k``).
    feed_order : FeedOrder
        ``SOURCE`` keeps the delivered order (the upstream service is
        expected to deliver newest first); ``NEWEST_FIRST`` sorts by
        timestamp before taking the feed prefix.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str
    events_path: str = EVENTS_PATH
    snapshot_path_template: str = SNAPSHOT_PATH_TEMPLATE
    camera_id: int | str = DEFAULT_CAMERA_ID
    recent_feed_size: int = DEFAULT_RECENT_FEED_SIZE
    feed_order: FeedOrder = FeedOrder.SOURCE
    request_timeout: float = 10.0
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if not self.base_url:
            raise VehicleOpsConfigError("base_url must be non-empty")
        if self.recent_feed_size < 0:
            raise VehicleOpsConfigError(f"recent_feed_size must be >= 0, got {self.recent_feed_size}")
        if self.request_timeout <= 0:
            raise VehicleOpsConfigError(f"request_timeout must be > 0, got {self.request_timeout}")
        # Normalise so path joins never produce a double slash.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def snapshot_path(self, camera_id: int | str | None = None) -> str:
        """Snapshot endpoint for *camera_id* (defaults to ``self.camera_id``)."""
        camera = self.camera_id if camera_id is None else camera_id
        return self.snapshot_path_template.format(camera_id=camera)

    @classmethod
    def from_env(cls, **overrides: Any) -> FeedConfig:
        """Create configuration from environment variables.

        Reads ``VEHICLEOPS_BASE_URL`` and optional ``VEHICLEOPS_*``
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        FeedConfig
            Populated configuration.

        Raises
        ------
        VehicleOpsConfigError
            If a variable holds a value of the wrong shape.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "VEHICLEOPS_BASE_URL": "base_url",
            "VEHICLEOPS_EVENTS_PATH": "events_path",
            "VEHICLEOPS_SNAPSHOT_PATH": "snapshot_path_template",
            "VEHICLEOPS_CAMERA_ID": "camera_id",
            "VEHICLEOPS_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        feed_size = _env_number(env, "VEHICLEOPS_RECENT_FEED_SIZE", int)
        if feed_size is not None:
            config_kwargs["recent_feed_size"] = feed_size

        timeout = _env_number(env, "VEHICLEOPS_REQUEST_TIMEOUT", float)
        if timeout is not None:
            config_kwargs["request_timeout"] = timeout

        order_env = env.get("VEHICLEOPS_FEED_ORDER")
        if order_env is not None:
            try:
                config_kwargs["feed_order"] = FeedOrder(order_env.strip().lower())
            except ValueError as exc:
                choices = ", ".join(member.value for member in FeedOrder)
                raise VehicleOpsConfigError(f"VEHICLEOPS_FEED_ORDER must be one of {choices}, got {order_env!r}") from exc

        config_kwargs.update(overrides)

        if "base_url" not in config_kwargs:
            raise VehicleOpsConfigError("VEHICLEOPS_BASE_URL is not set")

        return cls(**config_kwargs)

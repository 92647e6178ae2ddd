"""HTTP transport for the vehicle analytics backend."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from pyvehicleops.config import FeedConfig
from pyvehicleops.exceptions import VehicleOpsDecodeError, VehicleOpsTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> Any:
        ...

    async def get_bytes(self, endpoint: str) -> tuple[bytes, str]:
        ...


class HttpTransport:
    """Plain GET transport on top of a shared ``aiohttp.ClientSession``."""

    def __init__(self, config: FeedConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        self._headers = {"user-agent": config.user_agent}

    async def _get(self, endpoint: str, *, accept: str) -> tuple[bytes, str]:
        url = f"{self._config.base_url}{endpoint}"
        headers = {**self._headers, "accept": accept}

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    preview = body[:200].decode("utf-8", errors="replace")
                    raise VehicleOpsTransportError(
                        f"HTTP {resp.status} from {endpoint}: {preview}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
                content_type = resp.headers.get("content-type", "application/octet-stream")
        except VehicleOpsTransportError:
            raise
        except asyncio.TimeoutError as exc:
            # aiohttp's ServerTimeoutError is both a ClientError and a TimeoutError.
            raise VehicleOpsTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise VehicleOpsTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        _logger.debug("GET %s -> %d bytes (%s)", url, len(body), content_type)
        return body, content_type

    async def get_json(self, endpoint: str) -> Any:
        """GET *endpoint* and decode the body as JSON."""
        body, _ = await self._get(endpoint, accept="application/json")
        try:
            return json.loads(body)
        # ValueError also covers JSONDecodeError, UnicodeDecodeError and the
        # int-digit limit; RecursionError comes from very deep nesting.
        except (ValueError, RecursionError) as exc:
            preview = body[:200].decode("utf-8", errors="replace")
            raise VehicleOpsDecodeError(
                f"Invalid JSON from {endpoint}: {preview}",
                endpoint=endpoint,
            ) from exc

    async def get_bytes(self, endpoint: str) -> tuple[bytes, str]:
        """GET *endpoint* and return the raw body with its content type."""
        return await self._get(endpoint, accept="image/*")

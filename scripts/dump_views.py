#!/usr/bin/env python3
"""Fetch the event collection once and print the derived dashboard views.

Configuration comes from ``VEHICLEOPS_*`` environment variables; the
command-line flags override them.

Usage::

    VEHICLEOPS_BASE_URL=http://localhost:8000 python scripts/dump_views.py
    python scripts/dump_views.py --base-url http://localhost:8000 --snapshot out.jpg
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyvehicleops import Dashboard, FeedConfig, FeedOrder, VehicleOpsClient, VehicleOpsError  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", help="Backend base URL (default: $VEHICLEOPS_BASE_URL)")
    parser.add_argument("--feed-size", type=int, help="Activity feed length")
    parser.add_argument("--order", choices=[member.value for member in FeedOrder], help="Activity feed ordering")
    parser.add_argument("--snapshot", type=Path, help="Also fetch the camera snapshot and write it here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.feed_size is not None:
        overrides["recent_feed_size"] = args.feed_size
    if args.order:
        overrides["feed_order"] = FeedOrder(args.order)
    return overrides


async def _run(args: argparse.Namespace) -> int:
    config = FeedConfig.from_env(**_overrides(args))

    async with VehicleOpsClient(config) as client:
        dashboard = Dashboard.from_client(client)
        if args.snapshot is not None:
            await dashboard.refresh_all()
        else:
            await dashboard.refresh_events()

        if dashboard.last_events_error is not None:
            print(f"event refresh failed: {dashboard.last_events_error}", file=sys.stderr)
            return 1

        views = dashboard.views()
        report = {
            "total_events": views.total_events,
            "last_capture": views.last_capture.isoformat() if views.last_capture else None,
            "average_load": round(views.average_load, 1),
            "vehicle_mix": [bucket.model_dump() for bucket in views.vehicle_mix],
            "material_mix": [bucket.model_dump() for bucket in views.material_mix],
            "recent": [
                {
                    "id": event.id,
                    "vehicle": event.vehicle_label,
                    "timestamp": event.timestamp.isoformat() if event.timestamp else None,
                    "entry_exit": event.entry_exit,
                    "gate_id": event.gate_id,
                    "camera_id": event.camera_id,
                    "confidence": event.confidence,
                }
                for event in views.recent
            ],
        }
        print(json.dumps(report, indent=2, default=str))

        if args.snapshot is not None:
            snapshot = dashboard.snapshot
            if snapshot is None:
                print(f"snapshot fetch failed: {dashboard.last_snapshot_error}", file=sys.stderr)
                return 1
            args.snapshot.write_bytes(snapshot.content)
            print(f"wrote {snapshot.size} bytes ({snapshot.content_type}) to {args.snapshot}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        return asyncio.run(_run(args))
    except VehicleOpsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

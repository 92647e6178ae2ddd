"""Ingestion layer.

Helpers that turn raw backend payloads into normalized domain objects.
"""

__all__: list[str] = []

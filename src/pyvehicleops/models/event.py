"""Vehicle detection event model."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from pyvehicleops._constants import UNKNOWN_LABEL
from pyvehicleops.ingestion.normalize import finite_float, label_or_none, parse_timestamp


class EventField(StrEnum):
    """Categorical event fields that can be histogrammed."""

    VEHICLE_TYPE = "vehicle_type"
    MATERIAL_TYPE = "material_type"


class VehicleEvent(BaseModel):
    """A single vehicle detection reported by the perception service.

    Decoding is lenient: malformed fields become ``None`` instead of
    failing validation, so a record is never rejected as a whole.
    Identifiers and metadata the library does not interpret are kept
    exactly as received.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: Any = Field(default=None, validation_alias=AliasChoices("id", "eventId", "event_id"))
    """Opaque identifier, only used as a rendering key."""
    timestamp: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("timestamp", "capturedAt", "captured_at"),
    )
    """Capture time (UTC when the payload carries no offset)."""
    vehicle_type: str | None = Field(default=None, validation_alias=AliasChoices("vehicle_type", "vehicleType"))
    material_type: str | None = Field(default=None, validation_alias=AliasChoices("material_type", "materialType"))
    load_percentage: float | None = Field(
        default=None,
        validation_alias=AliasChoices("load_percentage", "loadPercentage"),
    )
    """Reported load; not range checked."""
    entry_exit: Any = Field(default=None, validation_alias=AliasChoices("entry_exit", "entryExit"))
    gate_id: Any = Field(default=None, validation_alias=AliasChoices("gate_id", "gateId"))
    camera_id: Any = Field(default=None, validation_alias=AliasChoices("camera_id", "cameraId"))
    confidence: Any = Field(default=None, validation_alias=AliasChoices("confidence"))

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original record as received."""

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        # Records that are not JSON objects decode as an event with no fields.
        if not isinstance(values, Mapping):
            return {"raw": {}}
        merged = dict(values)
        if not isinstance(merged.get("raw"), dict):
            merged["raw"] = dict(values)
        return merged

    @field_validator("vehicle_type", "material_type", mode="before")
    @classmethod
    def _coerce_labels(cls, value: Any) -> str | None:
        return label_or_none(value)

    @field_validator("load_percentage", mode="before")
    @classmethod
    def _coerce_load(cls, value: Any) -> float | None:
        return finite_float(value)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)

    def label(self, field: EventField) -> str:
        """Category label for *field*, falling back to ``"Unknown"``."""
        value = getattr(self, EventField(field).value)
        return value if value else UNKNOWN_LABEL

    @property
    def vehicle_label(self) -> str:
        return self.label(EventField.VEHICLE_TYPE)

    @property
    def material_label(self) -> str:
        return self.label(EventField.MATERIAL_TYPE)

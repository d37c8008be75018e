"""LWT payload record and parser.

Every telemetry field is optional. A field that the display did not send is
held as :data:`MISSING` so it stays distinguishable from a reported ``0``,
``False`` or JSON ``null``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
import json
from typing import Any

from .errors import EmptyPayload, PayloadParseError


class _Missing:
    """Sentinel for a field absent from the LWT payload."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

LWT_FIELDS = (
    "battery_percentage",
    "battery_voltage",
    "charge_rate",
    "battery_sensor_present",
    "rssi",
    "sleep_time",
    "firmware_version",
    "free_heap",
)


@dataclass(frozen=True)
class LwtPayload:
    battery_percentage: Any = MISSING
    battery_voltage: Any = MISSING
    charge_rate: Any = MISSING
    battery_sensor_present: Any = MISSING
    rssi: Any = MISSING
    sleep_time: Any = MISSING
    firmware_version: Any = MISSING
    free_heap: Any = MISSING
    extras: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LwtPayload:
        known = {k: data[k] for k in LWT_FIELDS if k in data}
        extras = {k: v for k, v in data.items() if k not in LWT_FIELDS}
        return cls(**known, extras=extras)

    def is_present(self, name: str) -> bool:
        return getattr(self, name, MISSING) is not MISSING

    @property
    def is_online(self) -> bool:
        """Mirror of the availability template: online iff battery_percentage is sent."""
        return self.is_present("battery_percentage")

    def as_dict(self) -> dict[str, Any]:
        """Known fields that were present, in wire order. ``extras`` are left out."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name in LWT_FIELDS and self.is_present(f.name)
        }


def _is_empty(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, (str, bytes, bytearray)):
        return len(raw) == 0
    if isinstance(raw, (bool, int, float)):
        # 0, False and NaN
        return not raw or raw != raw
    return False


def parse_lwt_payload(raw: Any) -> LwtPayload:
    """Turn a raw or host-decoded payload into an :class:`LwtPayload`.

    Text and bytes are JSON-decoded; mappings are used as they are. A JSON
    document that is not an object yields a record with every field missing.

    Raises:
        EmptyPayload: for ``None``, ``""``, ``b""`` and pre-decoded ``0``,
            ``False`` or NaN.
        PayloadParseError: when text is not valid JSON.
    """
    if _is_empty(raw):
        raise EmptyPayload("Empty payload received")

    if isinstance(raw, Mapping):
        return LwtPayload.from_mapping(raw)

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PayloadParseError(f"Failed to parse LWT JSON: {exc}") from exc

    if isinstance(raw, str):
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PayloadParseError(f"Failed to parse LWT JSON: {exc}") from exc
        if isinstance(decoded, dict):
            return LwtPayload.from_mapping(decoded)
        return LwtPayload()

    # Pre-decoded non-object values (lists, numbers) carry no known fields
    return LwtPayload()


__all__ = ["LWT_FIELDS", "LwtPayload", "MISSING", "parse_lwt_payload"]

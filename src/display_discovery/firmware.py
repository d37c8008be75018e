"""Firmware version decoding.

Displays report their firmware as a single integer, ``major*100 + minor*10 +
patch`` (so ``123`` is ``v1.2.3``). Minor and patch are single digits by
convention only; larger values are not rejected.
"""

from __future__ import annotations

import math
from typing import Any

DEFAULT_FIRMWARE_VERSION = "v0.0.0"

# Same decode, evaluated by Home Assistant against the LWT state payload.
FIRMWARE_VALUE_TEMPLATE = (
    "{% set fw = value_json.firmware_version | int %}"
    "{% set major = (fw / 100) | int %}"
    "{% set minor = ((fw % 100) / 10) | int %}"
    "{% set patch = fw % 10 %}"
    "v{{ major }}.{{ minor }}.{{ patch }}"
)


def _as_int(raw: Any) -> int:
    """Coerce like the template's ``| int`` filter: unusable values become 0."""
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    return int(value) if math.isfinite(value) else 0


def decode_firmware_version(raw: Any) -> str:
    """Return ``v{major}.{minor}.{patch}`` for an encoded firmware number.

    Uses the same arithmetic as :data:`FIRMWARE_VALUE_TEMPLATE`, so the
    device's ``sw_version`` always agrees with the firmware sensor. Absent and
    non-numeric values decode to ``v0.0.0``; there is no range check, so
    ``True`` gives ``v0.0.1`` and ``-5`` gives ``v0.9.5``.

    >>> decode_firmware_version(235)
    'v2.3.5'
    >>> decode_firmware_version(None)
    'v0.0.0'
    """
    fw = _as_int(raw)
    major = int(fw / 100)
    minor = int((fw % 100) / 10)
    patch = fw % 10
    return f"v{major}.{minor}.{patch}"


__all__ = [
    "DEFAULT_FIRMWARE_VERSION",
    "FIRMWARE_VALUE_TEMPLATE",
    "decode_firmware_version",
]

"""Shape checks for generated discovery payloads (importable by tests)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .messages import OutboundMessage

REQUIRED_DISCOVERY_KEYS = (
    "name",
    "state_topic",
    "value_template",
    "platform",
    "object_id",
    "unique_id",
    "device",
    "availability",
)
REQUIRED_DEVICE_KEYS = ("identifiers", "name", "manufacturer", "model", "sw_version")
PLATFORMS = {"sensor", "binary_sensor"}


def validate_discovery_payload(payload: Any) -> list[str]:
    """Validate a single-entity discovery payload.

    Returns a list of error strings; empty list means OK.
    """
    errors: list[str] = []
    if not isinstance(payload, dict):
        return ["discovery: payload not dict"]

    missing = [k for k in REQUIRED_DISCOVERY_KEYS if k not in payload]
    if missing:
        errors.append(f"discovery: missing keys {missing}")

    platform = payload.get("platform")
    if platform is not None and platform not in PLATFORMS:
        errors.append(f"discovery: unexpected platform {platform!r}")
    if platform == "binary_sensor" and not (
        "payload_on" in payload and "payload_off" in payload
    ):
        errors.append("discovery: binary_sensor missing payload_on/payload_off")

    device = payload.get("device")
    if device is not None:
        if not isinstance(device, dict):
            errors.append("discovery: device not dict")
        else:
            dev_missing = [k for k in REQUIRED_DEVICE_KEYS if k not in device]
            if dev_missing:
                errors.append(f"discovery: device missing {dev_missing}")
            if not isinstance(device.get("identifiers", []), list):
                errors.append("discovery: device identifiers not list")

    availability = payload.get("availability")
    if availability is not None and not (
        isinstance(availability, dict) and availability.get("topic")
    ):
        errors.append("discovery: availability missing topic")

    return errors


def validate_messages(
    messages: Iterable[OutboundMessage], discovery_prefix: str = "homeassistant"
) -> list[str]:
    """Validate every discovery config in ``messages``; other topics are skipped.

    Also flags unique_id collisions between entities.
    """
    errors: list[str] = []
    seen: dict[str, str] = {}
    for msg in messages:
        if not (msg.topic.startswith(f"{discovery_prefix}/") and msg.topic.endswith("/config")):
            continue
        errors.extend(f"{msg.topic}: {e}" for e in validate_discovery_payload(msg.payload))
        unique_id = msg.payload.get("unique_id") if isinstance(msg.payload, dict) else None
        if unique_id is None:
            continue
        if unique_id in seen:
            errors.append(f"{msg.topic}: unique_id {unique_id} also used by {seen[unique_id]}")
        else:
            seen[unique_id] = msg.topic
    return errors


__all__ = ["validate_discovery_payload", "validate_messages"]

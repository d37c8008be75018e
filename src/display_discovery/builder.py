"""Build Home Assistant discovery messages from a display's LWT message.

The entry points are pure: the only outside input is the clock, which can be
injected. Failures never propagate to the caller; they end up as a
:class:`Diagnostic` next to an empty message list.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Any, Optional

from .config import Config
from .errors import DiscoveryError
from .firmware import decode_firmware_version
from .ha_discovery import Device, create_display_entities
from .lwt_payload import LwtPayload, parse_lwt_payload
from .messages import InboundMessage, OutboundMessage
from .topic_parser import LwtTopic, parse_lwt_topic

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sink = Callable[[str], Any]


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    level: int
    message: str

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


@dataclass
class BuildResult:
    messages: list[OutboundMessage] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.messages)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix.

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def build_debug_message(
    topic: LwtTopic,
    lwt: LwtPayload,
    fw_version: str,
    timestamp: str,
    config: Optional[Config] = None,
) -> OutboundMessage:
    """Plain echo of the LWT fields for troubleshooting. Missing fields are omitted."""
    config = config or Config.from_defaults()
    payload: dict[str, Any] = {"device_name": topic.device_name}
    reported = lwt.as_dict()
    for key in (
        "battery_percentage",
        "battery_voltage",
        "charge_rate",
        "battery_sensor_present",
        "rssi",
        "sleep_time",
        "firmware_version",
    ):
        if key in reported:
            payload[key] = reported[key]
    payload["firmware_version_parsed"] = fw_version
    if "free_heap" in reported:
        payload["free_heap"] = reported["free_heap"]
    payload["last_seen"] = timestamp
    return OutboundMessage(
        topic=config.debug_topic(topic.device_name), payload=payload, retain=False
    )


def build_messages_for_device(
    topic: LwtTopic,
    lwt: LwtPayload,
    fw_version: str,
    timestamp: str,
    config: Optional[Config] = None,
) -> list[OutboundMessage]:
    """Return the discovery configs (and debug echo) for one display, in order."""
    config = config or Config.from_defaults()
    device = Device(config, topic, fw_version)
    messages = [
        OutboundMessage(
            topic=entity.get_config_topic(), payload=entity.get_config_payload()
        )
        for entity in create_display_entities(config, device, timestamp)
    ]
    if config.debug_enabled:
        messages.append(build_debug_message(topic, lwt, fw_version, timestamp, config))
    return messages


def build_discovery_messages(
    topic: str,
    payload: Any,
    config: Optional[Config] = None,
    clock: Optional[Clock] = None,
) -> BuildResult:
    """Validate an LWT message and build its discovery messages.

    Args:
        topic: inbound topic, expected ``displays/<device>/lwt``.
        payload: JSON text, bytes, or an already decoded mapping.
        config: application config; defaults when omitted.
        clock: returns the current time; used for ``last_seen``.

    Returns:
        A BuildResult with ten messages, or none plus one diagnostic.
    """
    config = config or Config.from_defaults()
    result = BuildResult()
    try:
        lwt_topic = parse_lwt_topic(
            topic, config.lwt_topic_prefix, config.lwt_topic_suffix
        )
        lwt = parse_lwt_payload(payload)
    except DiscoveryError as exc:
        logger.log(exc.level, "%s", exc)
        result.diagnostics.append(Diagnostic(exc.kind, exc.level, str(exc)))
        return result

    fw_version = decode_firmware_version(lwt.firmware_version)
    timestamp = iso_timestamp((clock or _utc_now)())
    result.messages = build_messages_for_device(
        lwt_topic, lwt, fw_version, timestamp, config
    )
    logger.debug(
        "built %d discovery messages for %s (fw %s, online=%s)",
        len(result.messages),
        lwt_topic.device_name,
        fw_version,
        lwt.is_online,
    )
    return result


def handle_lwt_message(
    message: InboundMessage,
    warn: Optional[Sink] = None,
    error: Optional[Sink] = None,
    config: Optional[Config] = None,
    clock: Optional[Clock] = None,
) -> list[OutboundMessage]:
    """Host-facing entry: diagnostics go to the host's warn/error sinks.

    Returns the outbound messages, or an empty list when nothing is produced.
    """
    result = build_discovery_messages(message.topic, message.payload, config, clock)
    for diag in result.diagnostics:
        sink = error if diag.level >= logging.ERROR else warn
        if sink is not None:
            sink(diag.message)
    return result.messages


__all__ = [
    "BuildResult",
    "Diagnostic",
    "build_debug_message",
    "build_discovery_messages",
    "build_messages_for_device",
    "handle_lwt_message",
    "iso_timestamp",
]

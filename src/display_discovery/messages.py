"""Inbound and outbound message records exchanged with the host flow."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

from paho.mqtt.client import MQTTMessage


@dataclass(frozen=True)
class InboundMessage:
    """An LWT message as handed over by the host."""

    topic: str
    payload: Any = None

    @classmethod
    def from_mqtt(cls, msg: MQTTMessage) -> InboundMessage:
        """Adapt a paho-mqtt message; the payload stays raw bytes."""
        return cls(topic=msg.topic, payload=msg.payload)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InboundMessage:
        return cls(topic=data.get("topic", ""), payload=data.get("payload"))


def serialize_payload(payload: Any) -> str:
    """Compact JSON, the way the host serialises objects before publishing."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class OutboundMessage:
    topic: str
    payload: dict[str, Any] = field(default_factory=dict)
    retain: bool = True

    def to_json(self) -> str:
        return serialize_payload(self.payload)

    def as_dict(self) -> dict[str, Any]:
        return {"topic": self.topic, "payload": self.payload}


__all__ = ["InboundMessage", "OutboundMessage", "serialize_payload"]

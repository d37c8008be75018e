"""Parse display LWT topics of the form ``displays/<device_name>/lwt``."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidTopicShape

DEFAULT_PREFIX = "displays"
DEFAULT_SUFFIX = "lwt"


@dataclass(frozen=True)
class LwtTopic:
    raw: str
    device_name: str
    prefix: str = DEFAULT_PREFIX
    suffix: str = DEFAULT_SUFFIX

    @property
    def device_id(self) -> str:
        # object-id safe slug
        return self.device_name.replace("-", "_")

    @property
    def unique_device_id(self) -> str:
        return self.device_name

    @property
    def state_topic(self) -> str:
        """The LWT topic carries every sensor value, so it doubles as state topic."""
        return f"{self.prefix}/{self.device_name}/{self.suffix}"


def parse_lwt_topic(
    topic: str, prefix: str = DEFAULT_PREFIX, suffix: str = DEFAULT_SUFFIX
) -> LwtTopic:
    """Validate ``topic`` and extract the device name.

    Segments after the suffix are tolerated and ignored.

    Raises:
        InvalidTopicShape: when the topic has fewer than three segments or the
            prefix/suffix segments do not match.
    """
    if not isinstance(topic, str):
        raise InvalidTopicShape(f"Invalid topic format: {topic!r}")

    parts = topic.split("/")
    if len(parts) < 3 or parts[0] != prefix or parts[2] != suffix:
        raise InvalidTopicShape(f"Invalid topic format: {topic}")

    return LwtTopic(raw=topic, device_name=parts[1], prefix=prefix, suffix=suffix)


__all__ = ["LwtTopic", "parse_lwt_topic", "DEFAULT_PREFIX", "DEFAULT_SUFFIX"]

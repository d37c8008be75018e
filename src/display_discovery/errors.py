"""Failure kinds recognised while turning an LWT message into discovery configs.

None of these escape to the host: the builder catches them, logs them at
their level and returns an empty result.
"""

from __future__ import annotations

import logging


class DiscoveryError(Exception):
    """Base class for non-fatal discovery failures."""

    kind = "DiscoveryError"
    level = logging.WARNING


class InvalidTopicShape(DiscoveryError):
    """Topic is not of the form <prefix>/<device>/<suffix>."""

    kind = "InvalidTopicShape"
    level = logging.WARNING


class EmptyPayload(DiscoveryError):
    """Payload is absent or an empty string."""

    kind = "EmptyPayload"
    level = logging.WARNING


class PayloadParseError(DiscoveryError):
    """Textual payload could not be decoded as JSON."""

    kind = "PayloadParseError"
    level = logging.ERROR


__all__ = [
    "DiscoveryError",
    "EmptyPayload",
    "InvalidTopicShape",
    "PayloadParseError",
]

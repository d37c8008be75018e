"""
Display LWT Discovery - Home Assistant MQTT discovery for e-paper displays.

Turns a display's last-will (LWT) telemetry message into the Home Assistant
discovery configs for its battery, signal, firmware and last-seen sensors.
"""

from importlib.metadata import PackageNotFoundError, version

from .builder import (
    BuildResult,
    Diagnostic,
    build_discovery_messages,
    handle_lwt_message,
)
from .firmware import decode_firmware_version
from .messages import InboundMessage, OutboundMessage

try:
    __version__ = version("display-lwt-discovery")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.0.0-dev"

__all__ = [
    "__version__",
    "BuildResult",
    "Diagnostic",
    "InboundMessage",
    "OutboundMessage",
    "build_discovery_messages",
    "decode_firmware_version",
    "handle_lwt_message",
]

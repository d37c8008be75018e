# display_discovery/ha_discovery/device.py

from typing import Optional

from display_discovery.config import Config
from display_discovery.topic_parser import LwtTopic

AVAILABILITY_TEMPLATE = (
    "{{ 'online' if value_json.battery_percentage is defined else 'offline' }}"
)


class Device:
    """
    Represents one e-paper display in Home Assistant. Every entity created
    from an LWT message is grouped under this device.
    """

    def __init__(self, config: Optional[Config], topic: LwtTopic, sw_version: str):
        """
        Initializes the Device object.

        Args:
            config: The application's Config object (defaults when None).
            topic: The parsed LWT topic identifying the display.
            sw_version: Decoded firmware version, e.g. "v1.2.3".
        """
        self._config = config or Config.from_defaults()
        self.topic = topic
        self.identifiers = [topic.unique_device_id]
        self.name = topic.device_name
        self.sw_version = sw_version
        self.hw_version = self._config.get("device.hw_version", "v1.0.0")
        self.manufacturer = self._config.get("device.manufacturer", "VA7RCV")
        self.model = self._config.get("device.model", "E-Paper Display ESP32")

    def get_device_info(self) -> dict:
        """
        Returns the device block shared by every discovery payload.
        """
        return {
            "hw_version": self.hw_version,
            "sw_version": self.sw_version,
            "identifiers": list(self.identifiers),
            "manufacturer": self.manufacturer,
            "name": self.name,
            "model": self.model,
        }

    def get_availability(self) -> dict:
        """
        Availability is derived from the LWT topic itself: the display is
        online while its last payload reports a battery percentage.
        """
        return {
            "topic": self.topic.state_topic,
            "value_template": AVAILABILITY_TEMPLATE,
        }

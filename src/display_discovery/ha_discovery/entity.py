# display_discovery/ha_discovery/entity.py

from typing import Optional

from display_discovery.config import Config

from .device import Device

# Discovery payload key order; optional keys are skipped when unset.
_PAYLOAD_ORDER = (
    "name",
    "state_topic",
    "value_template",
    "platform",
    "device_class",
    "force_update",
    "state_class",
    "unit_of_measurement",
    "object_id",
    "unique_id",
    "device",
    "availability",
    "payload_on",
    "payload_off",
    "icon",
)


class Entity:
    """
    Base class for the display's Home Assistant entities. Holds the common
    attributes and builds the MQTT discovery topic and payload.
    """

    component = "sensor"

    def __init__(
        self,
        config: Optional[Config],
        device: Device,
        key: str,
        name: str,
        value_template: str,
        slug: Optional[str] = None,
        **kwargs,
    ):
        """
        Initializes the base Entity.

        Args:
            config: The application's Config object.
            device: The Device the entity belongs to.
            key: LWT field the entity reports; used for unique_id.
            name: Entity name shown in Home Assistant.
            value_template: Template evaluated against the LWT payload.
            slug: Topic segment for the config topic (defaults to name).
        """
        self._config = config or Config.from_defaults()
        self.device = device
        self.key = key
        self.name = name
        self.slug = slug or name
        self.value_template = value_template
        self.force_update = True
        self.device_class = None
        self.state_class = None
        self.unit_of_measurement = None
        self.icon = None
        self.attributes = {}
        for attr, value in kwargs.items():
            setattr(self, attr, value)

    @property
    def object_id(self) -> str:
        device_id = self.device.topic.device_id
        if self._config.get("home_assistant.per_sensor_object_id", False):
            return f"{device_id}_{self.key}"
        return device_id

    @property
    def unique_id(self) -> str:
        return f"{self.device.topic.unique_device_id}_{self.key}"

    def get_config_topic(self) -> str:
        """
        Generates the MQTT topic for the entity's discovery configuration.
        Format: <discovery_prefix>/<component>/<device_name>/<slug>/config
        """
        discovery_prefix = self._config.get(
            "home_assistant.discovery_prefix", "homeassistant"
        )
        return (
            f"{discovery_prefix}/{self.component}/"
            f"{self.device.topic.device_name}/{self.slug}/config"
        )

    def get_config_payload(self) -> dict:
        """Returns the discovery configuration payload for this entity."""
        values = {
            "name": self.name,
            "state_topic": self.device.topic.state_topic,
            "value_template": self.value_template,
            "platform": self.component,
            "device_class": self.device_class,
            "force_update": self.force_update,
            "state_class": self.state_class,
            "unit_of_measurement": self.unit_of_measurement,
            "object_id": self.object_id,
            "unique_id": self.unique_id,
            "device": self.device.get_device_info(),
            "availability": self.device.get_availability(),
            "icon": self.icon,
        }
        values.update(self.attributes)
        payload = {k: values[k] for k in _PAYLOAD_ORDER if values.get(k) is not None}
        # Anything not in the canonical order goes last
        for k, v in values.items():
            if k not in payload and k not in _PAYLOAD_ORDER and v is not None:
                payload[k] = v
        return payload


class Sensor(Entity):
    """
    Represents a Home Assistant Sensor entity.
    """

    component = "sensor"


class BinarySensor(Entity):
    """
    Represents a Home Assistant binary_sensor. LWT values are mapped to the
    ON/OFF strings by the value template.
    """

    component = "binary_sensor"

    def __init__(self, config, device, key, name, value_template, **kwargs):
        super().__init__(config, device, key, name, value_template, **kwargs)
        self.attributes.setdefault("payload_on", "ON")
        self.attributes.setdefault("payload_off", "OFF")

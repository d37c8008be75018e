"""Entity definitions for the sensors an e-paper display reports in its LWT.

Order matters: it is the order the discovery messages are emitted in.
"""

from __future__ import annotations

from typing import Any, Optional

from display_discovery.config import Config
from display_discovery.firmware import FIRMWARE_VALUE_TEMPLATE

from .device import Device
from .entity import BinarySensor, Entity, Sensor


def _field_template(key: str) -> str:
    return "{{ value_json.%s }}" % key


def create_display_entities(
    config: Optional[Config], device: Device, timestamp: str
) -> list[Entity]:
    """Create the nine discovery entities for one display.

    Args:
        config: application config.
        device: the display the entities belong to.
        timestamp: ISO-8601 invocation time, used verbatim as the
            ``last_seen`` value.
    """
    common: dict[str, Any] = {"config": config, "device": device}
    return [
        Sensor(
            **common,
            key="battery_percentage",
            name="battery",
            value_template=_field_template("battery_percentage"),
            device_class="battery",
            state_class="measurement",
            unit_of_measurement="%",
        ),
        Sensor(
            **common,
            key="battery_voltage",
            name="voltage",
            value_template=_field_template("battery_voltage"),
            device_class="voltage",
            state_class="measurement",
            unit_of_measurement="V",
        ),
        Sensor(
            **common,
            key="charge_rate",
            name="charge_rate",
            value_template=_field_template("charge_rate"),
            state_class="measurement",
            unit_of_measurement="%/hr",
            icon="mdi:battery-charging",
        ),
        BinarySensor(
            **common,
            key="battery_sensor_present",
            name="battery_sensor",
            value_template="{{ 'ON' if value_json.battery_sensor_present else 'OFF' }}",
            device_class="connectivity",
        ),
        Sensor(
            **common,
            key="rssi",
            name="rssi",
            value_template=_field_template("rssi"),
            device_class="signal_strength",
            state_class="measurement",
            unit_of_measurement="dBm",
            icon="mdi:wifi",
        ),
        Sensor(
            **common,
            key="sleep_time",
            name="sleep_time",
            value_template=_field_template("sleep_time"),
            device_class="duration",
            state_class="measurement",
            unit_of_measurement="h",
            icon="mdi:sleep",
        ),
        Sensor(
            **common,
            key="firmware_version",
            name="firmware_version",
            value_template=FIRMWARE_VALUE_TEMPLATE,
            icon="mdi:chip",
        ),
        Sensor(
            **common,
            key="free_heap",
            name="free_heap",
            value_template=_field_template("free_heap"),
            state_class="measurement",
            unit_of_measurement="bytes",
            icon="mdi:memory",
        ),
        Sensor(
            **common,
            key="last_seen",
            name="last_seen",
            value_template=timestamp,
            device_class="timestamp",
            icon="mdi:clock-outline",
        ),
    ]


__all__ = ["create_display_entities"]

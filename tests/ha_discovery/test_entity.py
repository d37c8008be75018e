# tests/ha_discovery/test_entity.py

import pytest
from unittest.mock import MagicMock

from display_discovery.config import Config
from display_discovery.ha_discovery.device import Device
from display_discovery.ha_discovery.entity import BinarySensor, Sensor
from display_discovery.topic_parser import parse_lwt_topic


@pytest.fixture
def mock_config():
    """Provides a mock Config object."""
    config = MagicMock(spec=Config)
    config.get.side_effect = lambda key, default=None: {
        "home_assistant.discovery_prefix": "homeassistant",
    }.get(key, default)
    return config


@pytest.fixture
def device(mock_config):
    return Device(mock_config, parse_lwt_topic("displays/porch-display/lwt"), "v1.2.3")


@pytest.fixture
def sample_sensor_config():
    """Provides a sample sensor configuration dictionary."""
    return {
        "key": "rssi",
        "name": "rssi",
        "value_template": "{{ value_json.rssi }}",
        "device_class": "signal_strength",
        "state_class": "measurement",
        "unit_of_measurement": "dBm",
        "icon": "mdi:wifi",
    }


def test_sensor_initialization(sample_sensor_config, mock_config, device):
    """Test that the Sensor class initializes correctly."""
    sensor = Sensor(config=mock_config, device=device, **sample_sensor_config)
    assert sensor.name == "rssi"
    assert sensor.unique_id == "porch-display_rssi"
    assert sensor.object_id == "porch_display"
    assert sensor.component == "sensor"


def test_get_config_topic(sample_sensor_config, mock_config, device):
    """Test the generation of the MQTT discovery config topic."""
    sensor = Sensor(config=mock_config, device=device, **sample_sensor_config)
    assert sensor.get_config_topic() == "homeassistant/sensor/porch-display/rssi/config"


def test_slug_overrides_topic_segment(mock_config, device):
    sensor = Sensor(
        config=mock_config,
        device=device,
        key="battery_percentage",
        name="battery",
        slug="battery_level",
        value_template="{{ value_json.battery_percentage }}",
    )
    assert sensor.get_config_topic().endswith("/porch-display/battery_level/config")


def test_get_config_payload(sample_sensor_config, mock_config, device):
    """Test the generation of the discovery payload with device info."""
    sensor = Sensor(config=mock_config, device=device, **sample_sensor_config)
    payload = sensor.get_config_payload()

    assert list(payload) == [
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
        "icon",
    ]
    assert payload["state_topic"] == "displays/porch-display/lwt"
    assert payload["platform"] == "sensor"
    assert payload["force_update"] is True
    assert payload["device"] == device.get_device_info()
    assert payload["availability"] == device.get_availability()


def test_unset_optional_keys_are_omitted(mock_config, device):
    sensor = Sensor(
        config=mock_config,
        device=device,
        key="firmware_version",
        name="firmware_version",
        value_template="{{ value_json.firmware_version }}",
    )
    payload = sensor.get_config_payload()
    for key in ("device_class", "state_class", "unit_of_measurement", "icon"):
        assert key not in payload


def test_binary_sensor_payload(mock_config, device):
    sensor = BinarySensor(
        mock_config,
        device,
        "battery_sensor_present",
        "battery_sensor",
        "{{ 'ON' if value_json.battery_sensor_present else 'OFF' }}",
        device_class="connectivity",
    )
    payload = sensor.get_config_payload()
    assert sensor.get_config_topic() == (
        "homeassistant/binary_sensor/porch-display/battery_sensor/config"
    )
    assert payload["platform"] == "binary_sensor"
    assert payload["payload_on"] == "ON"
    assert payload["payload_off"] == "OFF"
    assert list(payload)[-2:] == ["payload_on", "payload_off"]
    assert "state_class" not in payload


def test_per_sensor_object_id(sample_sensor_config, device):
    config = Config(
        {"home_assistant": {"per_sensor_object_id": True}}
    )
    sensor = Sensor(config=config, device=device, **sample_sensor_config)
    assert sensor.object_id == "porch_display_rssi"

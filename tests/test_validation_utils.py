import copy

from display_discovery.builder import build_discovery_messages
from display_discovery.messages import OutboundMessage
from display_discovery.validation_utils import (
    validate_discovery_payload,
    validate_messages,
)


def _messages(frozen_clock):
    return build_discovery_messages(
        "displays/hall/lwt", '{"battery_percentage": 10}', clock=frozen_clock
    ).messages


def test_generated_messages_are_valid(frozen_clock):
    assert validate_messages(_messages(frozen_clock)) == []


def test_non_dict_payload():
    assert validate_discovery_payload("x") == ["discovery: payload not dict"]


def test_missing_keys_and_bad_platform(frozen_clock):
    payload = copy.deepcopy(_messages(frozen_clock)[0].payload)
    del payload["unique_id"]
    payload["platform"] = "light"
    errors = validate_discovery_payload(payload)
    assert "discovery: missing keys ['unique_id']" in errors
    assert "discovery: unexpected platform 'light'" in errors


def test_binary_sensor_requires_on_off(frozen_clock):
    payload = copy.deepcopy(_messages(frozen_clock)[3].payload)
    del payload["payload_off"]
    assert validate_discovery_payload(payload) == [
        "discovery: binary_sensor missing payload_on/payload_off"
    ]


def test_device_and_availability_checks(frozen_clock):
    payload = copy.deepcopy(_messages(frozen_clock)[1].payload)
    del payload["device"]["model"]
    payload["availability"] = {}
    errors = validate_discovery_payload(payload)
    assert "discovery: device missing ['model']" in errors
    assert "discovery: availability missing topic" in errors


def test_duplicate_unique_id_flagged(frozen_clock):
    messages = _messages(frozen_clock)
    dup = OutboundMessage(
        "homeassistant/sensor/hall/copy/config", dict(messages[0].payload)
    )
    errors = validate_messages([messages[0], dup])
    assert len(errors) == 1
    assert "unique_id hall_battery_percentage also used by" in errors[0]


def test_debug_topic_is_skipped(frozen_clock):
    debug = _messages(frozen_clock)[9]
    assert validate_messages([debug]) == []

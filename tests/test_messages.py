from paho.mqtt.client import MQTTMessage

from display_discovery.builder import handle_lwt_message
from display_discovery.messages import InboundMessage, OutboundMessage, serialize_payload


def _paho_message(topic: str, payload: bytes) -> MQTTMessage:
    msg = MQTTMessage(topic=topic.encode("utf-8"))
    msg.payload = payload
    return msg


def test_from_mqtt_keeps_topic_and_raw_payload():
    inbound = InboundMessage.from_mqtt(
        _paho_message("displays/hall/lwt", b'{"rssi": -60}')
    )
    assert inbound.topic == "displays/hall/lwt"
    assert inbound.payload == b'{"rssi": -60}'


def test_paho_message_flows_through_handler(frozen_clock):
    inbound = InboundMessage.from_mqtt(
        _paho_message("displays/hall/lwt", b'{"battery_percentage": 50}')
    )
    messages = handle_lwt_message(inbound, clock=frozen_clock)
    assert len(messages) == 10
    assert messages[0].topic == "homeassistant/sensor/hall/battery/config"


def test_from_dict():
    inbound = InboundMessage.from_dict({"topic": "displays/a/lwt", "payload": {"rssi": 1}})
    assert inbound == InboundMessage("displays/a/lwt", {"rssi": 1})
    assert InboundMessage.from_dict({}).topic == ""


def test_outbound_serialisation():
    msg = OutboundMessage("t/config", {"name": "rssi", "force_update": True})
    assert msg.retain is True
    assert msg.to_json() == '{"name":"rssi","force_update":true}'
    assert msg.as_dict() == {"topic": "t/config", "payload": msg.payload}


def test_serialize_keeps_unicode():
    assert serialize_payload({"name": "café"}) == '{"name":"café"}'

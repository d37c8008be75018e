import pytest

from display_discovery.errors import InvalidTopicShape
from display_discovery.topic_parser import parse_lwt_topic


def test_parse_valid_topic():
    parsed = parse_lwt_topic("displays/porch-display/lwt")
    assert parsed.device_name == "porch-display"
    assert parsed.device_id == "porch_display"
    assert parsed.unique_device_id == "porch-display"
    assert parsed.state_topic == "displays/porch-display/lwt"


def test_extra_segments_are_ignored():
    parsed = parse_lwt_topic("displays/kitchen/lwt/extra/bits")
    assert parsed.device_name == "kitchen"
    assert parsed.state_topic == "displays/kitchen/lwt"


@pytest.mark.parametrize(
    "topic",
    [
        "",
        "displays",
        "displays/kitchen",
        "sensors/kitchen/lwt",
        "displays/kitchen/status",
        "Displays/kitchen/lwt",
    ],
)
def test_malformed_topics_raise(topic):
    with pytest.raises(InvalidTopicShape):
        parse_lwt_topic(topic)


def test_non_string_topic_raises():
    with pytest.raises(InvalidTopicShape):
        parse_lwt_topic(None)  # type: ignore[arg-type]


def test_custom_prefix_and_suffix():
    parsed = parse_lwt_topic("panels/hall/will", prefix="panels", suffix="will")
    assert parsed.state_topic == "panels/hall/will"

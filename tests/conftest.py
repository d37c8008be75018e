from datetime import datetime, timezone
from pathlib import Path
import sys

import pytest

# Add only the src directory to path, not the project root
# This prevents accidentally picking up sibling workspace projects
project_root = Path(__file__).parent.parent
src_path = str(project_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

FROZEN_NOW = datetime(2025, 3, 14, 15, 9, 26, 535000, tzinfo=timezone.utc)
FROZEN_ISO = "2025-03-14T15:09:26.535Z"


@pytest.fixture
def frozen_clock():
    """Clock returning a fixed UTC instant."""
    return lambda: FROZEN_NOW


@pytest.fixture
def full_payload():
    """A complete LWT payload as published by the display firmware."""
    return {
        "battery_percentage": 87,
        "battery_voltage": 4.02,
        "charge_rate": -1.5,
        "battery_sensor_present": True,
        "rssi": -67,
        "sleep_time": 6,
        "firmware_version": 123,
        "free_heap": 182344,
    }


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep DISPLAY_DISCOVERY_* overrides from the shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("DISPLAY_DISCOVERY_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def render_template():
    """Render a Home Assistant value template against an LWT payload."""
    from jinja2 import Environment

    env = Environment()

    def _render(template, value_json):
        return env.from_string(template).render(value_json=value_json)

    return _render

"""Home Assistant discovery descriptors for e-paper displays."""

from .device import AVAILABILITY_TEMPLATE, Device
from .entity import BinarySensor, Entity, Sensor
from .sensors import create_display_entities

__all__ = [
    "AVAILABILITY_TEMPLATE",
    "BinarySensor",
    "Device",
    "Entity",
    "Sensor",
    "create_display_entities",
]

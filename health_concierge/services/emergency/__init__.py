"""Emergency detection services."""

from .detector import NEAREST_HOSPITALS, EmergencyDetector

__all__ = ["EmergencyDetector", "NEAREST_HOSPITALS"]

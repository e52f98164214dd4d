from .base import AvailabilityBackend
from .memory import InMemoryAvailabilityBackend

__all__ = ["AvailabilityBackend", "InMemoryAvailabilityBackend"]

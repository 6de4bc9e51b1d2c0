"""Route group exports."""

from . import directions, health

__all__ = ["directions", "health"]

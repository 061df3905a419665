"""Runtime services: configuration and telemetry."""

from . import telemetry
from .config import EditorConfig

__all__ = ["EditorConfig", "telemetry"]

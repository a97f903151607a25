"""Runtime services: telemetry and environment-driven settings."""

from .settings import EditorSettings

__all__ = ["EditorSettings", "telemetry"]

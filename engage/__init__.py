"""Engage backend: engagement REST API with real-time room fan-out."""

__version__ = "1.0.0"

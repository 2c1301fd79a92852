"""Session relay and message routing service for multi-device TSS ceremonies."""

__version__ = "1.0.0"

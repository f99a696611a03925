"""Stable-id registry generator: key enums, registry classes, and file bindings."""

__version__ = "0.1.0"

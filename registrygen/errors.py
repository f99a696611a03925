"""Exception types raised by registrygen components."""

from __future__ import annotations


class RegistryError(RuntimeError):
    """Base class for every error registrygen reports to its callers."""


class ConfigError(RegistryError):
    """Raised when a required path or name is missing or the config cannot be parsed."""


class ScanError(ConfigError):
    """Raised when a scan finds no files matching the configured filters."""


class ResolutionError(RegistryError):
    """Raised when a discovered file name is not a member of the key type."""

    def __init__(self, name: str, type_name: str) -> None:
        super().__init__(f"'{name}' is not a member of {type_name}")
        self.name = name
        self.type_name = type_name


class TypeShapeError(RegistryError):
    """Raised when an existing type does not have the shape generation requires."""

    def __init__(self, full_name: str, reason: str) -> None:
        super().__init__(f"The type {full_name} {reason}")
        self.full_name = full_name


class FragmentError(RegistryError):
    """Raised when a code fragment is constructed without a name."""


class OutputError(RegistryError):
    """Raised when a generated artifact cannot be written."""


__all__ = [
    "ConfigError",
    "FragmentError",
    "OutputError",
    "RegistryError",
    "ResolutionError",
    "ScanError",
    "TypeShapeError",
]

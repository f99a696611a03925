"""Binders turn discovered asset files into registry values."""

from abc import ABC, abstractmethod
from typing import Any, Callable

from .models import AssetFile


class Binder(ABC):
    """Contract for constructing the registry value stored for one discovered file."""

    @abstractmethod
    def create_value(self, file: AssetFile) -> Any:
        """Return the value bound to ``file``'s key."""


class IdentityBinder(Binder):
    """Used when the value type is the file-asset type: the file itself is the value."""

    def create_value(self, file: AssetFile) -> Any:
        return file


class DefaultInstanceBinder(Binder):
    """Builds a fresh default value per file; the file's content is not consulted."""

    def __init__(self, factory: Callable[[], Any] = dict) -> None:
        self._factory = factory

    def create_value(self, file: AssetFile) -> Any:
        return self._factory()


def binder_for(value_type: str, file_type: str, factory: Callable[[], Any] = dict) -> Binder:
    """Pick the identity binder when both type names match, else a default-instance binder."""
    if (value_type or "").strip() == (file_type or "").strip():
        return IdentityBinder()
    return DefaultInstanceBinder(factory)


__all__ = ["Binder", "DefaultInstanceBinder", "IdentityBinder", "binder_for"]

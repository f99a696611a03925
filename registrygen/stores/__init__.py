"""Persistence helpers for id maps and bound registry mappings."""

from .id_map import IdMapStore, id_map_path
from .mapping import MappingStore

__all__ = ["IdMapStore", "MappingStore", "id_map_path"]

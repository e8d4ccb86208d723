"""
实体模型包
"""
from .entity import (
    ColumnDescriptor,
    EntityMetadata,
    EntityRegistry,
    get_entity_registry,
    sync_entity,
)

__all__ = [
    "ColumnDescriptor",
    "EntityMetadata",
    "EntityRegistry",
    "get_entity_registry",
    "sync_entity",
]

"""
DbSync SQLite 适配器
SQLite连接适配器和基于模板的SQL生成器
"""
from .config import Settings, get_settings
from .models import EntityRegistry, EntityMetadata, ColumnDescriptor, sync_entity, get_entity_registry
from .services import (
    SQLiteAdapter,
    DataSet,
    DataTable,
    DatabaseProvider,
    DatabaseAdapterError,
    QueryExecutionError,
    ConnectionTestError,
    QueryTemplates,
    QueryGenerator,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "EntityRegistry",
    "EntityMetadata",
    "ColumnDescriptor",
    "sync_entity",
    "get_entity_registry",
    "SQLiteAdapter",
    "DataSet",
    "DataTable",
    "DatabaseProvider",
    "DatabaseAdapterError",
    "QueryExecutionError",
    "ConnectionTestError",
    "QueryTemplates",
    "QueryGenerator",
]

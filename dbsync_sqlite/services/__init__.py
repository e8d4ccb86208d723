"""
服务层包
"""
from .database_adapters import DatabaseAdapter, SQLiteAdapter
from .dto import DataSet, DataTable, DatabaseProvider
from .exceptions import DatabaseAdapterError, QueryExecutionError, ConnectionTestError
from .query_helper import QueryHelper
from .query_templates import QueryTemplates
from .query_generator import QueryGenerator

__all__ = [
    "DatabaseAdapter",
    "SQLiteAdapter",
    "DataSet",
    "DataTable",
    "DatabaseProvider",
    "DatabaseAdapterError",
    "QueryExecutionError",
    "ConnectionTestError",
    "QueryHelper",
    "QueryTemplates",
    "QueryGenerator",
]

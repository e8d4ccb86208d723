"""
数据库适配器模块
提供统一的数据库访问接口
"""
from .base import DatabaseAdapter
from .sqlite import SQLiteAdapter

__all__ = [
    'DatabaseAdapter',
    'SQLiteAdapter',
]

"""
数据库适配器基类
定义所有数据库适配器必须实现的接口
"""
from abc import ABC, abstractmethod
from typing import Dict, Any

from ..dto import DataSet, DatabaseProvider


class DatabaseAdapter(ABC):
    """数据库适配器基类"""

    @property
    @abstractmethod
    def provider(self) -> DatabaseProvider:
        """数据库提供者类型"""
        pass

    @abstractmethod
    def get_connection_string(self) -> str:
        """
        构建数据库连接字符串

        Returns:
            数据库连接字符串
        """
        pass

    @abstractmethod
    def get_driver_name(self) -> str:
        """
        获取SQLAlchemy驱动名称

        Returns:
            驱动名称，如 'sqlite'
        """
        pass

    @abstractmethod
    def get_connect_args(self) -> Dict[str, Any]:
        """
        获取数据库连接参数

        Returns:
            连接参数字典
        """
        pass

    @abstractmethod
    def format_identifier(self, name: str) -> str:
        """
        格式化标识符（表名、列名）

        Args:
            name: 标识符名称

        Returns:
            格式化后的标识符
        """
        pass

    @abstractmethod
    def execute_query(self, query: str, table_name: str) -> DataSet:
        """
        执行查询并返回结果集

        Args:
            query: SQL查询语句
            table_name: 结果表名称

        Returns:
            包含一个结果表的DataSet
        """
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        """
        测试数据库连接

        Returns:
            连接成功返回True，失败时抛出异常
        """
        pass

    def get_db_type(self) -> str:
        """
        获取数据库类型名称

        Returns:
            数据库类型，如 'sqlite'
        """
        return self.provider.value

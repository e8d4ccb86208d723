"""
SQLite数据库适配器
每次调用都创建独立连接，结果物化后立即关闭，不使用连接池
"""
from typing import Dict, Any, List

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.pool import NullPool

from .base import DatabaseAdapter
from ..dto import DataSet, DataTable, DatabaseProvider
from ..exceptions import QueryExecutionError, ConnectionTestError
from ...utils.logger import get_logger, log_sql_error, log_database_connection_error
from ...utils.sql_escape import escape_column

logger = get_logger(__name__)


def _unique_columns(columns: List[str]) -> List[str]:
    """
    为重名的结果列追加序号（id, id1, id2 ...），保证每列在行字典中都有独立的键

    Args:
        columns: 游标返回的列名

    Returns:
        与原列一一对应且互不重复的列名
    """
    seen = set(columns)
    used = set()
    unique = []
    for name in columns:
        if name in used:
            suffix = 1
            while f"{name}{suffix}" in seen or f"{name}{suffix}" in used:
                suffix += 1
            name = f"{name}{suffix}"
        used.add(name)
        unique.append(name)
    return unique


class SQLiteAdapter(DatabaseAdapter):
    """SQLite数据库适配器"""

    def __init__(self, data_source: str):
        """
        初始化SQLite适配器

        Args:
            data_source: SQLite数据库文件路径（空路径或无效路径交给驱动处理）

        Raises:
            ValueError: 如果data_source为None
        """
        if data_source is None:
            raise ValueError("data_source 不能为 None")
        self.data_source = data_source

    @property
    def provider(self) -> DatabaseProvider:
        """数据库提供者类型"""
        return DatabaseProvider.SQLITE

    def get_url(self) -> URL:
        """
        构建SQLAlchemy连接URL

        文件路径作为URL的database部分原样传给驱动，不做百分号解码，
        也不会把路径中的 ? 当作查询参数
        """
        return URL.create(self.get_driver_name(), database=self.data_source)

    def get_connection_string(self) -> str:
        """构建SQLite连接字符串（仅用于展示，连接时使用get_url()）"""
        return self.get_url().render_as_string(hide_password=False)

    def get_driver_name(self) -> str:
        """获取SQLite驱动名称"""
        return "sqlite"

    def get_connect_args(self) -> Dict[str, Any]:
        """获取SQLite连接参数"""
        return {"check_same_thread": False}

    def format_identifier(self, name: str) -> str:
        """SQLite标识符仅在包含空格时用双引号包裹"""
        return escape_column(name)

    def _create_engine(self) -> Engine:
        """创建不带连接池的临时引擎"""
        return create_engine(
            self.get_url(),
            poolclass=NullPool,
            connect_args=self.get_connect_args()
        )

    def execute_query(self, query: str, table_name: str) -> DataSet:
        """
        执行SQL查询并返回结果集

        打开连接、执行查询、把所有行读入内存表后关闭连接。
        任何一步失败都不会返回部分结果。

        Args:
            query: SQL查询语句
            table_name: 结果表名称

        Returns:
            包含一个名为table_name的DataTable的DataSet

        Raises:
            QueryExecutionError: 打开连接、执行或读取结果失败
        """
        logger.debug(
            f"准备执行SQL查询:\n"
            f"  数据源: {self.data_source}\n"
            f"  结果表: {table_name}\n"
            f"  SQL: {query[:200]}{'...' if len(query) > 200 else ''}"
        )

        engine = None
        try:
            engine = self._create_engine()

            # begin() 在成功时提交，INSERT/UPDATE/DELETE 语句同样生效
            with engine.begin() as connection:
                result = connection.exec_driver_sql(query)

                if result.returns_rows:
                    columns = _unique_columns(list(result.keys()))
                    rows = [dict(zip(columns, row)) for row in result.fetchall()]
                else:
                    columns = []
                    rows = []

            data_table = DataTable(name=table_name, columns=columns, rows=rows)

            logger.info(
                f"SQL查询成功: data_source={self.data_source}, "
                f"rows={len(rows)}, columns={len(columns)}"
            )

            return DataSet(tables=[data_table])

        except Exception as e:
            log_sql_error(logger, query, self.data_source, e, table_name=table_name)
            raise QueryExecutionError(str(e)) from e

        finally:
            if engine is not None:
                engine.dispose()

    def test_connection(self) -> bool:
        """
        测试数据库连接

        打开连接后立即关闭。失败不会返回False，而是抛出ConnectionTestError，
        需要布尔结果的调用方自行捕获异常。

        Returns:
            连接成功返回True

        Raises:
            ConnectionTestError: 无法打开连接
        """
        engine = None
        try:
            engine = self._create_engine()

            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))

            logger.info(f"数据库连接测试成功: {self.data_source}")
            return True

        except Exception as e:
            log_database_connection_error(logger, self.data_source, e)
            raise ConnectionTestError(str(e)) from e

        finally:
            if engine is not None:
                engine.dispose()

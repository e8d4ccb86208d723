"""
数据传输对象 (Data Transfer Objects)
"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class DatabaseProvider(str, Enum):
    """数据库提供者类型"""
    SQLITE = "sqlite"


class DataTable(BaseModel):
    """查询结果表"""
    name: str
    columns: List[str] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        """行数"""
        return len(self.rows)


class DataSet(BaseModel):
    """查询结果集，包含一个或多个命名的结果表"""
    tables: List[DataTable] = Field(default_factory=list)

    def get_table(self, name: str) -> Optional[DataTable]:
        """
        按名称获取结果表

        Args:
            name: 表名称

        Returns:
            对应的DataTable，不存在时返回None
        """
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def __getitem__(self, name: str) -> DataTable:
        table = self.get_table(name)
        if table is None:
            raise KeyError(name)
        return table

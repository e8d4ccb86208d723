"""
适配器异常定义
"""


class DatabaseAdapterError(Exception):
    """数据库适配器I/O错误基类，保留原始错误信息"""

    prefix = "数据库操作出错"

    def __init__(self, original_message: str):
        self.original_message = original_message
        super().__init__(f"{self.prefix}: {original_message}")


class QueryExecutionError(DatabaseAdapterError):
    """执行查询失败（打开连接、执行或读取结果）"""

    prefix = "执行查询出错"


class ConnectionTestError(DatabaseAdapterError):
    """测试连接失败"""

    prefix = "测试连接出错"

"""
SQL转义工具
查询生成器和数据库适配器共用的值/标识符转义
"""
from typing import Any, Optional


def escape_value(value: Any) -> Any:
    """
    转义SQL字符串字面量中的单引号

    Args:
        value: 任意值

    Returns:
        包含单引号的字符串返回每个单引号加倍后的结果，其他值原样返回
    """
    if isinstance(value, str) and "'" in value:
        return value.replace("'", "''")
    return value


def escape_column(name: Optional[str]) -> str:
    """
    转义列名

    Args:
        name: 列名

    Returns:
        包含空格的列名用双引号包裹；None返回空字符串
    """
    if name is None:
        return ""
    if " " in name:
        return f'"{name}"'
    return name


def format_literal(value: Any) -> str:
    """
    把值转义后放进单引号，None 渲染为空字面量 ''

    bool 渲染为 '1' / '0'（SQLite 没有布尔类型，按整数存储）；
    bytes、bytearray、memoryview 渲染为 BLOB 字面量 X'十六进制'，不加引号

    Args:
        value: 任意值

    Returns:
        SQL字面量
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"X'{bytes(value).hex().upper()}'"
    if isinstance(value, bool):
        return "'1'" if value else "'0'"
    escaped = escape_value(value)
    if escaped is None:
        escaped = ""
    return f"'{escaped}'"


def unescape_value(value: str) -> str:
    """还原 escape_value 的单引号加倍"""
    return value.replace("''", "'")

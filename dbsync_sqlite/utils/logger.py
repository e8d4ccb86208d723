"""
日志配置模块
提供统一的日志记录功能，支持详细的错误日志记录
"""
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path


DEFAULT_LOGGER_NAME = "dbsync_sqlite"


class DetailedFormatter(logging.Formatter):
    """详细的日志格式化器，包含额外的上下文信息"""

    def format(self, record: logging.LogRecord) -> str:
        """
        格式化日志记录

        Args:
            record: 日志记录对象

        Returns:
            格式化后的日志字符串
        """
        formatted = super().format(record)

        # 如果有额外的上下文信息，添加到日志中
        if getattr(record, 'extra_context', None):
            formatted += f"\n上下文信息: {record.extra_context}"

        return formatted


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称
        log_level: 日志级别（DEBUG, INFO, WARNING, ERROR, CRITICAL）
        log_file: 日志文件路径，如果为None则从环境变量读取；空字符串表示不写文件
        console_output: 是否输出到控制台

    Returns:
        配置好的日志记录器
    """
    # 从环境变量获取配置
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = os.getenv("LOG_FILE", "")

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # 清除已有的处理器（避免重复添加）
    logger.handlers.clear()

    log_format = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # 文件处理器
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(DetailedFormatter(log_format, date_format))
        logger.addHandler(file_handler)

    # 控制台处理器
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(DetailedFormatter(log_format, date_format))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    获取日志记录器

    包内模块的记录器（dbsync_sqlite.*）交给根记录器统一配置，
    其他名称在没有处理器时按默认配置初始化。

    Args:
        name: 日志记录器名称

    Returns:
        日志记录器实例
    """
    if name.startswith(DEFAULT_LOGGER_NAME + "."):
        root = logging.getLogger(DEFAULT_LOGGER_NAME)
        if not root.handlers:
            setup_logger(DEFAULT_LOGGER_NAME)
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    if not logger.handlers:
        setup_logger(name)

    return logger


def log_error_with_context(
    logger: logging.Logger,
    message: str,
    error: Exception,
    context: Optional[Dict[str, Any]] = None
):
    """
    记录带有详细上下文的错误日志

    Args:
        logger: 日志记录器
        message: 错误消息
        error: 异常对象
        context: 额外的上下文信息（如SQL语句、数据源路径等）
    """
    error_details = {
        "message": message,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if context:
        error_details["context"] = context

    error_details["traceback"] = "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )

    logger.error(
        f"{message}\n详细信息: {error_details}",
        extra={"extra_context": context}
    )


def log_sql_error(
    logger: logging.Logger,
    sql: str,
    data_source: str,
    error: Exception,
    table_name: Optional[str] = None
):
    """
    记录SQL执行错误

    Args:
        logger: 日志记录器
        sql: SQL语句
        data_source: SQLite数据库文件路径
        error: 异常对象
        table_name: 结果表名称
    """
    context = {
        "sql": sql[:500] if sql else None,  # 限制长度
        "data_source": data_source,
        "table_name": table_name,
    }
    log_error_with_context(logger, "SQL执行失败", error, context)


def log_database_connection_error(
    logger: logging.Logger,
    data_source: str,
    error: Exception
):
    """
    记录数据库连接错误

    Args:
        logger: 日志记录器
        data_source: SQLite数据库文件路径
        error: 异常对象
    """
    context = {
        "data_source": data_source,
    }
    log_error_with_context(logger, "数据库连接失败", error, context)

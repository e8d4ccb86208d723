"""
配置模块
从环境变量（以及 .env 文件）读取适配器配置
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_SCHEMA_NAME = "main"


class Settings(BaseModel):
    """适配器配置"""
    default_schema: str = DEFAULT_SCHEMA_NAME
    template_dir: Optional[str] = None  # 自定义模板目录，优先于内置模板


def load_settings() -> Settings:
    """
    加载配置

    先加载 .env 文件，再从环境变量读取各项配置

    Returns:
        Settings对象
    """
    load_dotenv()

    return Settings(
        default_schema=os.getenv("DBSYNC_DEFAULT_SCHEMA") or DEFAULT_SCHEMA_NAME,
        template_dir=os.getenv("DBSYNC_TEMPLATE_DIR") or None,
    )


# 全局配置实例
_settings = None


def get_settings() -> Settings:
    """获取全局配置实例"""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings

"""
SQL模板管理
基于Jinja2渲染五个固定的查询模板（Select/Update/Delete/Insert/Comment）
模板内容作为数据存放在 templates/sqlite 目录，可以通过自定义目录覆盖
"""
from typing import Any, Dict, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, StrictUndefined

from ..utils.logger import get_logger

logger = get_logger(__name__)


# 模板ID到模板文件的映射
TEMPLATE_FILES: Dict[str, str] = {
    "Select": "select.sql.jinja",
    "Update": "update.sql.jinja",
    "Delete": "delete.sql.jinja",
    "Insert": "insert.sql.jinja",
    "Comment": "comment.sql.jinja",
}


class QueryTemplates:
    """SQL模板渲染器，使用完毕后需要调用dispose()释放"""

    def __init__(self, template_dir: Optional[str] = None):
        """
        初始化模板环境

        Args:
            template_dir: 自定义模板目录，其中的同名模板优先于内置模板
        """
        loaders = []
        if template_dir:
            loaders.append(FileSystemLoader(template_dir))
        loaders.append(PackageLoader("dbsync_sqlite", "templates/sqlite"))

        # 生成的是SQL而不是HTML，不做自动转义；值和列名在绑定前已经转义
        self._environment: Optional[Environment] = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
        )
        self.template_dir = template_dir

    @property
    def is_disposed(self) -> bool:
        return self._environment is None

    def render(self, template_id: str, bindings: Dict[str, Any]) -> str:
        """
        渲染指定模板

        Args:
            template_id: 模板ID（Select, Update, Delete, Insert, Comment）
            bindings: 模板变量

        Returns:
            渲染后的SQL文本

        Raises:
            ValueError: 未知的模板ID
            RuntimeError: 模板环境已释放
        """
        if self._environment is None:
            raise RuntimeError("QueryTemplates 已释放，不能继续渲染")

        template_file = TEMPLATE_FILES.get(template_id)
        if template_file is None:
            raise ValueError(
                f"未知的模板: {template_id}。"
                f"支持的模板: {', '.join(TEMPLATE_FILES.keys())}"
            )

        template = self._environment.get_template(template_file)
        return template.render(**bindings)

    def dispose(self):
        """释放模板环境（清空已编译模板缓存）"""
        if self._environment is not None:
            if self._environment.cache is not None:
                self._environment.cache.clear()
            self._environment = None
            logger.debug("模板环境已释放")

    def __enter__(self) -> "QueryTemplates":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()

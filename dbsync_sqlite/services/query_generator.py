"""
SQLite查询生成器
根据实体元数据生成 SELECT/INSERT/UPDATE/DELETE 以及注释语句
"""
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .query_helper import QueryHelper
from .query_templates import QueryTemplates
from ..config import Settings, get_settings
from ..models.entity import EntityRegistry
from ..utils.logger import get_logger
from ..utils.sql_escape import escape_column, escape_value, format_literal

logger = get_logger(__name__)


class QueryGenerator(QueryHelper):
    """
    SQLite查询生成器

    持有一个QueryTemplates实例，不再使用时需要调用dispose()，
    也可以作为上下文管理器使用：

        with QueryGenerator() as generator:
            sql = generator.generate_delete_query(user, ["id"])
    """

    def __init__(
        self,
        templates: Optional[QueryTemplates] = None,
        registry: Optional[EntityRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(registry)
        settings = settings or get_settings()
        self.default_schema = settings.default_schema
        self._templates = templates or QueryTemplates(settings.template_dir)

    def _resolve_schema(self, entity_type: type) -> str:
        return self.get_table_schema(entity_type) or self.default_schema

    def _render(self, template_id: str, **bindings: Any) -> str:
        sql = self._templates.render(template_id, bindings)
        logger.debug(f"生成{template_id}语句: {sql}")
        return sql

    def generate_select_query(
        self,
        entity_type: Optional[type],
        table_name: str,
        columns: Sequence[str],
        schema_name: Optional[str] = None,
    ) -> str:
        """
        生成SELECT语句

        Args:
            entity_type: 实体类型，用于在schema为空时查找实体schema；可以为None
            table_name: 表名
            columns: 列名列表
            schema_name: schema名称，为空时依次使用实体schema和默认schema

        Returns:
            SELECT语句

        Raises:
            ValueError: 表名或列为空
        """
        if not table_name or not columns:
            raise ValueError("表名和列不能为空")

        if not schema_name:
            if entity_type is not None and self.registry.is_registered(entity_type):
                schema_name = self._resolve_schema(entity_type)
            else:
                schema_name = self.default_schema

        return self._render(
            "Select",
            TableName=table_name,
            Schema=schema_name,
            Columns=[escape_column(c) for c in columns],
        )

    def generate_update_query(
        self,
        entity: Any,
        key_columns: Optional[Sequence[str]],
        excluded_columns: Optional[Iterable[str]],
        edited_properties: Iterable[Tuple[str, Any]],
    ) -> str:
        """
        生成UPDATE语句

        SET子句按调用方给出的顺序由修改过的属性构成，键列和excluded_columns中的列不会出现在SET中。

        Args:
            entity: 实体实例，WHERE条件取自其键列的当前值
            key_columns: 键列，None表示使用实体注册的键列
            excluded_columns: 不允许更新的列
            edited_properties: 修改过的 (列名, 新值) 序列

        Returns:
            UPDATE语句

        Raises:
            ValueError: 键列为空，或过滤后没有可更新的列
        """
        entity_type = type(entity)
        condition = self.get_condition(entity, key_columns)
        skipped = set(excluded_columns or ()) | set(
            key_columns if key_columns is not None else self.get_key_columns(entity_type)
        )

        if isinstance(edited_properties, dict):
            edited_properties = edited_properties.items()

        set_clause = [
            f"{escape_column(name)} = {format_literal(value)}"
            for name, value in edited_properties
            if name not in skipped
        ]
        if not set_clause:
            raise ValueError(f"没有可更新的列: {entity_type.__name__}")

        return self._render(
            "Update",
            TableName=self.get_table_name(entity_type),
            Schema=self._resolve_schema(entity_type),
            Set=set_clause,
            Where=condition,
        )

    def generate_delete_query(self, entity: Any, key_columns: Optional[Sequence[str]]) -> str:
        """
        生成DELETE语句

        Args:
            entity: 要删除的实体实例
            key_columns: 键列，None表示使用实体注册的键列

        Returns:
            DELETE语句
        """
        entity_type = type(entity)
        condition = self.get_condition(entity, key_columns)

        return self._render(
            "Delete",
            TableName=self.get_table_name(entity_type),
            Schema=self._resolve_schema(entity_type),
            Where=condition,
        )

    def generate_insert_query(
        self,
        entity: Any,
        key_columns: Optional[Sequence[str]],
        excluded_columns: Optional[Iterable[str]],
    ) -> str:
        """
        生成INSERT语句

        列和值取自实体注册的全部列，排除excluded_columns中的列；
        若实体设置了insert_with_id，自增列即使被排除也会写入。

        Args:
            entity: 要插入的实体实例
            key_columns: 键列，None表示使用实体注册的键列
            excluded_columns: 排除的列，None表示使用实体注册的排除列（含自增列）

        Returns:
            INSERT语句
        """
        entity_type = type(entity)
        metadata = self.get_metadata(entity_type)
        excluded = set(metadata.excluded_columns if excluded_columns is None else excluded_columns)
        identity_columns = set(metadata.identity_columns)

        included = [
            column for column in metadata.columns
            if column.name not in excluded
            or (metadata.insert_with_id and column.name in identity_columns)
        ]

        keys = metadata.key_columns if key_columns is None else list(key_columns)
        condition = self.get_condition(entity, keys) if keys else []

        return self._render(
            "Insert",
            TableName=metadata.table_name,
            Schema=self._resolve_schema(entity_type),
            IsIdentityInsert=metadata.include_identity_insert,
            Columns=[escape_column(c.name) for c in included],
            Values=[format_literal(c.get_value(entity)) for c in included],
            Where=condition,
        )

    def generate_comment(self, comment: Optional[str]) -> str:
        """
        生成注释

        Args:
            comment: 注释内容，包含换行时生成多行注释，否则生成单行注释

        Returns:
            注释文本；空或纯空白输入返回空字符串
        """
        if not comment or not comment.strip():
            return ""

        return self._render(
            "Comment",
            isMultiLine="\n" in comment or "\r" in comment,
            Comment=comment,
        )

    def generate_batch_separator(self) -> str:
        """SQLite没有批处理分隔符"""
        return ""

    def get_condition(self, entity: Any, key_columns: Optional[Sequence[str]]) -> List[str]:
        """
        生成WHERE条件片段

        Args:
            entity: 实体实例
            key_columns: 键列，None表示使用实体注册的键列

        Returns:
            每个键列一条 "列 = '值'" 片段，由模板用AND连接

        Raises:
            ValueError: 键列为空或不存在
        """
        metadata = self.get_metadata(type(entity))
        if key_columns is None:
            key_columns = metadata.key_columns

        if not key_columns:
            # 空条件会匹配整张表
            raise ValueError(f"键列不能为空: {metadata.entity_type.__name__}")

        condition = []
        for name in key_columns:
            column = metadata.get_column(name)
            if column is None:
                raise ValueError(f"键列不存在于实体 {metadata.entity_type.__name__}: {name}")
            condition.append(f"{escape_column(column.name)} = {format_literal(column.get_value(entity))}")
        return condition

    def escape_value(self, value: Any) -> Any:
        return escape_value(value)

    def escape_column(self, name: Optional[str]) -> str:
        return escape_column(name)

    def dispose(self):
        """释放模板渲染器"""
        self._templates.dispose()

    close = dispose

    def __enter__(self) -> "QueryGenerator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()

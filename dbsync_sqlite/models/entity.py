"""
实体元数据
注册时为每个实体类型构建一次列描述符列表，生成SQL时按类型查找，不做运行时反射
"""
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect

from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColumnDescriptor:
    """列描述符"""
    name: str  # SQL中的列名
    attribute: str  # 实体上的属性名
    is_key: bool = False
    is_identity: bool = False
    is_excluded: bool = False

    def get_value(self, entity: Any) -> Any:
        """读取实体上该列的当前值"""
        return getattr(entity, self.attribute, None)


@dataclass(frozen=True)
class EntityMetadata:
    """实体类型元数据"""
    entity_type: type
    table_name: str
    schema_name: Optional[str] = None
    columns: Tuple[ColumnDescriptor, ...] = field(default_factory=tuple)
    insert_with_id: bool = False
    include_identity_insert: bool = False

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def key_columns(self) -> List[str]:
        return [c.name for c in self.columns if c.is_key]

    @property
    def identity_columns(self) -> List[str]:
        return [c.name for c in self.columns if c.is_identity]

    @property
    def excluded_columns(self) -> List[str]:
        """显式排除的列加上自增列"""
        return [c.name for c in self.columns if c.is_excluded or c.is_identity]

    def get_column(self, name: str) -> Optional[ColumnDescriptor]:
        for column in self.columns:
            if column.name == name:
                return column
        return None


def _mapped_columns(entity_type: type) -> Optional[Dict[str, Any]]:
    """
    读取SQLAlchemy映射类的列信息

    Returns:
        非映射类返回None，否则返回包含列、主键、自增列、表名和schema的字典
    """
    mapper = sa_inspect(entity_type, raiseerr=False)
    if mapper is None or not hasattr(mapper, "column_attrs"):
        return None

    table = mapper.local_table
    autoincrement_column = table.autoincrement_column

    columns = []
    keys = []
    identities = []
    for prop in mapper.column_attrs:
        column = prop.columns[0]
        columns.append((prop.key, column.name))
        if column.primary_key:
            keys.append(column.name)
        if column.identity is not None or column is autoincrement_column:
            identities.append(column.name)

    return {
        "columns": columns,
        "keys": keys,
        "identities": identities,
        "table_name": table.name,
        "schema_name": table.schema,
    }


def _declared_attributes(entity_type: type) -> List[str]:
    """按声明顺序列出数据类或pydantic模型的属性名"""
    if dataclasses.is_dataclass(entity_type):
        return [f.name for f in dataclasses.fields(entity_type)]
    if isinstance(entity_type, type) and issubclass(entity_type, BaseModel):
        return list(entity_type.model_fields.keys())
    raise TypeError(
        f"无法枚举实体字段: {entity_type.__name__}。"
        f"请使用dataclass、pydantic模型、SQLAlchemy映射类，或显式传入columns"
    )


class EntityRegistry:
    """实体元数据注册表"""

    def __init__(self):
        self._entities: Dict[type, EntityMetadata] = {}

    def register(
        self,
        entity_type: type,
        *,
        table_name: Optional[str] = None,
        schema_name: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        column_names: Optional[Dict[str, str]] = None,
        key_columns: Iterable[str] = (),
        identity_columns: Iterable[str] = (),
        excluded_columns: Iterable[str] = (),
        insert_with_id: bool = False,
        include_identity_insert: bool = False,
    ) -> EntityMetadata:
        """
        注册实体类型

        Args:
            entity_type: 实体类型
            table_name: 表名，默认取映射表名或类名
            schema_name: schema名称，None表示使用默认schema
            columns: 显式指定参与同步的属性名（按顺序），默认从类型声明中枚举
            column_names: 属性名到SQL列名的映射，未出现的属性列名与属性名相同
            key_columns: 键列（SQL列名），映射类默认取主键
            identity_columns: 自增列（SQL列名），映射类默认取自增/Identity列
            excluded_columns: 生成INSERT时排除的列
            insert_with_id: INSERT时是否显式写入自增列的值
            include_identity_insert: 是否需要identity insert模式

        Returns:
            注册后的EntityMetadata

        Raises:
            ValueError: 键列、自增列或排除列不存在
            TypeError: 无法枚举实体字段
        """
        mapped = _mapped_columns(entity_type)
        column_names = column_names or {}
        key_columns = list(key_columns)
        identity_columns = list(identity_columns)
        excluded_columns = list(excluded_columns)

        if columns is not None:
            pairs = [(attr, column_names.get(attr, attr)) for attr in columns]
        elif mapped is not None:
            pairs = mapped["columns"]
        else:
            pairs = [(attr, column_names.get(attr, attr)) for attr in _declared_attributes(entity_type)]

        if mapped is not None:
            key_columns = key_columns or mapped["keys"]
            identity_columns = identity_columns or mapped["identities"]
            table_name = table_name or mapped["table_name"]
            schema_name = schema_name or mapped["schema_name"]

        known = {name for _, name in pairs}
        for label, names in (
            ("键列", key_columns),
            ("自增列", identity_columns),
            ("排除列", excluded_columns),
        ):
            unknown = [name for name in names if name not in known]
            if unknown:
                raise ValueError(f"{label}不存在于实体 {entity_type.__name__}: {', '.join(unknown)}")

        descriptors = tuple(
            ColumnDescriptor(
                name=name,
                attribute=attr,
                is_key=name in key_columns,
                is_identity=name in identity_columns,
                is_excluded=name in excluded_columns,
            )
            for attr, name in pairs
        )

        metadata = EntityMetadata(
            entity_type=entity_type,
            table_name=table_name or entity_type.__name__,
            schema_name=schema_name or None,
            columns=descriptors,
            insert_with_id=insert_with_id,
            include_identity_insert=include_identity_insert,
        )
        self._entities[entity_type] = metadata

        logger.debug(
            f"注册实体: {entity_type.__name__} -> {metadata.table_name}, "
            f"columns={metadata.column_names}, keys={metadata.key_columns}"
        )
        return metadata

    def get(self, entity_type: type) -> EntityMetadata:
        """
        获取实体类型的元数据

        Raises:
            LookupError: 实体类型未注册
        """
        metadata = self._entities.get(entity_type)
        if metadata is None:
            raise LookupError(f"实体类型未注册: {getattr(entity_type, '__name__', entity_type)}")
        return metadata

    def is_registered(self, entity_type: type) -> bool:
        return entity_type in self._entities

    def unregister(self, entity_type: type):
        self._entities.pop(entity_type, None)


# 全局实体注册表
_default_registry = EntityRegistry()


def get_entity_registry() -> EntityRegistry:
    """获取全局实体注册表"""
    return _default_registry


def sync_entity(registry: Optional[EntityRegistry] = None, **options: Any):
    """
    类装饰器：把实体类型注册到注册表（默认为全局注册表）

    使用方式：
        @sync_entity(table_name="users", key_columns=["id"])
        @dataclass
        class User:
            id: int
            name: str
    """
    def decorator(entity_type: Type) -> Type:
        (registry or _default_registry).register(entity_type, **options)
        return entity_type

    return decorator

"""
查询辅助类
按实体类型查询注册的元数据，供查询生成器使用
"""
from typing import List, Optional

from ..models.entity import ColumnDescriptor, EntityMetadata, EntityRegistry, get_entity_registry


class QueryHelper:
    """实体元数据查询"""

    def __init__(self, registry: Optional[EntityRegistry] = None):
        self.registry = registry or get_entity_registry()

    def get_metadata(self, entity_type: type) -> EntityMetadata:
        return self.registry.get(entity_type)

    def get_table_name(self, entity_type: type) -> str:
        return self.get_metadata(entity_type).table_name

    def get_table_schema(self, entity_type: type) -> Optional[str]:
        """schema名称，未设置时返回None"""
        return self.get_metadata(entity_type).schema_name

    def get_columns(self, entity_type: type) -> List[ColumnDescriptor]:
        return list(self.get_metadata(entity_type).columns)

    def get_key_columns(self, entity_type: type) -> List[str]:
        return self.get_metadata(entity_type).key_columns

    def get_identity_columns(self, entity_type: type) -> List[str]:
        return self.get_metadata(entity_type).identity_columns

    def get_excluded_columns(self, entity_type: type) -> List[str]:
        return self.get_metadata(entity_type).excluded_columns

    def get_insert_with_id(self, entity_type: type) -> bool:
        return self.get_metadata(entity_type).insert_with_id

    def get_include_identity_insert(self, entity_type: type) -> bool:
        return self.get_metadata(entity_type).include_identity_insert

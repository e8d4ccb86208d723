"""
实体注册表测试
"""
import pytest
from pydantic import BaseModel
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

from dbsync_sqlite.models import EntityRegistry, sync_entity, get_entity_registry

from .entities import User

Base = declarative_base()


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    display_name = Column("display name", String(100))
    status = Column(String(20))


class Product(BaseModel):
    sku: str
    title: str
    price: float = 0.0


class TestRegisterDataclass:
    """测试注册dataclass实体"""

    def test_columns_in_declaration_order(self):
        registry = EntityRegistry()
        metadata = registry.register(User, key_columns=["id"])
        assert metadata.column_names == ["id", "name", "email"]
        assert metadata.table_name == "User"
        assert metadata.schema_name is None
        assert metadata.key_columns == ["id"]

    def test_excluded_includes_identity(self):
        registry = EntityRegistry()
        metadata = registry.register(User, identity_columns=["id"], excluded_columns=["email"])
        assert metadata.excluded_columns == ["id", "email"]
        assert metadata.identity_columns == ["id"]

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="键列不存在"):
            EntityRegistry().register(User, key_columns=["uuid"])

    def test_explicit_columns(self):
        registry = EntityRegistry()
        metadata = registry.register(User, columns=["id", "name"], key_columns=["id"])
        assert metadata.column_names == ["id", "name"]


class TestRegisterOtherTypes:
    """测试注册pydantic模型和SQLAlchemy映射类"""

    def test_pydantic_model(self):
        metadata = EntityRegistry().register(Product, table_name="products", key_columns=["sku"])
        assert metadata.column_names == ["sku", "title", "price"]
        assert metadata.get_column("sku").get_value(Product(sku="A1", title="x")) == "A1"

    def test_sqlalchemy_model(self):
        """测试从映射信息读取表名、主键和自增列"""
        metadata = EntityRegistry().register(Account)
        assert metadata.table_name == "accounts"
        assert metadata.column_names == ["id", "display name", "status"]
        assert metadata.key_columns == ["id"]
        assert metadata.identity_columns == ["id"]

        column = metadata.get_column("display name")
        assert column.attribute == "display_name"
        assert column.get_value(Account(id=1, display_name="Ann")) == "Ann"

    def test_plain_class_rejected(self):
        class Plain:
            pass

        with pytest.raises(TypeError, match="无法枚举实体字段"):
            EntityRegistry().register(Plain)


class TestRegistryLookup:
    """测试注册表查找"""

    def test_unregistered_lookup(self):
        with pytest.raises(LookupError):
            EntityRegistry().get(User)

    def test_sync_entity_decorator(self):
        registry = EntityRegistry()

        @sync_entity(registry, table_name="tags", key_columns=["name"])
        class Tag(BaseModel):
            name: str

        assert registry.get(Tag).table_name == "tags"

    def test_sync_entity_default_registry(self):
        @sync_entity(table_name="labels", key_columns=["code"])
        class Label(BaseModel):
            code: str

        try:
            assert get_entity_registry().is_registered(Label)
        finally:
            get_entity_registry().unregister(Label)

"""
测试公共夹具
"""
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from dbsync_sqlite.config import Settings
from dbsync_sqlite.models.entity import EntityRegistry
from dbsync_sqlite.services.query_generator import QueryGenerator
from dbsync_sqlite.tests.entities import User, OrderLine


@pytest.fixture
def registry():
    """独立的实体注册表，避免测试之间互相影响"""
    registry = EntityRegistry()
    registry.register(User, table_name="users", key_columns=["id"], identity_columns=["id"])
    registry.register(
        OrderLine,
        table_name="order_lines",
        schema_name="sales",
        key_columns=["order_id", "line_no"],
    )
    return registry


@pytest.fixture
def generator(registry):
    """使用默认schema main的查询生成器"""
    generator = QueryGenerator(registry=registry, settings=Settings())
    yield generator
    generator.dispose()

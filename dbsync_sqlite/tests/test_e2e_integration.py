"""
端到端测试：生成的SQL在SQLite上执行
"""
import sqlite3

import pytest

from dbsync_sqlite.config import Settings
from dbsync_sqlite.models.entity import EntityRegistry
from dbsync_sqlite.services.database_adapters import SQLiteAdapter
from dbsync_sqlite.services.query_generator import QueryGenerator

from .entities import User


@pytest.fixture
def users_db(tmp_path):
    db_path = tmp_path / "sync.db"
    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT)")
    conn.commit()
    conn.close()
    return SQLiteAdapter(str(db_path))


@pytest.fixture
def sync_generator():
    registry = EntityRegistry()
    registry.register(
        User,
        table_name="users",
        key_columns=["id"],
        identity_columns=["id"],
        insert_with_id=True,
    )
    with QueryGenerator(registry=registry, settings=Settings()) as generator:
        yield generator


def test_insert_update_delete_round(users_db, sync_generator):
    """测试INSERT/UPDATE/DELETE语句在SQLite上执行"""
    user = User(id=1, name="O'Brien", email="ob@example.com")

    users_db.execute_query(sync_generator.generate_insert_query(user, None, None), "insert")
    select_sql = sync_generator.generate_select_query(User, "users", ["id", "name", "email"])
    rows = users_db.execute_query(select_sql, "users")["users"].rows
    assert rows == [{"id": 1, "name": "O'Brien", "email": "ob@example.com"}]

    update_sql = sync_generator.generate_update_query(user, ["id"], [], [("name", "Brian 'B'")])
    users_db.execute_query(update_sql, "update")
    rows = users_db.execute_query(select_sql, "users")["users"].rows
    assert rows[0]["name"] == "Brian 'B'"

    users_db.execute_query(sync_generator.generate_delete_query(user, ["id"]), "delete")
    assert users_db.execute_query(select_sql, "users")["users"].rows == []


def test_comment_prefixed_statement_runs(users_db, sync_generator):
    """测试带注释的语句可以执行"""
    comment = sync_generator.generate_comment("sync run\nbatch 1")
    sql = comment + "\n" + sync_generator.generate_select_query(None, "users", ["id"])
    table = users_db.execute_query(sql, "users")["users"]
    assert table.columns == ["id"]

"""
SQL模板测试
"""
import pytest

from dbsync_sqlite.services.query_templates import QueryTemplates, TEMPLATE_FILES


class TestQueryTemplates:
    """测试模板渲染"""

    def test_all_templates_available(self):
        assert set(TEMPLATE_FILES) == {"Select", "Update", "Delete", "Insert", "Comment"}

    def test_render_delete(self):
        with QueryTemplates() as templates:
            sql = templates.render("Delete", {
                "TableName": "users",
                "Schema": "main",
                "Where": ["id = '1'", "tenant = '2'"],
            })
        assert sql == "DELETE FROM main.users WHERE id = '1' AND tenant = '2';"

    def test_insert_ignores_identity_flag(self):
        with QueryTemplates() as templates:
            bindings = {
                "TableName": "users",
                "Schema": "main",
                "Columns": ["id", "name"],
                "Values": ["'1'", "'a'"],
                "Where": [],
            }
            plain = templates.render("Insert", dict(bindings, IsIdentityInsert=False))
            identity = templates.render("Insert", dict(bindings, IsIdentityInsert=True))
        assert plain == identity == "INSERT INTO main.users (id, name) VALUES ('1', 'a');"

    def test_unknown_template(self):
        with QueryTemplates() as templates:
            with pytest.raises(ValueError, match="未知的模板"):
                templates.render("Merge", {})

    def test_custom_template_dir_overrides(self, tmp_path):
        """测试自定义目录中的模板优先于内置模板"""
        (tmp_path / "select.sql.jinja").write_text(
            "SELECT {{ Columns | join(', ') }} FROM \"{{ Schema }}\".\"{{ TableName }}\"",
            encoding="utf-8",
        )
        with QueryTemplates(str(tmp_path)) as templates:
            sql = templates.render("Select", {"TableName": "t", "Schema": "main", "Columns": ["a"]})
            comment = templates.render("Comment", {"isMultiLine": False, "Comment": "x"})
        assert sql == 'SELECT a FROM "main"."t"'
        assert comment == "-- x"

    def test_render_after_dispose(self):
        templates = QueryTemplates()
        templates.dispose()
        assert templates.is_disposed
        with pytest.raises(RuntimeError):
            templates.render("Comment", {"isMultiLine": False, "Comment": "x"})

    def test_dispose_twice(self):
        templates = QueryTemplates()
        templates.dispose()
        templates.dispose()

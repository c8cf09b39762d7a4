"""
Unit tests for the Pkl document parser.

Tests declaration scanning, field-line parsing and file error handling.
"""

import pytest

from aac.exceptions import ModelLoadError
from aac.pkl.parser import PklRecord, parse_document, parse_file, parse_object_body


class TestParseObjectBody:
    """Field lines inside one declaration body."""

    def test_key_value_lines(self):
        """Each key = value line becomes one field."""
        fields = parse_object_body('\n  uid = "a"\n  level = 2\n  active = true\n')
        assert fields == {"uid": "a", "level": 2, "active": True}

    def test_comments_and_blank_lines_skipped(self):
        body = '\n  // a comment\n\n  name = "X"\n'
        assert parse_object_body(body) == {"name": "X"}

    def test_trailing_comma_removed(self):
        """One trailing comma is dropped before value parsing."""
        assert parse_object_body("  level = 3,") == {"level": 3}

    def test_lines_without_assignment_ignored(self):
        assert parse_object_body("  just some text\n  uid = \"u\"") == {"uid": "u"}

    def test_later_key_wins(self):
        assert parse_object_body('uid = "a"\nuid = "b"') == {"uid": "b"}

    def test_value_keeps_inner_equals(self):
        """Only the first '=' separates key from value."""
        assert parse_object_body('expr = "a = b"') == {"expr": "a = b"}


class TestParseDocument:
    """Whole-document scanning."""

    def test_module_name(self):
        document = parse_document("module Shop\n")
        assert document.module == "Shop"

    def test_missing_module(self):
        document = parse_document('a: BusinessActor = new { uid = "a" }')
        assert document.module is None

    def test_top_level_declarations(self):
        content = '''
module M

customer: BusinessActor = new {
  uid = "actor-1"
  name = "Customer"
}

link: Relationship = new {
  uid = "rel-1"
  source = "actor-1"
  target = "cap-1"
}
'''
        document = parse_document(content, "m.pkl")
        assert [obj.name for obj in document.objects] == ["customer", "link"]
        assert [obj.type for obj in document.objects] == ["BusinessActor", "Relationship"]
        assert document.objects[0].fields["name"] == "Customer"
        assert document.source == "m.pkl"

    def test_relationships_are_subset_of_objects(self):
        """Relationship records appear in both lists."""
        content = '''
x: Relationship = new {
  uid = "r"
}
y: Application = new {
  uid = "a"
}
'''
        document = parse_document(content)
        assert len(document.objects) == 2
        assert len(document.relationships) == 1
        assert document.relationships[0] in document.objects

    def test_local_declaration_matched_twice(self):
        """A local declaration is captured by both scans."""
        content = 'local helper: BusinessActor = new {\n  uid = "h"\n}\n'
        document = parse_document(content)
        assert len(document.objects) == 2
        assert all(obj.name == "helper" for obj in document.objects)

    def test_local_declarations_come_first(self):
        content = (
            'top: Application = new {\n  uid = "t"\n}\n'
            'local inner: Application = new {\n  uid = "i"\n}\n'
        )
        document = parse_document(content)
        assert [obj.name for obj in document.objects] == ["inner", "top", "inner"]

    def test_nested_braces_truncate_body(self):
        """A body ends at the first closing brace; later fields are lost."""
        content = 'a: Application = new {\n  uid = "a"\n  nested = new { x = 1 }\n  name = "lost"\n}\n'
        document = parse_document(content)
        assert document.objects[0].get("uid") == "a"
        assert "name" not in document.objects[0].fields

    def test_unrecognized_content_yields_empty_document(self):
        document = parse_document("this is not pkl at all")
        assert document.objects == []
        assert document.relationships == []

    def test_empty_body_not_matched(self):
        """Declarations need at least one body character."""
        assert parse_document("a: Application = new {}").objects == []


class TestPklRecord:
    """Typed field accessors."""

    def test_typed_accessors(self):
        record = PklRecord("n", "TechnologyInterface", {
            "protocol": "HTTPS",
            "port": 443,
            "secure": True,
            "meta": {"a": "1"},
            "tags": 'Listing("x", "y")',
        })
        assert record.get_str("protocol") == "HTTPS"
        assert record.get_int("port") == 443
        assert record.get_map("meta") == {"a": "1"}
        assert record.get_list("tags") == ["x", "y"]

    def test_accessors_reject_wrong_shapes(self):
        record = PklRecord("n", "X", {"port": "443", "flag": True, "meta": "Map"})
        assert record.get_int("port") is None
        assert record.get_int("flag") is None
        assert record.get_str("flag") is None
        assert record.get_map("meta") == {}
        assert record.get_list("missing") == []

    def test_list_from_comma_separated_string(self):
        record = PklRecord("d", "BusinessDomain", {"stakeholders": "actor-1, actor-2,"})
        assert record.get_list("stakeholders") == ["actor-1", "actor-2"]

    def test_is_relationship(self):
        assert PklRecord("r", "Relationship").is_relationship
        assert not PklRecord("a", "Application").is_relationship


class TestParseFile:
    """Reading model files from disk."""

    def test_parse_file_sets_source_to_file_name(self, tmp_path):
        path = tmp_path / "shop.pkl"
        path.write_text('module Shop\na: Application = new {\n  uid = "a"\n}\n', encoding="utf-8")

        document = parse_file(path)

        assert document.source == "shop.pkl"
        assert document.module == "Shop"
        assert len(document.objects) == 1

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ModelLoadError) as exc_info:
            parse_file(tmp_path / "missing.pkl")
        assert exc_info.value.model_path.endswith("missing.pkl")

    def test_undecodable_file_raises(self, tmp_path):
        path = tmp_path / "binary.pkl"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(ModelLoadError):
            parse_file(path)

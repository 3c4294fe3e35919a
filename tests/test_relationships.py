"""
Tests for foreign key based relationship detection.
"""

from unittest import TestCase

from blade_view_generator.domain.analysis import analyze_table
from blade_view_generator.domain.models import ColumnInfo, RelationshipType
from blade_view_generator.domain.relationships import RelationshipDetector, detect_relationship


class TestDetectRelationship(TestCase):
    """Test cases for detect_relationship"""

    def test_simple_foreign_key(self):
        relationship = detect_relationship("category_id")
        assert relationship is not None
        assert relationship.name == "category"
        assert relationship.foreign_key == "category_id"
        assert relationship.related_table == "categories"
        assert relationship.related_model == "Category"
        assert relationship.relationship_type is RelationshipType.BELONGS_TO

    def test_multi_word_relation_is_not_split(self):
        relationship = detect_relationship("parent_category_id")
        assert relationship.name == "parent_category"
        assert relationship.related_table == "parent_categories"
        assert relationship.related_model == "ParentCategory"

    def test_singular_relation_ending_in_s(self):
        cases = {
            "address_id": ("addresses", "Address"),
            "class_id": ("classes", "Class"),
            "status_id": ("statuses", "Status"),
            "billing_address_id": ("billing_addresses", "BillingAddress"),
        }
        for column, expected in cases.items():
            relationship = detect_relationship(column)
            assert (relationship.related_table, relationship.related_model) == expected, column

    def test_non_matching_names(self):
        for name in ("name", "id", "_id", "", "identity", "user_ids"):
            assert detect_relationship(name) is None, name

    def test_to_dict(self):
        assert detect_relationship("author_id").to_dict() == {
            "type": "belongsTo",
            "name": "author",
            "foreign_key": "author_id",
            "related_table": "authors",
            "related_model": "Author",
        }


class TestRelationshipDetector(TestCase):
    """Test cases for whole-table detection"""

    def test_detects_in_column_order(self):
        columns = [
            ColumnInfo("id", "bigInteger", nullable=False),
            ColumnInfo("user_id", "bigInteger"),
            ColumnInfo("title"),
            ColumnInfo("category_id", "bigInteger"),
        ]
        relationships = RelationshipDetector().detect_relationships(columns)
        assert [r.foreign_key for r in relationships] == ["user_id", "category_id"]

    def test_empty_table(self):
        assert RelationshipDetector().detect_relationships([]) == []

    def test_analyze_table_attaches_relationships(self):
        table = analyze_table("blog_posts", [ColumnInfo("id"), ColumnInfo("author_id")])
        assert table.model_name == "BlogPost"
        assert [r.related_model for r in table.relationships] == ["Author"]

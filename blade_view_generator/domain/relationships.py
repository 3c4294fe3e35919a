"""
Relationship detection domain logic for Blade View Generator.

Relationships are guessed purely from column names: a column `author_id`
is taken to point at the `authors` table through an `author` relation.
"""

from typing import List, Optional, Sequence

from ..constants import FieldNames
from .models import ColumnInfo, RelationshipInfo, RelationshipType
from .naming import pluralize, singularize, to_studly_case


def detect_relationship(column_name: str) -> Optional[RelationshipInfo]:
    """
    Infer a belongs-to relationship from a foreign key column name.

    Args:
        column_name: Database column name (e.g., 'category_id')

    Returns:
        The inferred relationship, or None if the name does not follow the
        `<relation>_id` convention. `id` and `_id` never match.

    Example:
        >>> detect_relationship("parent_category_id").related_table
        'parent_categories'
    """
    suffix = FieldNames.FOREIGN_KEY_SUFFIX
    if not column_name or not column_name.endswith(suffix):
        return None

    relation_name = column_name[:-len(suffix)]
    if not relation_name:
        return None

    return RelationshipInfo(
        name=relation_name,
        foreign_key=column_name,
        related_table=pluralize(relation_name),
        related_model=to_studly_case(singularize(relation_name)),
        relationship_type=RelationshipType.BELONGS_TO,
    )


class RelationshipDetector:
    """Detects the relationships of a whole table."""

    def detect_relationships(self, columns: Sequence[ColumnInfo]) -> List[RelationshipInfo]:
        """
        Relationships for every foreign-key-looking column, in column order.

        Args:
            columns: Columns of a single table

        Returns:
            List of inferred relationships
        """
        relationships = []
        for column in columns:
            relationship = detect_relationship(column.name)
            if relationship is not None:
                relationships.append(relationship)
        return relationships

"""
Table analysis for Blade View Generator.

Ties the classifier and the relationship detector together and produces
the variable map handed to the templates. Everything here is pure.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .field_mapping import FieldClassifier
from .models import ColumnInfo, FeatureFlags, FormField, TableField, TableInfo
from .naming import NamingConventions
from .relationships import RelationshipDetector


@dataclass
class TableAnalysis:
    """A table together with its classified form and table fields."""

    table: TableInfo
    form_fields: List[FormField] = field(default_factory=list)
    table_fields: List[TableField] = field(default_factory=list)

    @property
    def searchable_fields(self) -> List[str]:
        """Plain text columns a search box can match against."""
        return [f.name for f in self.table_fields if f.display_type.value in ("text", "email")]

    @property
    def sortable_fields(self) -> List[str]:
        return [f.name for f in self.table_fields if f.sortable]

    @property
    def filterable_fields(self) -> List[str]:
        return [f.name for f in self.table_fields if f.filterable]


def analyze_table(table_name: str, columns: Sequence[ColumnInfo]) -> TableInfo:
    """Build a `TableInfo` for a schema snapshot, with relationships detected."""
    table = TableInfo(name=table_name, columns=list(columns))
    table.relationships = RelationshipDetector().detect_relationships(table.columns)
    return table


def analyze_fields(table: TableInfo, classifier: Optional[FieldClassifier] = None) -> TableAnalysis:
    """Classify every column of `table` for forms and data tables."""
    classifier = classifier or FieldClassifier()
    return TableAnalysis(
        table=table,
        form_fields=classifier.analyze_for_forms(table.columns),
        table_fields=classifier.analyze_for_tables(table.columns),
    )


def build_template_context(
    analysis: Optional[TableAnalysis],
    flags: FeatureFlags,
    framework: str,
    layout: str,
) -> Dict[str, Any]:
    """
    Named variables available to every stub.

    `analysis` may be None for table independent runs (components, layouts).
    """
    context: Dict[str, Any] = {
        'framework': framework,
        'layout': layout,
        'component_namespace': flags.component_namespace,
        'pagination_size': flags.pagination_size,
        'features': flags.to_dict(),
    }
    if analysis is None:
        return context

    table = analysis.table
    context.update({
        'table': table.name,
        'model_name': table.model_name,
        'model_variable': NamingConventions.table_to_variable(table.name),
        'view_directory': NamingConventions.table_to_view_directory(table.name),
        'route_name': NamingConventions.table_to_view_directory(table.name),
        'primary_key': table.primary_key,
        'timestamps': table.has_timestamps,
        'soft_deletes': table.has_soft_deletes,
        'form_fields': [f.to_dict() for f in analysis.form_fields],
        'table_fields': [f.to_dict() for f in analysis.table_fields],
        'relationships': [r.to_dict() for r in table.relationships],
        'searchable_fields': analysis.searchable_fields,
        'sortable_fields': analysis.sortable_fields,
        'filterable_fields': analysis.filterable_fields,
    })
    return context

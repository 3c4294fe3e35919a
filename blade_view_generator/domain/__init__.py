"""
Domain module for Blade View Generator.

This module contains the pure inference and planning logic: column
classification, relationship detection and manifest planning. Nothing in
here performs I/O.
"""

from .models import (
    ColumnInfo,
    ColumnType,
    DisplayType,
    FeatureFlags,
    FormField,
    GenerationResult,
    InputType,
    ManifestEntry,
    RelationshipInfo,
    RelationshipType,
    TableField,
    TableInfo,
    ViewCategory,
)

from .field_mapping import (
    FieldClassifier,
    analyze_for_forms,
    analyze_for_tables,
    classify_for_form,
    classify_for_table,
)

from .relationships import (
    RelationshipDetector,
    detect_relationship,
)

from .manifest import (
    ManifestPlanner,
    group_by_category,
    normalize_categories,
    plan_manifest,
)

from .analysis import (
    TableAnalysis,
    analyze_fields,
    analyze_table,
    build_template_context,
)

from .naming import (
    NamingConventions,
    generate_label,
    generate_model_name,
    generate_view_directory,
    pluralize,
    singularize,
    to_kebab_case,
    to_studly_case,
)

__all__ = [
    # Core models
    'ColumnInfo',
    'ColumnType',
    'DisplayType',
    'FeatureFlags',
    'FormField',
    'GenerationResult',
    'InputType',
    'ManifestEntry',
    'RelationshipInfo',
    'RelationshipType',
    'TableField',
    'TableInfo',
    'ViewCategory',

    # Field classification
    'FieldClassifier',
    'analyze_for_forms',
    'analyze_for_tables',
    'classify_for_form',
    'classify_for_table',

    # Relationships
    'RelationshipDetector',
    'detect_relationship',

    # Manifest
    'ManifestPlanner',
    'group_by_category',
    'normalize_categories',
    'plan_manifest',

    # Analysis
    'TableAnalysis',
    'analyze_fields',
    'analyze_table',
    'build_template_context',

    # Naming
    'NamingConventions',
    'generate_label',
    'generate_model_name',
    'generate_view_directory',
    'pluralize',
    'singularize',
    'to_kebab_case',
    'to_studly_case',
]

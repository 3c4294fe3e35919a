"""
Centralized constants for Blade View Generator.

This module contains the column name conventions, type aliases, feature
defaults and fixed view path lists used across the code base, so that
contributors can change generation behavior in one place.
"""

from typing import Dict, List, Set, Tuple


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    RESOURCES_PATH = "./resources"
    FRAMEWORK = "bootstrap"
    LAYOUT = "layouts.app"
    COMPONENT_NAMESPACE = "components"

    PAGINATION_SIZE = 15
    VALIDATION_STYLE = "inline"

    BACKUP_SUFFIX = ".bak"


class SupportedFrameworks:
    """UI frameworks a view set can be generated for."""

    BOOTSTRAP = "bootstrap"
    TAILWIND = "tailwind"
    CUSTOM = "custom"

    ALL = [BOOTSTRAP, TAILWIND, CUSTOM]


VALIDATION_STYLES: List[str] = ["inline", "summary", "both"]


# =============================================================================
# COLUMN TYPES
# =============================================================================

# Lower-cased declared type -> canonical ColumnType value.
COLUMN_TYPE_ALIASES: Dict[str, str] = {
    "string": "string",
    "varchar": "string",
    "char": "string",
    "text": "text",
    "mediumtext": "text",
    "longtext": "longtext",
    "integer": "integer",
    "int": "integer",
    "biginteger": "bigInteger",
    "bigint": "bigInteger",
    "smallinteger": "smallInteger",
    "smallint": "smallInteger",
    "tinyint": "smallInteger",
    "decimal": "decimal",
    "numeric": "decimal",
    "float": "float",
    "double": "double",
    "boolean": "boolean",
    "bool": "boolean",
    "date": "date",
    "datetime": "datetime",
    "timestamp": "timestamp",
    "time": "time",
    "json": "json",
    "jsonb": "json",
    "enum": "enum",
    "uuid": "uuid",
    "binary": "binary",
    "blob": "binary",
}

# Django model field class (as returned by introspection.get_field_type)
# -> canonical ColumnType value.
DJANGO_FIELD_TYPE_MAP: Dict[str, str] = {
    "AutoField": "integer",
    "BigAutoField": "bigInteger",
    "SmallAutoField": "smallInteger",
    "IntegerField": "integer",
    "PositiveIntegerField": "integer",
    "BigIntegerField": "bigInteger",
    "PositiveBigIntegerField": "bigInteger",
    "SmallIntegerField": "smallInteger",
    "PositiveSmallIntegerField": "smallInteger",
    "DecimalField": "decimal",
    "FloatField": "float",
    "CharField": "string",
    "SlugField": "string",
    "EmailField": "string",
    "URLField": "string",
    "GenericIPAddressField": "string",
    "TextField": "text",
    "BooleanField": "boolean",
    "NullBooleanField": "boolean",
    "DateField": "date",
    "DateTimeField": "datetime",
    "TimeField": "time",
    "DurationField": "integer",
    "JSONField": "json",
    "UUIDField": "uuid",
    "BinaryField": "binary",
}


# =============================================================================
# NAMING CONVENTIONS
# =============================================================================

class FieldNames:
    """Column names with special meaning for generated views."""

    # Never rendered as editable inputs
    FORM_EXCLUDED: Set[str] = {
        "id", "created_at", "updated_at", "deleted_at", "password", "remember_token"
    }

    # Never rendered in tabular output
    TABLE_HIDDEN: Set[str] = {"password", "remember_token", "email_verified_at"}

    PRIMARY_KEY = "id"
    TIMESTAMP_NAMES: Tuple[str, str] = ("created_at", "updated_at")
    SOFT_DELETE_NAME = "deleted_at"

    FOREIGN_KEY_SUFFIX = "_id"


class TableNames:
    """Framework bookkeeping tables that never get views."""

    SYSTEM_TABLES: Set[str] = {
        "migrations", "password_resets", "password_reset_tokens", "failed_jobs",
        "personal_access_tokens", "sessions", "jobs", "job_batches", "cache",
        "cache_locks",
    }

    # Tables created by the Django connection used for introspection
    SYSTEM_PREFIXES: Tuple[str, ...] = ("django_", "auth_", "sqlite_")


# =============================================================================
# VIEW PATHS
# =============================================================================

class ViewPaths:
    """Fixed path fragments emitted by the manifest planner."""

    BLADE_SUFFIX = ".blade.php"
    VIEWS_PREFIX = "views"

    COMPONENT_TYPES: List[str] = [
        "form-inputs", "data-tables", "modals", "search", "alerts", "pagination"
    ]

    # component type -> (category label, sub directory, file names)
    COMPONENT_FILES: Dict[str, Tuple[str, str, List[str]]] = {
        "form-inputs": ("Form Components", "form", [
            "input", "textarea", "select", "checkbox", "radio",
            "file", "date", "number", "email", "password",
        ]),
        "data-tables": ("Table Components", "table", [
            "data-table", "sortable-header", "pagination", "empty-state", "actions",
        ]),
        "modals": ("Modal Components", "modal", ["base", "confirm", "form", "info"]),
        "search": ("Search Components", "search", [
            "form", "filters", "results", "suggestions",
        ]),
        "alerts": ("Alert Components", "alert", [
            "base", "success", "error", "warning", "info",
        ]),
        "pagination": ("Pagination Components", "pagination", [
            "simple", "detailed", "info",
        ]),
    }

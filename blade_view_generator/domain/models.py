"""
Core domain models for Blade View Generator.

These models describe a table's schema as seen by the generator and the
descriptors derived from it. They are independent of the database backend
used to read the schema and of the templates used to render views.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple
from enum import Enum

from ..constants import COLUMN_TYPE_ALIASES, DefaultConfig, FieldNames, ViewPaths
from .naming import generate_model_name


class ColumnType(Enum):
    """Semantic database column types understood by the classifier."""

    STRING = "string"
    TEXT = "text"
    LONGTEXT = "longtext"
    INTEGER = "integer"
    BIG_INTEGER = "bigInteger"
    SMALL_INTEGER = "smallInteger"
    DECIMAL = "decimal"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    JSON = "json"
    ENUM = "enum"
    UUID = "uuid"
    BINARY = "binary"

    @classmethod
    def from_declared(cls, declared_type: Optional[str]) -> "ColumnType":
        """Normalize a declared type, falling back to STRING for anything unknown."""
        if not declared_type:
            return cls.STRING
        canonical = COLUMN_TYPE_ALIASES.get(str(declared_type).strip().lower())
        return cls(canonical) if canonical else cls.STRING


class InputType(Enum):
    """HTML input kinds used for form fields."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    TEL = "tel"
    URL = "url"
    TEXTAREA = "textarea"
    FILE = "file"
    CHECKBOX = "checkbox"
    DATE = "date"
    DATETIME_LOCAL = "datetime-local"
    TIME = "time"
    NUMBER = "number"
    SELECT = "select"


class DisplayType(Enum):
    """Ways a column value is rendered in a data table."""

    BADGE = "badge"
    BOOLEAN = "boolean"
    IMAGE = "image"
    EMAIL = "email"
    LINK = "link"
    DATE = "date"
    CURRENCY = "currency"
    TEXT = "text"


class RelationshipType(Enum):
    """Relationship kinds inferred from column names."""

    BELONGS_TO = "belongsTo"


class ViewCategory(Enum):
    """Groups of views the planner knows how to lay out, in emission order."""

    CRUD = "crud"
    FORMS = "forms"
    TABLES = "tables"
    COMPONENTS = "components"
    LAYOUTS = "layouts"


@dataclass
class ColumnInfo:
    """
    A single column of a table's schema snapshot.

    `declared_type` keeps whatever the schema source reported; `column_type`
    is its normalized form and is what every classification rule looks at.
    """

    name: str
    declared_type: str = "string"
    nullable: bool = True
    default: Optional[Any] = None

    column_type: ColumnType = field(init=False)

    def __post_init__(self):
        self.column_type = ColumnType.from_declared(self.declared_type)

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.column_type.value,
            'declared_type': self.declared_type,
            'nullable': self.nullable,
            'default': self.default,
        }


@dataclass
class FormField:
    """How a column is rendered as an editable input."""

    name: str
    label: str
    input_type: InputType
    required: bool
    validation: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'label': self.label,
            'input_type': self.input_type.value,
            'required': self.required,
            'validation': list(self.validation),
        }


@dataclass
class TableField:
    """How a column is rendered in tabular output."""

    name: str
    label: str
    display_type: DisplayType
    sortable: bool
    filterable: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'label': self.label,
            'display_type': self.display_type.value,
            'sortable': self.sortable,
            'filterable': self.filterable,
        }


@dataclass
class RelationshipInfo:
    """A relationship guessed from a foreign key naming convention."""

    name: str
    foreign_key: str
    related_table: str
    related_model: str
    relationship_type: RelationshipType = RelationshipType.BELONGS_TO

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.relationship_type.value,
            'name': self.name,
            'foreign_key': self.foreign_key,
            'related_table': self.related_table,
            'related_model': self.related_model,
        }


@dataclass
class TableInfo:
    """
    A table's schema snapshot together with what can be inferred from it.

    This is the aggregate the CLI passes around: columns come from the
    schema source, relationships are filled in by the relationship
    detector.
    """

    name: str
    columns: List[ColumnInfo] = field(default_factory=list)
    model_name: Optional[str] = None
    relationships: List[RelationshipInfo] = field(default_factory=list)

    def __post_init__(self):
        if not self.model_name:
            self.model_name = generate_model_name(self.name)

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    @property
    def primary_key(self) -> str:
        """`id` when present, otherwise the first column."""
        names = self.column_names
        if FieldNames.PRIMARY_KEY in names:
            return FieldNames.PRIMARY_KEY
        return names[0] if names else FieldNames.PRIMARY_KEY

    @property
    def has_timestamps(self) -> bool:
        names = self.column_names
        return all(name in names for name in FieldNames.TIMESTAMP_NAMES)

    @property
    def has_soft_deletes(self) -> bool:
        return FieldNames.SOFT_DELETE_NAME in self.column_names

    def get_column_by_name(self, name: str) -> Optional[ColumnInfo]:
        """Get a column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'table': self.name,
            'model_name': self.model_name,
            'columns': [col.to_dict() for col in self.columns],
            'relationships': [rel.to_dict() for rel in self.relationships],
            'primary_key': self.primary_key,
            'timestamps': self.has_timestamps,
            'soft_deletes': self.has_soft_deletes,
        }


@dataclass(frozen=True)
class FeatureFlags:
    """
    Switches selecting optional generated functionality.

    Instances are immutable so that the same flags always yield the same
    manifest.
    """

    # Tables
    search: bool = False
    filtering: bool = False
    sorting: bool = False
    bulk_actions: bool = False
    export: bool = False
    ajax: bool = False
    responsive: bool = False
    pagination_size: int = DefaultConfig.PAGINATION_SIZE
    component: bool = False

    # Forms
    separate_forms: bool = True
    validation_style: str = DefaultConfig.VALIDATION_STYLE
    rich_text: bool = False
    file_upload: bool = False
    date_picker: bool = False
    use_components: bool = False

    # Components
    component_namespace: str = DefaultConfig.COMPONENT_NAMESPACE
    component_types: Tuple[str, ...] = tuple(ViewPaths.COMPONENT_TYPES)

    # Layouts
    auth: bool = False
    errors: bool = False
    email: bool = False
    navigation: bool = False
    sidebar: bool = False
    breadcrumbs: bool = False
    footer: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.__dict__)
        data['component_types'] = list(self.component_types)
        return data


@dataclass(frozen=True)
class ManifestEntry:
    """One file a generation run is expected to produce."""

    category: str
    relative_path: str
    stub: str


@dataclass
class GenerationResult:
    """Outcome of writing (or planning) one manifest entry."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    PLANNED = "planned"
    FAILED = "failed"

    entry: ManifestEntry
    status: str
    path: Optional[str] = None
    backup_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status != self.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': self.entry.relative_path,
            'category': self.entry.category,
            'status': self.status,
            'path': self.path,
            'backup_path': self.backup_path,
            'error': self.error,
            'success': self.success,
        }

"""
Field classification domain logic for Blade View Generator.

This module contains the rules that turn a database column into a form
input descriptor and a data table column descriptor.

Name based rules are ordered `(substrings, result)` tables evaluated top to
bottom; the first rule whose substring occurs anywhere in the lower-cased
column name wins. Type based rules only apply when no name rule matched.
Matching is deliberately plain substring containment, so `videophone_ext`
is treated as a phone number.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..constants import FieldNames
from ..exceptions import InvalidColumnError
from .models import ColumnInfo, ColumnType, DisplayType, FormField, InputType, TableField
from .naming import generate_label


NameRule = Tuple[Tuple[str, ...], object]


INPUT_NAME_RULES: List[NameRule] = [
    (("email",), InputType.EMAIL),
    (("password",), InputType.PASSWORD),
    (("phone",), InputType.TEL),
    (("url", "website"), InputType.URL),
    (("description", "content"), InputType.TEXTAREA),
    (("image", "avatar", "photo"), InputType.FILE),
]

INPUT_TYPE_MAP: Dict[ColumnType, InputType] = {
    ColumnType.BOOLEAN: InputType.CHECKBOX,
    ColumnType.DATE: InputType.DATE,
    ColumnType.DATETIME: InputType.DATETIME_LOCAL,
    ColumnType.TIMESTAMP: InputType.DATETIME_LOCAL,
    ColumnType.TIME: InputType.TIME,
    ColumnType.INTEGER: InputType.NUMBER,
    ColumnType.BIG_INTEGER: InputType.NUMBER,
    ColumnType.SMALL_INTEGER: InputType.NUMBER,
    ColumnType.DECIMAL: InputType.NUMBER,
    ColumnType.FLOAT: InputType.NUMBER,
    ColumnType.DOUBLE: InputType.NUMBER,
    ColumnType.TEXT: InputType.TEXTAREA,
    ColumnType.LONGTEXT: InputType.TEXTAREA,
}

DISPLAY_NAME_RULES: List[NameRule] = [
    (("status",), DisplayType.BADGE),
    (("active", "enabled"), DisplayType.BOOLEAN),
    (("image", "avatar", "photo"), DisplayType.IMAGE),
    (("email",), DisplayType.EMAIL),
    (("url", "website"), DisplayType.LINK),
]

DISPLAY_TYPE_MAP: Dict[ColumnType, DisplayType] = {
    ColumnType.BOOLEAN: DisplayType.BOOLEAN,
    ColumnType.DATE: DisplayType.DATE,
    ColumnType.DATETIME: DisplayType.DATE,
    ColumnType.TIMESTAMP: DisplayType.DATE,
    ColumnType.DECIMAL: DisplayType.CURRENCY,
    ColumnType.FLOAT: DisplayType.CURRENCY,
    ColumnType.DOUBLE: DisplayType.CURRENCY,
}

UNSORTABLE_TYPES = frozenset({
    ColumnType.TEXT, ColumnType.LONGTEXT, ColumnType.JSON, ColumnType.BINARY,
})

FILTERABLE_NAME_PARTS: Tuple[str, ...] = ("status", "type", "category")
FILTERABLE_TYPES = frozenset({ColumnType.BOOLEAN, ColumnType.ENUM})

INTEGER_TYPES = frozenset({ColumnType.INTEGER, ColumnType.BIG_INTEGER, ColumnType.SMALL_INTEGER})
DECIMAL_TYPES = frozenset({ColumnType.DECIMAL, ColumnType.FLOAT, ColumnType.DOUBLE})
DATE_TYPES = frozenset({ColumnType.DATE, ColumnType.DATETIME, ColumnType.TIMESTAMP})


def _match_name_rules(name: str, rules: Sequence[NameRule]):
    lowered = name.lower()
    for substrings, result in rules:
        if any(part in lowered for part in substrings):
            return result
    return None


def _name_contains(name: str, *parts: str) -> bool:
    lowered = name.lower()
    return any(part in lowered for part in parts)


class FieldClassifier:
    """
    Classifies columns for form and table generation.

    The classifier holds no state besides its exclusion sets, so a single
    instance can be shared between tables.
    """

    def __init__(self, form_excluded=None, table_hidden=None):
        self.form_excluded = frozenset(
            FieldNames.FORM_EXCLUDED if form_excluded is None else form_excluded
        )
        self.table_hidden = frozenset(
            FieldNames.TABLE_HIDDEN if table_hidden is None else table_hidden
        )

    # --- Column level ---

    def classify_for_form(self, column: ColumnInfo) -> Optional[FormField]:
        """
        Build the form field descriptor for a column.

        Returns None for system and sensitive columns that never get an input.

        Raises:
            InvalidColumnError: If the column has no name
        """
        self._validate_column(column)
        if column.name in self.form_excluded:
            return None

        return FormField(
            name=column.name,
            label=generate_label(column.name),
            input_type=self.determine_input_type(column),
            required=self.is_required(column),
            validation=self.generate_validation_rules(column),
        )

    def classify_for_table(self, column: ColumnInfo) -> Optional[TableField]:
        """
        Build the data table descriptor for a column.

        Returns None for columns that must never be displayed.

        Raises:
            InvalidColumnError: If the column has no name
        """
        self._validate_column(column)
        if column.name in self.table_hidden:
            return None

        return TableField(
            name=column.name,
            label=generate_label(column.name),
            display_type=self.determine_display_type(column),
            sortable=self.is_sortable(column),
            filterable=self.is_filterable(column),
        )

    # --- Table level ---

    def analyze_for_forms(self, columns: Sequence[ColumnInfo]) -> List[FormField]:
        """Form fields for every editable column, in column order."""
        fields = []
        for column in columns:
            form_field = self.classify_for_form(column)
            if form_field is not None:
                fields.append(form_field)
        return fields

    def analyze_for_tables(self, columns: Sequence[ColumnInfo]) -> List[TableField]:
        """Table fields for every displayable column, in column order."""
        fields = []
        for column in columns:
            table_field = self.classify_for_table(column)
            if table_field is not None:
                fields.append(table_field)
        return fields

    # --- Rules ---

    def determine_input_type(self, column: ColumnInfo) -> InputType:
        by_name = _match_name_rules(column.name, INPUT_NAME_RULES)
        if by_name is not None:
            return by_name
        return INPUT_TYPE_MAP.get(column.column_type, InputType.TEXT)

    def determine_display_type(self, column: ColumnInfo) -> DisplayType:
        by_name = _match_name_rules(column.name, DISPLAY_NAME_RULES)
        if by_name is not None:
            return by_name
        return DISPLAY_TYPE_MAP.get(column.column_type, DisplayType.TEXT)

    @staticmethod
    def is_required(column: ColumnInfo) -> bool:
        """Required when the column is NOT NULL and has no default to fall back on."""
        return not column.nullable and not column.has_default

    @staticmethod
    def is_sortable(column: ColumnInfo) -> bool:
        return column.column_type not in UNSORTABLE_TYPES

    @staticmethod
    def is_filterable(column: ColumnInfo) -> bool:
        if _name_contains(column.name, *FILTERABLE_NAME_PARTS):
            return True
        return column.column_type in FILTERABLE_TYPES

    def generate_validation_rules(self, column: ColumnInfo) -> List[str]:
        """
        Laravel validation rules for a column.

        Order: `required`, then the type rules, then the name based rules.
        """
        rules: List[str] = []

        if self.is_required(column):
            rules.append("required")

        column_type = column.column_type
        if column_type is ColumnType.STRING:
            rules.extend(["string", "max:255"])
        elif column_type in INTEGER_TYPES:
            rules.append("integer")
        elif column_type in DECIMAL_TYPES:
            rules.append("numeric")
        elif column_type is ColumnType.BOOLEAN:
            rules.append("boolean")
        elif column_type in DATE_TYPES:
            rules.append("date")

        if _name_contains(column.name, "email"):
            rules.append("email")
        if _name_contains(column.name, "url", "website"):
            rules.append("url")

        return rules

    @staticmethod
    def _validate_column(column: ColumnInfo) -> None:
        """Reject columns the rules cannot label."""
        if not isinstance(column, ColumnInfo):
            raise InvalidColumnError(
                f"Expected ColumnInfo, got {type(column).__name__}", column=repr(column)
            )
        if not column.name or not column.name.strip():
            raise InvalidColumnError("Column name is required", column=column.to_dict())


_DEFAULT_CLASSIFIER = FieldClassifier()


def classify_for_form(column: ColumnInfo) -> Optional[FormField]:
    """Form field descriptor for `column`, or None when the column is excluded."""
    return _DEFAULT_CLASSIFIER.classify_for_form(column)


def classify_for_table(column: ColumnInfo) -> Optional[TableField]:
    """Table field descriptor for `column`, or None when the column is hidden."""
    return _DEFAULT_CLASSIFIER.classify_for_table(column)


def analyze_for_forms(columns: Sequence[ColumnInfo]) -> List[FormField]:
    return _DEFAULT_CLASSIFIER.analyze_for_forms(columns)


def analyze_for_tables(columns: Sequence[ColumnInfo]) -> List[TableField]:
    return _DEFAULT_CLASSIFIER.analyze_for_tables(columns)

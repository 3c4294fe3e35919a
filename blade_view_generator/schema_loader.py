"""
YAML schema snapshots.

A schema file lets views be generated without a database connection::

    tables:
      users:
        columns:
          - {name: id, type: bigInteger, nullable: false}
          - {name: email, type: string, nullable: false}
          - {name: bio, type: text}
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from blade_view_generator.domain.analysis import analyze_table
from blade_view_generator.domain.models import ColumnInfo, TableInfo
from blade_view_generator.exceptions import InvalidColumnError, SchemaIntrospectionError
from blade_view_generator.introspection_django import filter_tables, unknown_table_error

logger = logging.getLogger(__name__)


class SchemaFile:
    """Tables read from a YAML schema snapshot, in file order."""

    def __init__(self, tables: Dict[str, List[ColumnInfo]], source: Optional[str] = None):
        self._tables = tables
        self.source = source

    @classmethod
    def load(cls, path) -> "SchemaFile":
        schema_path = Path(path)
        if not schema_path.is_file():
            raise SchemaIntrospectionError(
                f"Schema file not found: {schema_path}",
                context={'schema_file': str(schema_path)},
                suggestions=["Check the 'schema_file' setting or the --schema-file option"],
            )
        try:
            with open(schema_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SchemaIntrospectionError(
                f"Error parsing schema file {schema_path}: {e}",
                context={'schema_file': str(schema_path)},
            ) from e

        logger.debug(f"Loaded schema snapshot from {schema_path}")
        return cls.from_dict(data, source=str(schema_path))

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "SchemaFile":
        if not isinstance(data, dict) or not isinstance(data.get('tables'), dict):
            raise SchemaIntrospectionError(
                "Schema file must contain a 'tables' mapping.",
                context={'schema_file': source} if source else None,
            )

        tables: Dict[str, List[ColumnInfo]] = {}
        for table_name, table_data in data['tables'].items():
            raw_columns = (table_data or {}).get('columns') or []
            if not isinstance(raw_columns, list):
                raise SchemaIntrospectionError(
                    f"Columns of table '{table_name}' must be a list.", table=str(table_name)
                )
            tables[str(table_name)] = [
                _parse_column(table_name, index, raw) for index, raw in enumerate(raw_columns)
            ]
        return cls(tables, source=source)

    @property
    def table_names(self) -> List[str]:
        return list(self._tables)

    def list_tables(
        self,
        include_tables: Optional[List[str]] = None,
        exclude_tables: Optional[List[str]] = None,
    ) -> List[str]:
        return filter_tables(self.table_names, include_tables, exclude_tables)

    def introspect_table(self, table_name: str) -> TableInfo:
        if table_name not in self._tables:
            raise unknown_table_error(table_name, self.table_names)
        return analyze_table(table_name, self._tables[table_name])


def _parse_column(table_name: str, index: int, raw: Any) -> ColumnInfo:
    if isinstance(raw, str):
        raw = {'name': raw}
    if not isinstance(raw, dict):
        raise InvalidColumnError(
            f"Column {index} of table '{table_name}' must be a mapping.",
            column=raw,
        )
    name = raw.get('name')
    if not isinstance(name, str) or not name.strip():
        raise InvalidColumnError(
            f"Column {index} of table '{table_name}' has no name.",
            column=raw,
        )
    return ColumnInfo(
        name=name,
        declared_type=str(raw.get('type') or "string"),
        nullable=bool(raw.get('nullable', True)),
        default=raw.get('default'),
    )

import difflib
import logging
from typing import Any, Dict, Iterable, List, Optional

import django
from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, connections

from blade_view_generator.constants import DJANGO_FIELD_TYPE_MAP, TableNames
from blade_view_generator.domain.analysis import analyze_table
from blade_view_generator.domain.models import ColumnInfo, TableInfo
from blade_view_generator.exceptions import SchemaIntrospectionError

logger = logging.getLogger(__name__)

# --- Django Setup Helper ---
_django_setup_done = False


def setup_django(db_settings: Dict[str, Any], secret_key: str):
    """Configures minimal Django settings and runs django.setup()."""
    global _django_setup_done
    if _django_setup_done or settings.configured:
        logger.debug("Django setup already performed.")
        _django_setup_done = True
        return

    logger.info("Configuring Django settings for introspection...")
    plain_db_settings: Dict[str, Dict[str, Any]] = {}
    for alias, db_model in db_settings.items():
        if hasattr(db_model, 'model_dump') and callable(db_model.model_dump):
            plain_db_settings[alias] = db_model.model_dump(exclude_none=True)
        elif isinstance(db_model, dict):
            plain_db_settings[alias] = db_model
        else:
            logger.error(f"Unexpected type for database settings '{alias}': {type(db_model)}. Expected Pydantic model or dict.")
            raise TypeError(f"Invalid database settings type for alias '{alias}'.")
    logger.debug(f"Using database aliases: {sorted(plain_db_settings)}")

    settings.configure(
        SECRET_KEY=secret_key,
        DATABASES=plain_db_settings,
        TIME_ZONE='UTC',
        USE_TZ=True,
        DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
    )
    django.setup()
    _django_setup_done = True
    logger.info("Django setup complete.")


def _require_setup():
    if not (_django_setup_done or settings.configured):
        raise SchemaIntrospectionError(
            "Django has not been set up. Call setup_django() first.",
            suggestions=["Configure 'databases' in the config file, or use --schema-file"],
        )


def is_system_table(table_name: str) -> bool:
    """Framework bookkeeping tables never get views."""
    return (
        table_name in TableNames.SYSTEM_TABLES
        or table_name.startswith(TableNames.SYSTEM_PREFIXES)
    )


def filter_tables(
    table_names: Iterable[str],
    include_tables: Optional[List[str]] = None,
    exclude_tables: Optional[List[str]] = None,
) -> List[str]:
    """Apply the system table filter and the include/exclude lists, keeping order."""
    include_set = set(include_tables) if include_tables else None
    exclude_set = set(exclude_tables) if exclude_tables else set()

    selected = []
    for table_name in table_names:
        if is_system_table(table_name):
            logger.debug(f"Skipping system table '{table_name}'.")
            continue
        if table_name in exclude_set:
            logger.info(f"Excluding table: {table_name}")
            continue
        if include_set is not None and table_name not in include_set:
            logger.debug(f"Skipping table '{table_name}' (not in include list).")
            continue
        selected.append(table_name)
    return selected


def unknown_table_error(table_name: str, known_tables: Iterable[str]) -> SchemaIntrospectionError:
    """Build the error raised for a missing table, with close name matches."""
    similar = difflib.get_close_matches(table_name, list(known_tables), n=5, cutoff=0.6)
    suggestions = [f"Did you mean '{name}'?" for name in similar]
    suggestions.append("Run the 'all' command to list the available tables")
    return SchemaIntrospectionError(
        f"Table '{table_name}' does not exist.",
        table=table_name,
        suggestions=suggestions,
    )


def list_tables(
    db_alias: str = DEFAULT_DB_ALIAS,
    include_tables: Optional[List[str]] = None,
    exclude_tables: Optional[List[str]] = None,
) -> List[str]:
    """Names of the user tables in the database (views are skipped)."""
    _require_setup()
    conn = connections[db_alias]
    with conn.cursor() as cursor:
        all_db_items = conn.introspection.get_table_list(cursor)
    logger.debug(f"Found {len(all_db_items)} database items (tables/views).")

    table_names = []
    for item in all_db_items:
        table_name = getattr(item, 'name', None)
        item_type = getattr(item, 'type', 't')
        if not table_name:
            continue
        if item_type != 't':
            logger.debug(f"Skipping item '{table_name}' (type: {item_type}).")
            continue
        table_names.append(table_name)

    return filter_tables(sorted(table_names), include_tables, exclude_tables)


def _column_type_for(introspector, description) -> str:
    """Canonical column type name for a Django column description."""
    try:
        field_type = introspector.get_field_type(description.type_code, description)
    except KeyError:
        logger.debug(f"No Django field type for column '{description.name}' ({description.type_code}).")
        return "string"
    if isinstance(field_type, tuple):
        field_type = field_type[0]
    return DJANGO_FIELD_TYPE_MAP.get(field_type, "string")


def introspect_table(table_name: str, db_alias: str = DEFAULT_DB_ALIAS) -> TableInfo:
    """Read one table's column descriptors from the database."""
    _require_setup()
    conn = connections[db_alias]
    introspector = conn.introspection

    logger.info(f"Reading schema for table: {table_name}")
    with conn.cursor() as cursor:
        known_tables = introspector.table_names(cursor)
        if table_name not in known_tables:
            raise unknown_table_error(
                table_name, [name for name in known_tables if not is_system_table(name)]
            )
        try:
            table_description = introspector.get_table_description(cursor, table_name)
        except Exception as e:
            raise SchemaIntrospectionError(
                f"Could not get description for table '{table_name}': {e}",
                table=table_name,
            ) from e

        columns = []
        for description in table_description:
            # Defaults are backend specific in Django's introspection output
            columns.append(ColumnInfo(
                name=description.name,
                declared_type=_column_type_for(introspector, description),
                nullable=bool(description.null_ok),
                default=None,
            ))

    logger.debug(f"Table '{table_name}' has columns: {[c.name for c in columns]}")
    return analyze_table(table_name, columns)


class DatabaseSchema:
    """Table source backed by a configured Django database connection."""

    def __init__(self, db_alias: str = DEFAULT_DB_ALIAS):
        self.db_alias = db_alias

    def list_tables(
        self,
        include_tables: Optional[List[str]] = None,
        exclude_tables: Optional[List[str]] = None,
    ) -> List[str]:
        return list_tables(self.db_alias, include_tables, exclude_tables)

    def introspect_table(self, table_name: str) -> TableInfo:
        return introspect_table(table_name, self.db_alias)

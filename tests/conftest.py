# File: tests/conftest.py
# Shared fixtures: sample column sets, schema snapshot files and an
# in-memory SQLite database for the Django introspection tests.

from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml

from blade_view_generator.domain.models import ColumnInfo


def make_columns(specs: List[Dict[str, Any]]) -> List[ColumnInfo]:
    return [ColumnInfo(**spec) for spec in specs]


POSTS_COLUMNS = [
    {"name": "id", "declared_type": "bigInteger", "nullable": False},
    {"name": "title", "declared_type": "string", "nullable": False},
    {"name": "slug", "declared_type": "string", "nullable": False},
    {"name": "content", "declared_type": "longtext", "nullable": False},
    {"name": "status", "declared_type": "enum", "nullable": False, "default": "draft"},
    {"name": "is_active", "declared_type": "boolean", "nullable": False, "default": True},
    {"name": "price", "declared_type": "decimal", "nullable": True},
    {"name": "published_at", "declared_type": "timestamp", "nullable": True},
    {"name": "category_id", "declared_type": "bigInteger", "nullable": False},
    {"name": "author_id", "declared_type": "bigInteger", "nullable": False},
    {"name": "created_at", "declared_type": "timestamp", "nullable": True},
    {"name": "updated_at", "declared_type": "timestamp", "nullable": True},
    {"name": "deleted_at", "declared_type": "timestamp", "nullable": True},
]

USERS_COLUMNS = [
    {"name": "id", "declared_type": "bigInteger", "nullable": False},
    {"name": "name", "declared_type": "string", "nullable": False},
    {"name": "email", "declared_type": "string", "nullable": False},
    {"name": "email_verified_at", "declared_type": "timestamp", "nullable": True},
    {"name": "password", "declared_type": "string", "nullable": False},
    {"name": "remember_token", "declared_type": "string", "nullable": True},
    {"name": "website", "declared_type": "string", "nullable": True},
    {"name": "avatar", "declared_type": "string", "nullable": True},
    {"name": "created_at", "declared_type": "timestamp", "nullable": True},
    {"name": "updated_at", "declared_type": "timestamp", "nullable": True},
]


def _schema_entry(specs: List[Dict[str, Any]]) -> Dict[str, Any]:
    columns = []
    for spec in specs:
        column = {"name": spec["name"], "type": spec["declared_type"], "nullable": spec["nullable"]}
        if spec.get("default") is not None:
            column["default"] = spec["default"]
        columns.append(column)
    return {"columns": columns}


@pytest.fixture
def posts_columns() -> List[ColumnInfo]:
    return make_columns(POSTS_COLUMNS)


@pytest.fixture
def users_columns() -> List[ColumnInfo]:
    return make_columns(USERS_COLUMNS)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """A schema snapshot with application and framework tables."""
    schema = {
        "tables": {
            "posts": _schema_entry(POSTS_COLUMNS),
            "users": _schema_entry(USERS_COLUMNS),
            "migrations": {"columns": [{"name": "id", "type": "integer"}, {"name": "migration"}]},
            "audit_logs": {"columns": [
                {"name": "id", "type": "integer", "nullable": False},
                {"name": "password", "type": "string"},
            ]},
        }
    }
    path = tmp_path / "schema.yaml"
    path.write_text(yaml.safe_dump(schema, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def resources_dir(tmp_path: Path) -> Path:
    path = tmp_path / "resources"
    path.mkdir()
    return path


@pytest.fixture(scope="session")
def sqlite_database():
    """
    Configures Django against an in-memory SQLite database holding a few
    Laravel style tables. Yields the list of created table names.
    """
    from django.db import connection

    from blade_view_generator.introspection_django import setup_django

    setup_django(
        {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}},
        secret_key="tests-only-secret",
    )
    statements = [
        """CREATE TABLE categories (
            id integer NOT NULL PRIMARY KEY AUTOINCREMENT,
            name varchar(255) NOT NULL,
            created_at datetime NULL,
            updated_at datetime NULL
        )""",
        """CREATE TABLE articles (
            id integer NOT NULL PRIMARY KEY AUTOINCREMENT,
            title varchar(255) NOT NULL,
            body text NOT NULL,
            is_published bool NOT NULL,
            rating decimal(8, 2) NULL,
            published_on date NULL,
            category_id integer NOT NULL REFERENCES categories (id),
            created_at datetime NULL,
            updated_at datetime NULL
        )""",
        """CREATE TABLE migrations (
            id integer NOT NULL PRIMARY KEY AUTOINCREMENT,
            migration varchar(255) NOT NULL
        )""",
        "CREATE VIEW published_articles AS SELECT * FROM articles WHERE is_published = 1",
    ]
    with connection.cursor() as cursor:
        for statement in statements:
            cursor.execute(statement)
    yield ["articles", "categories", "migrations"]

"""
Naming convention utilities for Blade View Generator.

This module converts between the naming conventions used in database
schemas (snake_case, plural table names), Laravel models (StudlyCase,
singular) and view directories (kebab-case, plural).
"""

import re
import inflect


# Initialize inflect engine for pluralization
p = inflect.engine()

_WORD_SEPARATORS = re.compile(r"[_\-\s]+")

# inflect strips the final "s" of these singular endings (address -> addres)
_SINGULAR_ENDINGS = ("ss", "us", "is")


def _split_last_word(name: str):
    """Split `name` into everything up to its last underscore segment and that segment."""
    head, sep, last = name.rpartition("_")
    return head + sep, last


def _singular_of(word: str):
    """
    The singular of `word` if it is a plural noun, otherwise None.

    A singular guessed by inflect is only trusted when pluralizing it gives
    `word` back.
    """
    if word.lower().endswith(_SINGULAR_ENDINGS):
        return None
    singular = p.singular_noun(word)
    if not singular or p.plural_noun(singular) != word:
        return None
    return singular


def pluralize(name: str) -> str:
    """
    Pluralize the last word of a snake_case name.

    Names whose last word inflect already recognises as plural are returned
    unchanged, so pluralizing a table name is idempotent.

    Example:
        >>> pluralize("parent_category")
        'parent_categories'
        >>> pluralize("posts")
        'posts'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    head, last = _split_last_word(name)
    if not last:
        return name
    if _singular_of(last):
        return name
    return head + p.plural_noun(last)


def singularize(name: str) -> str:
    """
    Singularize the last word of a snake_case name.

    Example:
        >>> singularize("user_profiles")
        'user_profile'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    head, last = _split_last_word(name)
    if not last:
        return name
    return head + (_singular_of(last) or last)


def to_snake_case(name: str) -> str:
    """
    Convert CamelCase or PascalCase to snake_case.

    Example:
        >>> to_snake_case("BlogPost")
        'blog_post'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    name = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    name = re.sub("__([A-Z])", r"_\1", name)
    name = re.sub("([a-z0-9])([A-Z])", r"\1_\2", name)
    return name.lower()


def to_kebab_case(name: str) -> str:
    """
    Convert a snake_case or CamelCase name to kebab-case.

    Example:
        >>> to_kebab_case("blog_posts")
        'blog-posts'
    """
    words = [word for word in _WORD_SEPARATORS.split(to_snake_case(name)) if word]
    return "-".join(words)


def to_studly_case(name: str) -> str:
    """
    Convert a snake_case or kebab-case name to StudlyCase.

    Only the first letter of each word is changed.

    Example:
        >>> to_studly_case("parent_category")
        'ParentCategory'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SEPARATORS.split(name) if word)


def to_camel_case(name: str) -> str:
    """Convert a snake_case name to camelCase."""
    studly = to_studly_case(name)
    return studly[:1].lower() + studly[1:]


def generate_label(column_name: str) -> str:
    """
    Generate a human-readable label from a column name.

    Each `_` and `-` becomes a space, then every word gets an upper-case
    first letter.

    Example:
        >>> generate_label("user_profile_id")
        'User Profile Id'
    """
    spaced = re.sub(r"[_-]", " ", column_name)
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split(" "))


def generate_model_name(table_name: str) -> str:
    """
    Generate a model class name from a table name.

    Example:
        >>> generate_model_name("blog_posts")
        'BlogPost'
    """
    return to_studly_case(singularize(table_name))


def generate_view_directory(table_name: str) -> str:
    """
    Directory (relative to the views root) holding a table's views.

    Example:
        >>> generate_view_directory("blog_post")
        'blog-posts'
    """
    return to_kebab_case(pluralize(table_name))


def generate_model_variable(table_name: str) -> str:
    """Variable name a single record is bound to in views, e.g. `blogPost`."""
    return to_camel_case(singularize(table_name))


class NamingConventions:
    """
    Centralized naming convention utilities.

    This class provides consistent naming across the code base.
    """

    @staticmethod
    def table_to_model(table_name: str) -> str:
        """Convert table name to model class name."""
        return generate_model_name(table_name)

    @staticmethod
    def table_to_view_directory(table_name: str) -> str:
        """Convert table name to its views directory."""
        return generate_view_directory(table_name)

    @staticmethod
    def table_to_variable(table_name: str) -> str:
        """Convert table name to the singular record variable."""
        return generate_model_variable(table_name)

    @staticmethod
    def column_to_label(column_name: str) -> str:
        """Convert column name to a form/table label."""
        return generate_label(column_name)

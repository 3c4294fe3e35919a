"""
Custom exception hierarchy for Blade View Generator.

Every error carries a human-readable message, a context dictionary and a
list of suggestions so the CLI can tell users what to try next.
"""

from typing import Dict, Any, Optional, List


class ViewGeneratorError(Exception):
    """
    Base exception for all Blade View Generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(ViewGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Provide either 'databases' or 'schema_file'",
                "Check the README for configuration examples"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class SchemaIntrospectionError(ViewGeneratorError):
    """Raised when a table's schema cannot be read."""

    def __init__(self, message: str, table: str = None, **kwargs):
        context = kwargs.get('context', {})
        if table:
            context['table'] = table

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check database connection settings",
                "Verify the table exists in the database or schema file",
                "Review the include/exclude table filters"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INTROSPECTION_ERROR"
        )


class InvalidColumnError(ViewGeneratorError):
    """Raised when a column descriptor cannot be classified."""

    def __init__(self, message: str, column: Any = None, **kwargs):
        context = kwargs.get('context', {})
        if column is not None:
            context['column'] = column

        suggestions = kwargs.get('suggestions', [
            "Make sure every column in the schema has a non-empty name",
        ])

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INVALID_COLUMN"
        )


class ManifestPlanningError(ViewGeneratorError):
    """Raised when a manifest is requested for an unknown category or component type."""

    def __init__(self, message: str, category: str = None, **kwargs):
        context = kwargs.get('context', {})
        if category:
            context['category'] = category

        suggestions = kwargs.get('suggestions', [])

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="MANIFEST_ERROR"
        )


class FileGenerationError(ViewGeneratorError):
    """Raised when a stub cannot be rendered or a view file cannot be written."""

    def __init__(self, message: str, path: str = None, stub: str = None, **kwargs):
        context = kwargs.get('context', {})
        if path:
            context['path'] = path
        if stub:
            context['stub'] = stub

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the views directory is writable",
                "Check custom stubs for template syntax errors",
                "Run again with --dry-run to inspect the planned files"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="FILE_GENERATION_ERROR"
        )

"""
Manifest planning domain logic for Blade View Generator.

The planner decides which view files a generation run produces. It works
on names and flags only; it never looks at the filesystem, so the same
`(table, categories, flags)` always yields the same ordered manifest and
a dry run previews exactly what a real run writes.
"""

from collections import OrderedDict
from functools import partial
from typing import Dict, Iterable, List, Optional, Union

from ..constants import ViewPaths
from ..exceptions import ManifestPlanningError
from .models import FeatureFlags, InputType, ManifestEntry, ViewCategory
from .naming import generate_view_directory


CategoryLike = Union[str, ViewCategory]
InputLike = Union[str, InputType]

TABLE_SCOPED = frozenset({ViewCategory.CRUD, ViewCategory.FORMS, ViewCategory.TABLES})


def _view_path(*parts: str) -> str:
    return "/".join((ViewPaths.VIEWS_PREFIX,) + parts) + ViewPaths.BLADE_SUFFIX


class _ManifestBuilder:
    """Collects entries in order, dropping paths that were already planned."""

    def __init__(self):
        self.entries: List[ManifestEntry] = []
        self._seen = set()

    def add(self, category: str, stub_group: str, root: str, names: Iterable[str]):
        for name in names:
            path = _view_path(root, name) if root else _view_path(name)
            if path in self._seen:
                continue
            self._seen.add(path)
            stub_name = f"{stub_group}/{name}" if stub_group else name
            stub = f"{stub_name}{ViewPaths.BLADE_SUFFIX}.j2"
            self.entries.append(ManifestEntry(category=category, relative_path=path, stub=stub))


def normalize_categories(categories: Iterable[CategoryLike]) -> List[ViewCategory]:
    """
    Validate requested categories and return them in emission order.

    Raises:
        ManifestPlanningError: If a category is unknown
    """
    requested = set()
    for category in categories:
        if isinstance(category, ViewCategory):
            requested.add(category)
            continue
        try:
            requested.add(ViewCategory(str(category).strip().lower()))
        except ValueError:
            raise ManifestPlanningError(
                f"Unknown view category '{category}'",
                category=str(category),
                suggestions=[f"Use one of: {', '.join(c.value for c in ViewCategory)}"],
            ) from None
    return [category for category in ViewCategory if category in requested]


def _input_values(input_types: Optional[Iterable[InputLike]]) -> frozenset:
    return frozenset(
        kind.value if isinstance(kind, InputType) else str(kind) for kind in (input_types or ())
    )


class ManifestPlanner:
    """Plans the files generated for a table."""

    def plan(
        self,
        table_name: Optional[str],
        categories: Iterable[CategoryLike],
        flags: Optional[FeatureFlags] = None,
        input_types: Optional[Iterable[InputLike]] = None,
    ) -> List[ManifestEntry]:
        """
        Plan the ordered manifest for a table.

        Args:
            table_name: Database table name; may be empty when only components
                and layouts are requested
            categories: Requested view categories (order does not matter)
            flags: Feature switches; defaults when omitted
            input_types: Input kinds of the table's form fields; the date picker
                and file upload field components are only planned when a
                field of that kind exists

        Returns:
            Manifest entries, grouped by category in a fixed order

        Raises:
            ManifestPlanningError: On unknown categories or component types, or
                when a table specific category is requested without a table
        """
        flags = flags or FeatureFlags()
        ordered = normalize_categories(categories)

        if not table_name and any(category in TABLE_SCOPED for category in ordered):
            raise ManifestPlanningError(
                "A table name is required to plan CRUD, form or table views",
                suggestions=["Pass the table name, or request only components/layouts"],
            )

        view_dir = generate_view_directory(table_name) if table_name else ""
        builder = _ManifestBuilder()

        planners = {
            ViewCategory.CRUD: self._plan_crud,
            ViewCategory.FORMS: partial(self._plan_forms, input_types=_input_values(input_types)),
            ViewCategory.TABLES: self._plan_tables,
            ViewCategory.COMPONENTS: self._plan_components,
            ViewCategory.LAYOUTS: self._plan_layouts,
        }
        for category in ordered:
            planners[category](builder, view_dir, flags)

        return builder.entries

    def _plan_crud(self, builder: _ManifestBuilder, view_dir: str, flags: FeatureFlags):
        builder.add("CRUD Views", "crud", view_dir, ["index", "show", "create", "edit"])
        if flags.ajax:
            builder.add("CRUD Partials", "crud", view_dir, ["partials/delete-modal"])

    def _plan_forms(self, builder: _ManifestBuilder, view_dir: str, flags: FeatureFlags, input_types=frozenset()):
        if flags.separate_forms:
            builder.add("Form Views", "forms", view_dir, ["forms/create", "forms/edit"])
        else:
            builder.add("Form Views", "forms", view_dir, ["partials/form"])

        if flags.validation_style in ("summary", "both"):
            builder.add("Validation Views", "forms", view_dir, ["partials/validation-summary"])

        if flags.ajax:
            builder.add("AJAX Views", "forms", view_dir, [
                "partials/form-ajax", "partials/loading-state",
            ])

        if flags.rich_text:
            builder.add("Rich Text", "forms", view_dir, ["partials/rich-text-editor"])

        if flags.file_upload:
            builder.add("File Upload", "forms", view_dir, [
                "partials/file-upload", "partials/file-preview",
            ])

        if flags.use_components:
            builder.add("Form Components", "forms", flags.component_namespace, [
                "form-field", "form-group", "form-actions",
            ])

        if flags.file_upload and InputType.FILE.value in input_types:
            builder.add("Field Components", "forms", flags.component_namespace, ["file-upload-field"])

        if flags.date_picker and InputType.DATE.value in input_types:
            builder.add("Field Components", "forms", flags.component_namespace, ["date-picker-field"])

    def _plan_tables(self, builder: _ManifestBuilder, view_dir: str, flags: FeatureFlags):
        if flags.component:
            builder.add("Table Component", "tables", flags.component_namespace, [
                "data-table", "table-header", "table-row",
            ])
        else:
            builder.add("Table Views", "tables", view_dir, [
                "table", "partials/table-header", "partials/table-body",
            ])

        if flags.search or flags.filtering:
            builder.add("Search & Filter", "tables", view_dir, [
                "partials/search-bar", "partials/filters", "partials/filter-dropdown",
            ])

        if flags.sorting:
            builder.add("Sorting Components", "tables", view_dir, [
                "partials/sortable-header", "partials/sort-indicator",
            ])

        builder.add("Pagination", "tables", view_dir, [
            "partials/pagination", "partials/pagination-info",
        ])

        if flags.export:
            builder.add("Export Views", "tables", view_dir, [
                "export/buttons", "export/modal", "export/csv-template", "export/pdf-template",
            ])

        if flags.bulk_actions:
            builder.add("Bulk Actions", "tables", view_dir, [
                "partials/bulk-actions", "partials/bulk-select", "partials/bulk-toolbar",
            ])

        if flags.ajax:
            builder.add("AJAX Components", "tables", view_dir, [
                "partials/table-ajax", "partials/loading-skeleton", "partials/no-results",
            ])

        if flags.responsive:
            builder.add("Responsive Components", "tables", view_dir, [
                "partials/mobile-card", "partials/responsive-table",
            ])

    def _plan_components(self, builder: _ManifestBuilder, view_dir: str, flags: FeatureFlags):
        unknown = [t for t in flags.component_types if t not in ViewPaths.COMPONENT_FILES]
        if unknown:
            raise ManifestPlanningError(
                f"Unknown component type(s): {', '.join(unknown)}",
                category=ViewCategory.COMPONENTS.value,
                suggestions=[f"Use any of: {', '.join(ViewPaths.COMPONENT_TYPES)}"],
            )

        requested = set(flags.component_types)
        for component_type in ViewPaths.COMPONENT_TYPES:
            if component_type not in requested:
                continue
            label, sub_dir, names = ViewPaths.COMPONENT_FILES[component_type]
            builder.add(
                label, "components", flags.component_namespace,
                [f"{sub_dir}/{name}" for name in names],
            )

    def _plan_layouts(self, builder: _ManifestBuilder, view_dir: str, flags: FeatureFlags):
        namespace = flags.component_namespace

        builder.add("App Layouts", "", "", ["layouts/app", "layouts/guest"])
        builder.add("Admin Layouts", "", "", ["layouts/admin", "layouts/dashboard"])

        if flags.auth:
            builder.add("Auth Layouts", "", "", [
                "layouts/auth", "auth/login", "auth/register",
                "auth/forgot-password", "auth/reset-password",
            ])

        if flags.errors:
            builder.add("Error Pages", "", "", [
                "errors/404", "errors/500", "errors/403", "errors/419", "errors/503",
            ])

        if flags.email:
            builder.add("Email Layouts", "", "", ["layouts/email", "emails/base"])

        if flags.navigation:
            builder.add("Navigation", "components", namespace, [
                "navigation/header", "navigation/main-nav", "navigation/user-menu",
            ])

        if flags.sidebar:
            builder.add("Sidebar", "components", namespace, [
                "navigation/sidebar", "navigation/sidebar-menu", "navigation/sidebar-item",
            ])

        if flags.breadcrumbs:
            builder.add("Breadcrumbs", "components", namespace, [
                "navigation/breadcrumbs", "navigation/breadcrumb-item",
            ])

        if flags.footer:
            builder.add("Footer", "components", namespace, ["layout/footer"])


def plan_manifest(
    table_name: Optional[str],
    categories: Iterable[CategoryLike],
    flags: Optional[FeatureFlags] = None,
    input_types: Optional[Iterable[InputLike]] = None,
) -> List[ManifestEntry]:
    """Plan the ordered manifest for `table_name`; see `ManifestPlanner.plan`."""
    return ManifestPlanner().plan(table_name, categories, flags, input_types)


def group_by_category(entries: Iterable[ManifestEntry]) -> Dict[str, List[str]]:
    """Relative paths per category label, preserving manifest order."""
    grouped: Dict[str, List[str]] = OrderedDict()
    for entry in entries:
        grouped.setdefault(entry.category, []).append(entry.relative_path)
    return grouped

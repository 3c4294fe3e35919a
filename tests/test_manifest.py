"""
Tests for manifest planning.
"""

from unittest import TestCase

import pytest

from blade_view_generator.domain.manifest import (
    ManifestPlanner,
    group_by_category,
    normalize_categories,
    plan_manifest,
)
from blade_view_generator.domain.models import FeatureFlags, InputType, ViewCategory
from blade_view_generator.exceptions import ManifestPlanningError


def paths(entries):
    return [entry.relative_path for entry in entries]


class TestCrudManifest(TestCase):
    """Test cases for the crud category"""

    def test_crud_without_ajax(self):
        assert paths(plan_manifest("posts", {"crud"})) == [
            "views/posts/index.blade.php",
            "views/posts/show.blade.php",
            "views/posts/create.blade.php",
            "views/posts/edit.blade.php",
        ]

    def test_crud_with_ajax_is_deterministic(self):
        flags = FeatureFlags(ajax=True)
        expected = [
            "views/posts/index.blade.php",
            "views/posts/show.blade.php",
            "views/posts/create.blade.php",
            "views/posts/edit.blade.php",
            "views/posts/partials/delete-modal.blade.php",
        ]
        for _ in range(3):
            assert paths(plan_manifest("posts", {"crud"}, flags)) == expected

    def test_view_directory_is_kebab_plural(self):
        entries = plan_manifest("blog_post", ["crud"])
        assert entries[0].relative_path == "views/blog-posts/index.blade.php"

    def test_stub_names(self):
        entries = plan_manifest("posts", ["crud"], FeatureFlags(ajax=True))
        assert entries[0].stub == "crud/index.blade.php.j2"
        assert entries[-1].stub == "crud/partials/delete-modal.blade.php.j2"
        assert entries[-1].category == "CRUD Partials"


class TestFormsManifest(TestCase):
    """Test cases for the forms category"""

    def test_separate_forms(self):
        assert paths(plan_manifest("posts", ["forms"])) == [
            "views/posts/forms/create.blade.php",
            "views/posts/forms/edit.blade.php",
        ]

    def test_single_form(self):
        assert paths(plan_manifest("posts", ["forms"], FeatureFlags(separate_forms=False))) == [
            "views/posts/partials/form.blade.php",
        ]

    def test_optional_form_files(self):
        flags = FeatureFlags(
            validation_style="both", ajax=True, rich_text=True, file_upload=True,
            use_components=True, component_namespace="ui",
        )
        result = paths(plan_manifest("posts", ["forms"], flags))
        assert "views/posts/partials/validation-summary.blade.php" in result
        assert "views/posts/partials/form-ajax.blade.php" in result
        assert "views/posts/partials/rich-text-editor.blade.php" in result
        assert "views/posts/partials/file-preview.blade.php" in result
        assert result[-3:] == [
            "views/ui/form-field.blade.php",
            "views/ui/form-group.blade.php",
            "views/ui/form-actions.blade.php",
        ]

    def test_field_components_follow_input_types(self):
        flags = FeatureFlags(date_picker=True, file_upload=True, component_namespace="ui")
        result = paths(plan_manifest("posts", ["forms"], flags, [InputType.DATE, InputType.FILE]))
        assert result[-2:] == [
            "views/ui/file-upload-field.blade.php",
            "views/ui/date-picker-field.blade.php",
        ]

        only_dates = paths(plan_manifest("posts", ["forms"], flags, ["date", "text"]))
        assert "views/ui/date-picker-field.blade.php" in only_dates
        assert "views/ui/file-upload-field.blade.php" not in only_dates

    def test_field_components_need_their_switch(self):
        result = paths(plan_manifest("posts", ["forms"], FeatureFlags(), ["date", "file"]))
        assert not any(path.endswith("-field.blade.php") for path in result)

    def test_field_components_need_matching_fields(self):
        flags = FeatureFlags(date_picker=True, file_upload=True)
        assert paths(plan_manifest("posts", ["forms"], flags)) == paths(
            plan_manifest("posts", ["forms"], flags, ["text", "datetime-local"])
        )
        assert not any("date-picker-field" in path for path in paths(plan_manifest("posts", ["forms"], flags)))

    def test_inline_validation_has_no_summary(self):
        result = paths(plan_manifest("posts", ["forms"], FeatureFlags(validation_style="inline")))
        assert not any("validation-summary" in path for path in result)


class TestTablesManifest(TestCase):
    """Test cases for the tables category"""

    def test_defaults(self):
        assert paths(plan_manifest("posts", ["tables"])) == [
            "views/posts/table.blade.php",
            "views/posts/partials/table-header.blade.php",
            "views/posts/partials/table-body.blade.php",
            "views/posts/partials/pagination.blade.php",
            "views/posts/partials/pagination-info.blade.php",
        ]

    def test_search_or_filtering_adds_search_files(self):
        for flags in (FeatureFlags(search=True), FeatureFlags(filtering=True)):
            result = paths(plan_manifest("posts", ["tables"], flags))
            assert "views/posts/partials/search-bar.blade.php" in result
            assert "views/posts/partials/filter-dropdown.blade.php" in result

    def test_every_flag(self):
        flags = FeatureFlags(
            search=True, filtering=True, sorting=True, export=True,
            bulk_actions=True, ajax=True, responsive=True,
        )
        grouped = group_by_category(plan_manifest("posts", ["tables"], flags))
        assert list(grouped) == [
            "Table Views", "Search & Filter", "Sorting Components", "Pagination",
            "Export Views", "Bulk Actions", "AJAX Components", "Responsive Components",
        ]
        assert len(grouped["Export Views"]) == 4

    def test_component_mode(self):
        result = paths(plan_manifest("posts", ["tables"], FeatureFlags(component=True)))
        assert result[:3] == [
            "views/components/data-table.blade.php",
            "views/components/table-header.blade.php",
            "views/components/table-row.blade.php",
        ]


class TestComponentsManifest(TestCase):
    """Test cases for the components category"""

    def test_all_components_without_table(self):
        grouped = group_by_category(plan_manifest(None, ["components"]))
        assert list(grouped) == [
            "Form Components", "Table Components", "Modal Components",
            "Search Components", "Alert Components", "Pagination Components",
        ]
        assert grouped["Modal Components"][0] == "views/components/modal/base.blade.php"

    def test_selected_types_keep_fixed_order(self):
        flags = FeatureFlags(component_types=("alerts", "modals"))
        grouped = group_by_category(plan_manifest(None, ["components"], flags))
        assert list(grouped) == ["Modal Components", "Alert Components"]

    def test_unknown_type(self):
        with pytest.raises(ManifestPlanningError):
            plan_manifest(None, ["components"], FeatureFlags(component_types=("widgets",)))


class TestLayoutsManifest(TestCase):
    """Test cases for the layouts category"""

    def test_defaults(self):
        assert paths(plan_manifest(None, ["layouts"])) == [
            "views/layouts/app.blade.php",
            "views/layouts/guest.blade.php",
            "views/layouts/admin.blade.php",
            "views/layouts/dashboard.blade.php",
        ]

    def test_auth(self):
        result = paths(plan_manifest(None, ["layouts"], FeatureFlags(auth=True)))
        assert "views/layouts/auth.blade.php" in result
        assert "views/auth/login.blade.php" in result

    def test_navigation_components_use_namespace(self):
        flags = FeatureFlags(navigation=True, footer=True, component_namespace="partials/ui")
        result = paths(plan_manifest(None, ["layouts"], flags))
        assert "views/partials/ui/navigation/header.blade.php" in result
        assert result[-1] == "views/partials/ui/layout/footer.blade.php"


class TestPlanner(TestCase):
    """Test cases for category handling"""

    def test_categories_emitted_in_fixed_order(self):
        first = paths(plan_manifest("posts", ["layouts", "tables", "crud"]))
        second = paths(plan_manifest("posts", [ViewCategory.CRUD, "TABLES", "layouts"]))
        assert first == second
        assert first[0] == "views/posts/index.blade.php"
        assert first[-1] == "views/layouts/dashboard.blade.php"

    def test_duplicate_paths_are_dropped(self):
        result = paths(plan_manifest("posts", ["forms"], FeatureFlags(ajax=True)))
        assert len(result) == len(set(result))

    def test_unknown_category(self):
        with pytest.raises(ManifestPlanningError) as exc_info:
            normalize_categories(["crud", "emails"])
        assert exc_info.value.context["category"] == "emails"

    def test_table_required_for_table_categories(self):
        with pytest.raises(ManifestPlanningError):
            ManifestPlanner().plan("", ["crud"])

    def test_empty_request(self):
        assert plan_manifest("posts", []) == []

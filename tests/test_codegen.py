"""
Tests for stub rendering and file writing.
"""

from pathlib import Path

import pytest

from blade_view_generator.codegen import (
    find_existing_files,
    render_entry,
    resolve_stub,
    setup_jinja_env,
    summarize_results,
    write_manifest,
)
from blade_view_generator.domain.analysis import analyze_fields, analyze_table, build_template_context
from blade_view_generator.domain.manifest import plan_manifest
from blade_view_generator.domain.models import FeatureFlags, GenerationResult, ManifestEntry
from blade_view_generator.exceptions import FileGenerationError


@pytest.fixture
def posts_context(posts_columns):
    analysis = analyze_fields(analyze_table("posts", posts_columns))
    return build_template_context(analysis, FeatureFlags(sorting=True), "bootstrap", "layouts.app")


class TestJinjaEnvironment:
    """Stub lookup and rendering"""

    def test_blade_syntax_passes_through(self, posts_context):
        env = setup_jinja_env()
        entry = plan_manifest("posts", ["crud"])[0]
        content = render_entry(env, entry, posts_context)
        assert "@extends('layouts.app')" in content
        assert "@forelse ($posts as $post)" in content
        assert "{{ $post->title }}" in content
        assert "route('posts.create')" in content
        assert "[[" not in content

    def test_form_fields_are_rendered(self, posts_context):
        env = setup_jinja_env()
        entry = plan_manifest("posts", ["forms"])[0]
        content = render_entry(env, entry, posts_context)
        assert 'name="title"' in content
        assert '<textarea id="content"' in content
        assert 'type="checkbox" id="is_active"' in content
        assert 'name="password"' not in content
        assert "old('title')" in content

    def test_edit_form_prefills_values(self, posts_context):
        env = setup_jinja_env()
        entry = plan_manifest("posts", ["forms"])[1]
        content = render_entry(env, entry, posts_context)
        assert "old('title', $post->title)" in content
        assert "@method('PUT')" in content

    def test_framework_stub_wins(self, tmp_path: Path, posts_context):
        (tmp_path / "tailwind" / "crud").mkdir(parents=True)
        (tmp_path / "tailwind" / "crud" / "index.blade.php.j2").write_text("tw [[ model_name ]]", encoding="utf-8")
        (tmp_path / "crud").mkdir()
        (tmp_path / "crud" / "show.blade.php.j2").write_text("custom show", encoding="utf-8")
        env = setup_jinja_env(str(tmp_path))

        context = dict(posts_context, framework="tailwind")
        index, show = plan_manifest("posts", ["crud"])[:2]
        assert render_entry(env, index, context) == "tw Post"
        assert render_entry(env, show, context) == "custom show"
        assert resolve_stub(env, index.stub, "bootstrap").name == "crud/index.blade.php.j2"

    def test_fallback_partial_is_a_fragment(self, posts_context):
        env = setup_jinja_env()
        entry = ManifestEntry("Export Views", "views/posts/export/modal.blade.php", "tables/export/modal.blade.php.j2")
        content = render_entry(env, entry, posts_context)
        assert "views/posts/export/modal.blade.php" in content
        assert "@extends" not in content
        assert "@section" not in content
        assert "@props" not in content

    def test_fallback_page(self, posts_context):
        env = setup_jinja_env()
        entry = ManifestEntry("CRUD Views", "views/posts/archive.blade.php", "crud/archive.blade.php.j2")
        assert "@extends('layouts.app')" in render_entry(env, entry, posts_context)

    def test_fallback_component_with_table(self, posts_context):
        env = setup_jinja_env()
        flags = FeatureFlags(use_components=True)
        entry = [e for e in plan_manifest("posts", ["forms"], flags) if e.relative_path.endswith("form-field.blade.php")][0]
        content = render_entry(env, entry, posts_context)
        assert "@props([])" in content
        assert "@extends" not in content

    def test_field_component_stubs(self, posts_context):
        env = setup_jinja_env()
        flags = FeatureFlags(date_picker=True, file_upload=True)
        manifest = plan_manifest("posts", ["forms"], flags, ["date", "file"])
        by_path = {entry.relative_path: entry for entry in manifest}
        date_picker = render_entry(env, by_path["views/components/date-picker-field.blade.php"], posts_context)
        upload = render_entry(env, by_path["views/components/file-upload-field.blade.php"], posts_context)
        assert 'type="date"' in date_picker
        assert "@props(['name', 'label'" in date_picker
        assert 'type="file"' in upload

    def test_fallback_without_table(self):
        env = setup_jinja_env()
        entry = plan_manifest(None, ["components"], FeatureFlags(component_types=("alerts",)))[0]
        content = render_entry(env, entry, build_template_context(None, FeatureFlags(), "bootstrap", "layouts.app"))
        assert "{{ $attributes }}" in content

    def test_broken_user_stub(self, tmp_path: Path, posts_context):
        (tmp_path / "crud").mkdir()
        (tmp_path / "crud" / "index.blade.php.j2").write_text("[[ model_name.missing() ]]", encoding="utf-8")
        env = setup_jinja_env(str(tmp_path))
        with pytest.raises(FileGenerationError):
            render_entry(env, plan_manifest("posts", ["crud"])[0], posts_context)

    def test_filters(self):
        env = setup_jinja_env()
        template = env.from_string("[[ name | pluralize ]] [[ name | studly ]] [[ name | kebab ]]")
        assert template.render(name="blog_post") == "blog_posts BlogPost blog-post"


class TestWriteManifest:
    """Writing rendered files"""

    def test_creates_files(self, resources_dir: Path, posts_context):
        manifest = plan_manifest("posts", ["crud", "tables"])
        results = write_manifest(manifest, posts_context, resources_dir)
        assert all(r.status == GenerationResult.CREATED for r in results)
        assert (resources_dir / "views/posts/index.blade.php").is_file()
        assert (resources_dir / "views/posts/partials/pagination-info.blade.php").is_file()
        assert summarize_results(results)[GenerationResult.CREATED] == len(manifest)

    def test_dry_run_writes_nothing(self, resources_dir: Path, posts_context):
        manifest = plan_manifest("posts", ["crud"])
        results = write_manifest(manifest, posts_context, resources_dir, dry_run=True)
        assert [r.status for r in results] == [GenerationResult.PLANNED] * 4
        assert not (resources_dir / "views").exists()

    def test_existing_files_are_skipped(self, resources_dir: Path, posts_context):
        manifest = plan_manifest("posts", ["crud"])
        target = resources_dir / "views/posts/index.blade.php"
        target.parent.mkdir(parents=True)
        target.write_text("hand written", encoding="utf-8")

        assert find_existing_files(manifest, resources_dir) == ["views/posts/index.blade.php"]
        results = write_manifest(manifest, posts_context, resources_dir)
        assert results[0].status == GenerationResult.SKIPPED
        assert target.read_text(encoding="utf-8") == "hand written"

    def test_force_with_backup(self, resources_dir: Path, posts_context):
        manifest = plan_manifest("posts", ["crud"])
        target = resources_dir / "views/posts/index.blade.php"
        target.parent.mkdir(parents=True)
        target.write_text("hand written", encoding="utf-8")

        results = write_manifest(manifest, posts_context, resources_dir, force=True, backup=True)
        assert results[0].status == GenerationResult.OVERWRITTEN
        assert Path(results[0].backup_path).read_text(encoding="utf-8") == "hand written"
        assert results[0].backup_path.endswith("index.blade.php.bak")
        assert "@extends" in target.read_text(encoding="utf-8")

    def test_failure_does_not_stop_the_run(self, tmp_path: Path, resources_dir: Path, posts_context):
        (tmp_path / "stubs" / "crud").mkdir(parents=True)
        (tmp_path / "stubs" / "crud" / "show.blade.php.j2").write_text("[% if %]", encoding="utf-8")
        env = setup_jinja_env(str(tmp_path / "stubs"))

        results = write_manifest(plan_manifest("posts", ["crud"]), posts_context, resources_dir, env=env)
        assert [r.status for r in results] == [
            GenerationResult.CREATED, GenerationResult.FAILED,
            GenerationResult.CREATED, GenerationResult.CREATED,
        ]
        assert results[1].error
        assert results[1].success is False

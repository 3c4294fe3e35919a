import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    TemplateError,
    TemplateNotFound,
    ext as jinja2_extensions,
)

from blade_view_generator.constants import DefaultConfig
from blade_view_generator.domain.models import GenerationResult, ManifestEntry
from blade_view_generator.domain.naming import (
    pluralize,
    singularize,
    to_camel_case,
    to_kebab_case,
    to_studly_case,
)
from blade_view_generator.exceptions import FileGenerationError


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"

FALLBACK_STUB = "_fallback.blade.php.j2"


def setup_jinja_env(stubs_path: Optional[str] = None) -> Environment:
    """
    Sets up and returns the Jinja2 environment.

    User stubs in `stubs_path` shadow the bundled ones. Jinja uses bracket
    delimiters so that Blade's own `{{ }}` and `{{-- --}}` pass through.
    """
    loaders = []
    if stubs_path:
        user_dir = Path(stubs_path)
        if user_dir.is_dir():
            loaders.append(FileSystemLoader(user_dir))
            logger.debug(f"Using custom stubs from {user_dir}")
        else:
            logger.warning(f"Custom stubs directory not found: {user_dir}. Using bundled stubs only.")
    loaders.append(FileSystemLoader(TEMPLATE_DIR))

    env = Environment(
        loader=ChoiceLoader(loaders),
        block_start_string="[%",
        block_end_string="%]",
        variable_start_string="[[",
        variable_end_string="]]",
        comment_start_string="[#",
        comment_end_string="#]",
        trim_blocks=True,  # Remove first newline after a block tag
        lstrip_blocks=True,  # Strip leading whitespace from lines with block tags
        keep_trailing_newline=True,
        extensions=[
            jinja2_extensions.do,
            jinja2_extensions.loopcontrols,
        ],
    )
    env.filters["pluralize"] = pluralize
    env.filters["singularize"] = singularize
    env.filters["kebab"] = to_kebab_case
    env.filters["studly"] = to_studly_case
    env.filters["camel"] = to_camel_case
    return env


def resolve_stub(env: Environment, stub: str, framework: str):
    """
    Find the template for a manifest stub.

    Lookup order is `<framework>/<stub>`, then `<stub>`, then the generic
    fallback stub.
    """
    candidates = [f"{framework}/{stub}", stub, FALLBACK_STUB]
    try:
        return env.select_template(candidates)
    except TemplateNotFound as e:
        raise FileGenerationError(
            f"No template found for stub '{stub}'",
            stub=stub,
            context={'searched': candidates},
        ) from e
    except TemplateError as e:
        raise FileGenerationError(
            f"Error loading stub '{stub}': {e}",
            stub=stub,
        ) from e


def render_entry(env: Environment, entry: ManifestEntry, context: Dict[str, Any]) -> str:
    """Render one manifest entry's stub with the shared template context."""
    framework = context.get('framework', DefaultConfig.FRAMEWORK)
    template = resolve_stub(env, entry.stub, framework)
    entry_context = dict(context)
    entry_context.update({
        'view_path': entry.relative_path,
        'view_category': entry.category,
        'stub': entry.stub,
    })
    try:
        return template.render(entry_context)
    except TemplateError as e:
        raise FileGenerationError(
            f"Error rendering stub '{template.name}': {e}",
            path=entry.relative_path,
            stub=template.name,
        ) from e


def find_existing_files(manifest: Iterable[ManifestEntry], resources_path) -> List[str]:
    """Relative paths of manifest entries that already exist on disk."""
    root = Path(resources_path)
    return [entry.relative_path for entry in manifest if (root / entry.relative_path).exists()]


def _backup_file(path: Path) -> Path:
    backup_path = path.with_name(path.name + DefaultConfig.BACKUP_SUFFIX)
    shutil.copy2(path, backup_path)
    logger.debug(f"Backed up {path} to {backup_path}")
    return backup_path


def write_manifest(
    manifest: Iterable[ManifestEntry],
    context: Dict[str, Any],
    resources_path,
    env: Optional[Environment] = None,
    force: bool = False,
    backup: bool = False,
    dry_run: bool = False,
) -> List[GenerationResult]:
    """
    Render and write every manifest entry below `resources_path`.

    Existing files are skipped unless `force` is set; with `backup` the old
    file is copied next to it first. A dry run renders nothing and reports
    each entry as planned. A failing entry is reported and does not stop
    the remaining ones.
    """
    env = env or setup_jinja_env()
    root = Path(resources_path)
    results: List[GenerationResult] = []

    for entry in manifest:
        output_path = root / entry.relative_path
        exists = output_path.exists()

        if dry_run:
            results.append(GenerationResult(entry, GenerationResult.PLANNED, path=str(output_path)))
            continue

        if exists and not force:
            logger.info(f"Skipping existing file: {entry.relative_path}")
            results.append(GenerationResult(entry, GenerationResult.SKIPPED, path=str(output_path)))
            continue

        backup_path = None
        try:
            content = render_entry(env, entry, context)
            if exists and backup:
                backup_path = str(_backup_file(output_path))
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(content)
        except (FileGenerationError, OSError) as e:
            message = e.message if isinstance(e, FileGenerationError) else str(e)
            logger.error(f"Failed to generate {entry.relative_path}: {message}")
            results.append(GenerationResult(
                entry, GenerationResult.FAILED, path=str(output_path),
                backup_path=backup_path, error=message,
            ))
            continue

        status = GenerationResult.OVERWRITTEN if exists else GenerationResult.CREATED
        logger.debug(f"Generated file: {output_path} ({status})")
        results.append(GenerationResult(entry, status, path=str(output_path), backup_path=backup_path))

    return results


def summarize_results(results: Iterable[GenerationResult]) -> Dict[str, int]:
    """Count results per status, in a stable order."""
    summary = {
        GenerationResult.CREATED: 0,
        GenerationResult.OVERWRITTEN: 0,
        GenerationResult.SKIPPED: 0,
        GenerationResult.PLANNED: 0,
        GenerationResult.FAILED: 0,
    }
    for result in results:
        summary[result.status] = summary.get(result.status, 0) + 1
    return summary

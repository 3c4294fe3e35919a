import argparse
import logging
import sys
from typing import Iterable, List, Optional

from blade_view_generator import __version__
from blade_view_generator.codegen import (
    find_existing_files,
    setup_jinja_env,
    summarize_results,
    write_manifest,
)
from blade_view_generator.colored_logging import (
    get_colored_logger,
    log_grouped_paths,
    log_highlight,
    log_progress,
    log_section,
    log_success,
    setup_colored_logging,
)
from blade_view_generator.config_validation import (
    ToolConfigSchema,
    build_feature_flags,
    load_config,
)
from blade_view_generator.constants import SupportedFrameworks, VALIDATION_STYLES, ViewPaths
from blade_view_generator.domain import (
    FeatureFlags,
    GenerationResult,
    ManifestEntry,
    ViewCategory,
    analyze_fields,
    build_template_context,
    group_by_category,
    plan_manifest,
)
from blade_view_generator.exceptions import (
    ConfigurationError,
    ViewGeneratorError,
)

# Note: Colored logging will be configured after parsing args
logger = logging.getLogger(__name__)

LAYOUT_SWITCHES = ("auth", "errors", "email", "navigation", "sidebar", "breadcrumbs", "footer")


# --- Argument Parsing ---
def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a whole number")
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file.",
    )
    common.add_argument(
        "--schema-file",
        dest="schema_file",
        help="YAML schema snapshot to read tables from instead of a database.",
    )
    common.add_argument(
        "--resources-path",
        dest="resources_path",
        help="Laravel resources directory. Overrides config file setting.",
    )
    common.add_argument(
        "--stubs-path",
        dest="stubs_path",
        help="Directory with custom stubs, searched before the bundled ones.",
    )
    common.add_argument(
        "--framework",
        choices=SupportedFrameworks.ALL,
        help="UI framework the views are generated for.",
    )
    common.add_argument("--force", action="store_true", help="Overwrite existing files.")
    common.add_argument(
        "--backup",
        action="store_true",
        help="Keep a .bak copy of every file that is overwritten.",
    )
    common.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Preview the files that would be generated without writing them.",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging for the generator tool.",
    )
    common.add_argument(
        "--no-color",
        dest="no_color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return common


def _add_table_feature_options(parser: argparse.ArgumentParser):
    parser.add_argument("--sorting", action="store_true", help="Include column sorting.")
    parser.add_argument("--filtering", action="store_true", help="Include data filtering.")
    parser.add_argument("--search", action="store_true", help="Include search functionality.")
    parser.add_argument(
        "--pagination",
        dest="pagination_size",
        type=_positive_int,
        help="Records per page.",
    )
    parser.add_argument("--bulk-actions", dest="bulk_actions", action="store_true",
                        help="Include bulk action capabilities.")
    parser.add_argument("--export", action="store_true", help="Include export functionality (CSV, PDF).")
    parser.add_argument("--ajax", action="store_true", help="Enable AJAX table features.")
    parser.add_argument("--responsive", action="store_true", help="Make the table mobile friendly.")
    parser.add_argument("--component", action="store_true",
                        help="Generate the table as a reusable component.")


def _add_form_feature_options(parser: argparse.ArgumentParser):
    parser.add_argument("--layout", help="Master layout the views extend.")
    parser.add_argument("--rich-text", dest="rich_text", action="store_true",
                        help="Include rich text editor fields.")
    parser.add_argument("--file-upload", dest="file_upload", action="store_true",
                        help="Include file upload handling.")
    parser.add_argument("--date-picker", dest="date_picker", action="store_true",
                        help="Include date picker components.")
    parser.add_argument("--ajax", action="store_true", help="Enable AJAX form submission.")
    parser.add_argument("--validation", dest="validation_style", choices=VALIDATION_STYLES,
                        help="Validation message style.")
    parser.add_argument("--components", dest="use_components", action="store_true",
                        help="Use Blade components for form fields.")
    parser.add_argument("--separate-forms", dest="separate_forms", action="store_true", default=None,
                        help="Generate separate create/edit forms (default).")
    parser.add_argument("--single-form", dest="separate_forms", action="store_false",
                        help="Generate one shared form partial instead of separate forms.")


def _add_component_type_options(parser: argparse.ArgumentParser):
    for component_type in ViewPaths.COMPONENT_TYPES:
        label = ViewPaths.COMPONENT_FILES[component_type][0].lower()
        parser.add_argument(
            f"--{component_type}",
            dest="component_types",
            action="append_const",
            const=component_type,
            help=f"Generate {label}.",
        )
    parser.add_argument("--namespace", dest="component_namespace",
                        help="Views sub directory for components.")
    parser.add_argument("--all", dest="all_types", action="store_true",
                        help="Generate all component types.")


def _add_layout_options(parser: argparse.ArgumentParser):
    parser.add_argument("--auth", action="store_true", help="Include authentication layouts.")
    parser.add_argument("--admin", action="store_true",
                        help="Include admin/dashboard layouts (always generated).")
    parser.add_argument("--error", dest="errors", action="store_true", help="Include error pages.")
    parser.add_argument("--email", action="store_true", help="Include email layouts.")
    parser.add_argument("--navigation", action="store_true", help="Include navigation components.")
    parser.add_argument("--sidebar", action="store_true", help="Include sidebar navigation.")
    parser.add_argument("--breadcrumbs", action="store_true", help="Include breadcrumb navigation.")
    parser.add_argument("--footer", action="store_true", help="Include footer component.")
    parser.add_argument("--all", dest="all_layouts", action="store_true",
                        help="Generate all layout types.")


def build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    parser = argparse.ArgumentParser(
        prog="blade-views",
        description="Generate Laravel Blade views (CRUD pages, forms, data tables, components and layouts) from a database schema.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    crud = subparsers.add_parser("crud", parents=[common], help="Generate CRUD views for a table.")
    crud.add_argument("table", help="The database table name.")
    crud.add_argument("--layout", help="Master layout the views extend.")
    crud.add_argument("--ajax", action="store_true", help="Include an AJAX delete modal.")
    crud.add_argument("--components", dest="generate_components", action="store_true",
                      help="Also generate the reusable components.")
    crud.set_defaults(handler=run_crud)

    forms = subparsers.add_parser("forms", parents=[common], help="Generate form views for a table.")
    forms.add_argument("table", help="The database table name.")
    _add_form_feature_options(forms)
    forms.set_defaults(handler=run_forms)

    tables = subparsers.add_parser("tables", parents=[common], help="Generate data table views for a table.")
    tables.add_argument("table", help="The database table name.")
    tables.add_argument("--layout", help="Master layout the views extend.")
    _add_table_feature_options(tables)
    tables.set_defaults(handler=run_tables)

    components = subparsers.add_parser("components", parents=[common], help="Generate reusable Blade components.")
    components.add_argument("table", nargs="?", help="Optional table name the components are tailored to.")
    _add_component_type_options(components)
    components.set_defaults(handler=run_components)

    layouts = subparsers.add_parser("layouts", parents=[common], help="Generate layout templates.")
    layouts.add_argument("--layout", help="Master layout the views extend.")
    _add_layout_options(layouts)
    layouts.set_defaults(handler=run_layouts)

    all_views = subparsers.add_parser("all", parents=[common], help="Generate every view for many tables.")
    all_views.add_argument("--tables", dest="include_tables",
                           help="Comma separated list of tables (default: all tables).")
    all_views.add_argument("--exclude", dest="exclude_tables",
                           help="Comma separated list of tables to exclude.")
    all_views.add_argument("--layout", help="Master layout the views extend.")
    all_views.add_argument("--ajax", action="store_true", help="Include AJAX functionality.")
    all_views.add_argument("--components", dest="generate_components", action="store_true",
                           help="Generate the reusable components once.")
    all_views.add_argument("--auth", action="store_true", help="Include authentication views.")
    all_views.add_argument("--admin", action="store_true",
                           help="Include admin layouts (always generated).")
    all_views.add_argument("--export", action="store_true", help="Include export functionality.")
    all_views.set_defaults(handler=run_all)

    return parser


# --- Schema sources ---
def open_schema_source(config: ToolConfigSchema):
    """The configured table source: a schema file, else the default database."""
    if config.schema_file:
        from blade_view_generator.schema_loader import SchemaFile

        log_progress(logger, f"Loading schema snapshot from {config.schema_file}...")
        return SchemaFile.load(config.schema_file)

    if config.databases:
        from blade_view_generator.introspection_django import DatabaseSchema, setup_django

        log_progress(logger, "Configuring Django settings for introspection...")
        setup_django(config.databases, config.SECRET_KEY)
        return DatabaseSchema()

    raise ConfigurationError(
        "No schema source configured.",
        suggestions=[
            "Pass --schema-file with a YAML schema snapshot",
            "Configure 'databases' in the config file",
        ],
    )


# --- Generation pipeline ---
def _log_field_summary(analysis, categories: Iterable[ViewCategory]):
    if ViewCategory.FORMS in categories or ViewCategory.CRUD in categories:
        logger.info("Form fields:")
        for field in analysis.form_fields:
            required = " (required)" if field.required else ""
            logger.info(f"  • {field.name}: {field.input_type.value}{required}")
    if ViewCategory.TABLES in categories or ViewCategory.CRUD in categories:
        logger.info("Table columns:")
        for field in analysis.table_fields:
            extras = [label for label, on in (("sortable", field.sortable), ("filterable", field.filterable)) if on]
            suffix = f" ({', '.join(extras)})" if extras else ""
            logger.info(f"  • {field.name}: {field.display_type.value}{suffix}")
    for relationship in analysis.table.relationships:
        logger.info(f"  • {relationship.foreign_key} belongs to {relationship.related_model}")


def _report(manifest: List[ManifestEntry], results: List[GenerationResult], config: ToolConfigSchema, dry_run: bool):
    if dry_run:
        log_highlight(logger, "Dry run: the following files would be generated")
        log_grouped_paths(logger, group_by_category(manifest))
        existing = find_existing_files(manifest, config.resources_path)
        for path in existing:
            log_highlight(logger, f"{path} exists and would be skipped without --force")
        return

    for result in results:
        if result.status == GenerationResult.CREATED:
            log_success(logger, f"Created {result.entry.relative_path}")
        elif result.status == GenerationResult.OVERWRITTEN:
            log_success(logger, f"Overwritten {result.entry.relative_path}")
        elif result.status == GenerationResult.SKIPPED:
            log_highlight(logger, f"Skipped {result.entry.relative_path} (exists; use --force to overwrite)")


def generate_views(
    config: ToolConfigSchema,
    flags: FeatureFlags,
    categories: List[ViewCategory],
    args: argparse.Namespace,
    table_name: Optional[str] = None,
    source=None,
    env=None,
) -> List[GenerationResult]:
    """Plan, render and write the views of `categories` for one table (or none)."""
    analysis = None
    if table_name:
        log_progress(logger, f"Analyzing table '{table_name}'...")
        analysis = analyze_fields(source.introspect_table(table_name))
        if ViewCategory.FORMS in categories and not analysis.form_fields:
            raise ViewGeneratorError(
                f"No form fields found in table '{table_name}'",
                context={'table': table_name},
                suggestions=["Every column of this table is excluded from forms"],
                error_code="NO_FIELDS",
            )
        if ViewCategory.TABLES in categories and not analysis.table_fields:
            raise ViewGeneratorError(
                f"No columns found in table '{table_name}'",
                context={'table': table_name},
                error_code="NO_FIELDS",
            )

    log_progress(logger, "Planning view files...")
    input_types = [field.input_type for field in analysis.form_fields] if analysis else None
    manifest = plan_manifest(table_name, categories, flags, input_types)
    logger.debug(f"Planned {len(manifest)} files: {[entry.relative_path for entry in manifest]}")

    if args.dry_run and analysis is not None:
        _log_field_summary(analysis, categories)

    context = build_template_context(analysis, flags, config.framework, config.layout)
    results = write_manifest(
        manifest,
        context,
        config.resources_path,
        env=env,
        force=args.force,
        backup=args.backup,
        dry_run=args.dry_run,
    )
    _report(manifest, results, config, args.dry_run)
    return results


def _finish(results: List[GenerationResult], failed_tables: Optional[List[str]] = None) -> int:
    summary = summarize_results(results)
    log_section(logger, "Summary")
    logger.info(", ".join(f"{count} {status}" for status, count in summary.items() if count))
    if failed_tables:
        logger.error(f"Failed tables: {', '.join(failed_tables)}")
    if summary[GenerationResult.FAILED] or failed_tables:
        if summary[GenerationResult.FAILED]:
            logger.error(f"{summary[GenerationResult.FAILED]} file(s) could not be generated.")
        return 1
    log_success(logger, "View generation complete.")
    return 0


def _categories(*names: ViewCategory) -> List[ViewCategory]:
    return list(names)


def run_crud(config: ToolConfigSchema, args: argparse.Namespace) -> int:
    log_section(logger, f"CRUD views for {args.table}")
    categories = _categories(ViewCategory.CRUD)
    if args.generate_components:
        categories.append(ViewCategory.COMPONENTS)
    source = open_schema_source(config)
    flags = build_feature_flags(config, args)
    results = generate_views(config, flags, categories, args, args.table, source,
                             env=setup_jinja_env(config.stubs_path))
    return _finish(results)


def run_forms(config: ToolConfigSchema, args: argparse.Namespace) -> int:
    log_section(logger, f"Form views for {args.table}")
    source = open_schema_source(config)
    flags = build_feature_flags(config, args)
    results = generate_views(config, flags, _categories(ViewCategory.FORMS), args, args.table, source,
                             env=setup_jinja_env(config.stubs_path))
    return _finish(results)


def run_tables(config: ToolConfigSchema, args: argparse.Namespace) -> int:
    log_section(logger, f"Table views for {args.table}")
    source = open_schema_source(config)
    flags = build_feature_flags(config, args)
    results = generate_views(config, flags, _categories(ViewCategory.TABLES), args, args.table, source,
                             env=setup_jinja_env(config.stubs_path))
    return _finish(results)


def run_components(config: ToolConfigSchema, args: argparse.Namespace) -> int:
    log_section(logger, "Components")
    if args.all_types:
        args.component_types = list(ViewPaths.COMPONENT_TYPES)
    if not args.component_types:
        raise ConfigurationError(
            "No component types selected.",
            suggestions=["Use --all or specify individual component flags such as --form-inputs"],
        )
    # Components only need a schema when they are tailored to a table
    if args.table:
        open_schema_source(config).introspect_table(args.table)
    flags = build_feature_flags(config, args)
    results = generate_views(config, flags, _categories(ViewCategory.COMPONENTS), args,
                             env=setup_jinja_env(config.stubs_path))
    return _finish(results)


def run_layouts(config: ToolConfigSchema, args: argparse.Namespace) -> int:
    log_section(logger, "Layouts")
    if args.all_layouts:
        for switch in LAYOUT_SWITCHES:
            setattr(args, switch, True)
    flags = build_feature_flags(config, args)
    results = generate_views(config, flags, _categories(ViewCategory.LAYOUTS), args,
                             env=setup_jinja_env(config.stubs_path))
    return _finish(results)


def run_all(config: ToolConfigSchema, args: argparse.Namespace) -> int:
    source = open_schema_source(config)
    tables = source.list_tables(config.include_tables, config.exclude_tables)
    for missing in sorted(set(config.include_tables or []) - set(tables)):
        logger.warning(f"Table '{missing}' was not found or is excluded; skipping it.")
    if not tables:
        logger.warning("No tables selected for generation after filtering.")
        return 1
    log_highlight(logger, f"Found {len(tables)} table(s): {', '.join(tables)}")

    env = setup_jinja_env(config.stubs_path)
    flags = build_feature_flags(config, args)
    results: List[GenerationResult] = []

    log_section(logger, "Layouts")
    results += generate_views(config, flags, _categories(ViewCategory.LAYOUTS), args, env=env)

    if args.generate_components:
        log_section(logger, "Components")
        results += generate_views(config, flags, _categories(ViewCategory.COMPONENTS), args, env=env)

    failed_tables: List[str] = []
    for table_name in tables:
        log_section(logger, f"Views for {table_name}")
        try:
            results += generate_views(
                config, flags,
                _categories(ViewCategory.CRUD, ViewCategory.FORMS, ViewCategory.TABLES),
                args, table_name, source, env=env,
            )
        except ViewGeneratorError as e:
            logger.error(f"Failed to generate views for table '{table_name}': {e.message}")
            failed_tables.append(table_name)

    return _finish(results, failed_tables)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    global logger
    logger = get_colored_logger(__name__)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        logger.debug(f"Effective configuration loaded: {config}")
        return args.handler(config, args)

    # --- Error Handling ---
    except ViewGeneratorError as e:
        logger.error(str(e), exc_info=args.verbose)
        return 1
    except ImportError as e:
        logger.error(
            f"Import Error: {e}. Ensure Django and necessary database drivers are installed.",
            exc_info=args.verbose,
        )
        return 1
    except Exception as e:
        logger.error(
            f"An unexpected error occurred during generation: {e}", exc_info=True
        )
        return 1


# --- Script Entry Point ---
if __name__ == "__main__":
    sys.exit(main())

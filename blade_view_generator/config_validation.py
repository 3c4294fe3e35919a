# File: blade_view_generator/config_validation.py
from argparse import Namespace
import sys
import logging
from dataclasses import fields as dataclass_fields
from typing import List, Optional, Dict, Any, Literal, Self
import yaml
import os
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from blade_view_generator.constants import DefaultConfig, SupportedFrameworks, ViewPaths
from blade_view_generator.domain.models import FeatureFlags

logger = logging.getLogger(__name__)

SUPPORTED_DB_ENGINES = [
    'django.db.backends.postgresql',
    'django.db.backends.mysql',
    'django.db.backends.sqlite3',
]


# --- Pydantic Models for Configuration Schema ---
class DatabaseSettings(BaseModel):
    """Schema for a single database connection within the DATABASES dict."""

    ENGINE: str = Field(
        ...,
        min_length=1,
        description="Django database engine (e.g., 'django.db.backends.mysql').",
    )
    NAME: str = Field(..., min_length=1, description="Database name (or SQLite file path).")
    USER: Optional[str] = Field(default=None, description="Database user.")
    PASSWORD: Optional[str] = Field(default=None, description="Database password.")
    HOST: Optional[str] = Field(default=None, description="Database host address.")
    PORT: Optional[int] = Field(default=None, description="Database port number.")
    OPTIONS: Dict[str, Any] = Field(
        default_factory=dict, description="Database engine specific options."
    )

    @field_validator("ENGINE")
    @classmethod
    def validate_engine(cls, v: str) -> str:
        """Ensure engine is one Django can introspect for us."""
        if v not in SUPPORTED_DB_ENGINES:
            raise ValueError(
                f"Database engine: {v} is not supported. Supported engines are: {', '.join(SUPPORTED_DB_ENGINES)}"
            )
        return v

    @field_validator("PORT", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> Optional[int]:
        """Ensure port is a number or string representation of one, and within range."""
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise TypeError("Port must be an integer, got bool")
        if isinstance(v, int):
            port_num = v
        elif isinstance(v, str):
            if not v.isdigit():
                raise ValueError(
                    f"Port must be a number or string containing only digits, got '{v}'"
                )
            port_num = int(v)
        else:
            raise TypeError(
                f"Port must be an integer or string containing digits, got {type(v).__name__}"
            )

        if not 0 <= port_num <= 65535:
            raise ValueError(f"Port must be between 0 and 65535, got {port_num}")
        return port_num


class FeaturesConfig(BaseModel):
    """Default feature switches, overridable from the command line."""

    search: bool = False
    filtering: bool = False
    sorting: bool = False
    bulk_actions: bool = False
    export: bool = False
    ajax: bool = False
    responsive: bool = False
    pagination_size: int = Field(default=DefaultConfig.PAGINATION_SIZE, ge=1, le=1000)

    separate_forms: bool = True
    validation_style: Literal["inline", "summary", "both"] = DefaultConfig.VALIDATION_STYLE
    rich_text: bool = False
    file_upload: bool = False
    date_picker: bool = False
    use_components: bool = False

    model_config = ConfigDict(extra="ignore")


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    databases: Optional[Dict[str, DatabaseSettings]] = Field(
        default=None,
        description="Django DATABASES setting dictionary used to introspect the schema.",
    )
    schema_file: Optional[str] = Field(
        default=None,
        description="YAML schema snapshot used instead of a live database.",
    )
    resources_path: str = Field(
        DefaultConfig.RESOURCES_PATH,
        min_length=1,
        description="Laravel resources directory; views are written below its 'views' folder.",
    )
    stubs_path: Optional[str] = Field(
        default=None,
        description="Directory with custom stubs, searched before the bundled ones.",
    )
    framework: Literal["bootstrap", "tailwind", "custom"] = Field(
        default=DefaultConfig.FRAMEWORK,
        description=f"UI framework ({', '.join(SupportedFrameworks.ALL)}).",
    )
    layout: str = Field(
        default=DefaultConfig.LAYOUT,
        min_length=1,
        description="Master layout the generated views extend.",
    )
    component_namespace: str = Field(
        default=DefaultConfig.COMPONENT_NAMESPACE,
        min_length=1,
        description="Views sub directory for generated components.",
    )
    features: FeaturesConfig = Field(default_factory=FeaturesConfig)
    include_tables: Optional[List[str]] = Field(
        default=None,
        description="Optional list of specific table names to generate views for.",
    )
    exclude_tables: Optional[List[str]] = Field(
        default=None, description="Optional list of table names to skip."
    )

    # Internal field, added by load_config if not provided by user
    SECRET_KEY: Optional[str] = Field(
        default=None, description="Internal secret key for Django setup."
    )

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        """Allow dict.get() style access."""
        return getattr(self, key, default)

    @property
    def views_root(self) -> Path:
        return Path(self.resources_path)

    @field_validator("component_namespace")
    @classmethod
    def check_namespace(cls, v: str) -> str:
        """Namespaces are relative directories below views/."""
        cleaned = v.strip().strip("/")
        if not cleaned or ".." in cleaned.split("/"):
            raise ValueError(f"'{v}' is not a valid component namespace.")
        return cleaned

    @field_validator("include_tables", "exclude_tables", mode="before")
    @classmethod
    def check_table_names_list(cls, v: Optional[Any]) -> Optional[List[str]]:
        """Accept lists or comma separated strings of non-empty table names."""
        if v is None:
            return None
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list):
            raise TypeError("include_tables/exclude_tables must be a list.")
        processed_list = []
        for index, item in enumerate(v):
            if not isinstance(item, str):
                raise TypeError(
                    f"Item at index {index} must be a string, found: {type(item).__name__}"
                )
            stripped_item = item.strip()
            if not stripped_item:
                raise ValueError(
                    f"Item at index {index} cannot be empty or just whitespace."
                )
            processed_list.append(stripped_item)
        return processed_list

    @model_validator(mode="after")
    def check_schema_source(self) -> Self:
        """A configured database must have a default alias."""
        if self.databases is not None and "default" not in self.databases:
            raise ValueError(
                "The 'databases' configuration dictionary must contain a 'default' key."
            )
        if self.databases and self.schema_file:
            logger.warning(
                "Both 'databases' and 'schema_file' are configured; the schema file takes precedence."
            )
        return self

    model_config = ConfigDict(extra="ignore")


# --- Validation Function ---
def validate_and_parse_config(config_dict: Dict[str, Any]) -> ToolConfigSchema:
    """
    Validates a raw configuration dictionary against the ToolConfigSchema.
    Exits with error messages if validation fails.
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        logger.critical(
            "Configuration validation failed! Please check your config file or arguments."
        )
        print("\n--- Configuration Errors ---", file=sys.stderr)
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            msg = error.get("msg", "Unknown validation error")

            print(f"  - Location: '{loc_str}'", file=sys.stderr)
            print(f"    Error:    {msg}", file=sys.stderr)

            if "framework" in loc_parts:
                print(
                    f"    Hint:     Use one of: {', '.join(SupportedFrameworks.ALL)}.",
                    file=sys.stderr,
                )

        print("----------------------------", file=sys.stderr)
        sys.exit(1)


def load_config(config_path: Optional[str], cli_args: Namespace) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    Exits with error messages if validation fails.
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if config_file.is_file():
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error(f"Error parsing YAML file {config_path}: {e}")
                logger.warning("Proceeding with defaults and CLI arguments only.")
                yaml_config = None
            if yaml_config and isinstance(yaml_config, dict):
                raw_config.update(yaml_config)
                logger.debug(f"Loaded configuration from {config_path}")
            elif yaml_config:
                logger.warning(
                    f"Content in config file {config_path} is not a dictionary. Ignoring file content."
                )
        else:
            logger.warning(
                f"Config file not found at {config_path}. Using defaults and CLI arguments."
            )

    # 2. Override with CLI arguments (only those explicitly provided)
    cli_dict = vars(cli_args)
    overridden_keys = set()
    for key, value in cli_dict.items():
        if value is not None and key not in ("databases", "features") and key in ToolConfigSchema.model_fields:
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    # 3. Add internal SECRET_KEY if not present (needed for django.setup)
    if "SECRET_KEY" not in raw_config:
        raw_config["SECRET_KEY"] = os.urandom(50).hex()

    # 4. Validate
    logger.debug("Validating final configuration...")
    validated_config = validate_and_parse_config(raw_config)

    # 5. Resolve paths relative to the working directory
    validated_config.resources_path = str(Path(validated_config.resources_path).resolve())
    if validated_config.schema_file:
        validated_config.schema_file = str(Path(validated_config.schema_file).resolve())

    return validated_config


def build_feature_flags(config: ToolConfigSchema, cli_args: Optional[Namespace] = None) -> FeatureFlags:
    """
    Merge configured feature defaults with command line switches.

    Store-true switches are False when absent, so they can only turn a
    feature on. Switches of features that default to on are None when
    absent and override the configured value when given.
    """
    values: Dict[str, Any] = config.features.model_dump()
    values["component_namespace"] = config.component_namespace
    args = vars(cli_args) if cli_args is not None else {}

    for flag in dataclass_fields(FeatureFlags):
        cli_value = args.get(flag.name)
        # The namespace already reached the validated config in load_config
        if cli_value is None or flag.name == "component_namespace":
            continue
        if isinstance(flag.default, bool):
            if cli_value or flag.default:
                values[flag.name] = cli_value
        elif flag.name == "component_types":
            values[flag.name] = tuple(cli_value) or tuple(ViewPaths.COMPONENT_TYPES)
        else:
            values[flag.name] = cli_value

    known = {flag.name for flag in dataclass_fields(FeatureFlags)}
    return FeatureFlags(**{key: value for key, value in values.items() if key in known})

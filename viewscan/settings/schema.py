# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""ScanSettings and the viewscan.yaml settings source.

Where a value comes from, strongest first:
    keyword arguments (the CLI passes its options this way)
    VIEWSCAN_* environment variables, ``__`` separating nested fields
    viewscan.yaml
    field defaults

viewscan.yaml is the nearest one at or above CWD. VIEWSCAN_PROJECT_DIR pins
the directory instead; nothing above it is searched then.

Relative ``search_paths`` in viewscan.yaml are anchored at the file's own
directory, not at CWD.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from viewscan._internal.io.yaml import expand_env_vars, load_yaml, resolve_paths
from viewscan.constants import ENV_PREFIX, PROJECT_CONFIG_FILE


def _find_project_config() -> Path | None:
    """Locate viewscan.yaml, or None when there is none to use."""
    pinned = os.environ.get(f"{ENV_PREFIX}PROJECT_DIR")
    if pinned:
        candidate = Path(pinned).resolve() / PROJECT_CONFIG_FILE
        return candidate if candidate.exists() else None

    cwd = Path.cwd().resolve()
    for directory in (cwd, *cwd.parents):
        candidate = directory / PROJECT_CONFIG_FILE
        if candidate.exists():
            return candidate
    return None


def _yaml_error_message(path: Path, error: yaml.YAMLError) -> str:
    mark = getattr(error, "problem_mark", None)
    where = f"line {mark.line + 1}, column {mark.column + 1}" if mark is not None else "unknown position"
    problem = getattr(error, "problem", None) or str(error)
    return f"Invalid YAML in config file {path} ({where}): {problem}"


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading the project viewscan.yaml."""

    def __init__(self, settings_cls: type[BaseSettings], project_file: Path | None = None):
        super().__init__(settings_cls)
        if project_file is None:
            self.project_file_used = _find_project_config()
        else:
            self.project_file_used = project_file if project_file.is_file() else None

        self._data = self._load() if self.project_file_used else {}

    def _load(self) -> dict[str, Any]:
        """Read, env-expand and path-anchor the project file.

        Raises:
            yaml.YAMLError: The file is not valid YAML
            ValueError: The top level is not a mapping
        """
        path = self.project_file_used
        try:
            data = load_yaml(path)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(_yaml_error_message(path, e)) from e

        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping at the top level, not {type(data).__name__}")

        data = expand_env_vars(data)
        if isinstance(data.get("search_paths"), list):
            data["search_paths"] = resolve_paths(data["search_paths"], path.parent)
        return data

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        found = field_name in self._data
        return self._data.get(field_name), field_name, found

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class LoggingConfig(BaseModel):
    """Console verbosity for the CLI."""

    level: str = Field(default="normal", description="quiet | normal | verbose | debug")

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.lower()
        if value not in ("quiet", "normal", "verbose", "debug"):
            raise ValueError(f"Unknown log level '{value}'")
        return value


class ScanSettings(BaseSettings):
    """Everything a scan or a render can be configured with.

    Pass ``project_file=`` to read a specific viewscan.yaml instead of
    searching for one.
    """

    search_paths: list[Path] = Field(
        default_factory=list,
        description=(
            "Extra path entries searched for namespaces before viewscan's own "
            "install location and sys.path."
        ),
    )
    excluded_prefixes: list[str] = Field(
        default_factory=list,
        description="Module prefixes skipped during scans, on top of the built-in exclusions.",
    )
    assignable_fallback: bool = Field(
        default=True,
        description=(
            "After the ancestor chain and declared bases, accept any registered "
            "type the model type is a subclass of."
        ),
    )
    autoescape: bool = Field(default=True, description="HTML-escape values in template views")
    strict_undefined: bool = Field(default=True, description="Raise on undefined template variables")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
        env_file=None,
    )

    @field_validator("excluded_prefixes")
    @classmethod
    def _strip_prefixes(cls, value: list[str]) -> list[str]:
        return [p.strip().strip(".") for p in value if p.strip().strip(".")]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Keyword arguments, then the environment, then viewscan.yaml.

        dotenv and secret files are not read.
        """
        project_file = init_settings().get("project_file")
        yaml_source = YamlSettingsSource(
            settings_cls,
            project_file=Path(project_file) if project_file is not None else None,
        )
        return init_settings, env_settings, yaml_source

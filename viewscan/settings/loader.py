# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Building ScanSettings from overrides, environment and viewscan.yaml.

Sources, strongest first: keyword overrides, VIEWSCAN_* variables, the
project file, field defaults. get_config() memoizes the no-override result
for library callers; the CLI builds its own instance per invocation.
"""

import os
from functools import lru_cache
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError
from rich.console import Console

from viewscan.constants import ENV_PREFIX

from .schema import ScanSettings

console = Console(stderr=True)

LOG_LEVEL_SHORTHAND = f'{ENV_PREFIX}LOG_LEVEL'


def _report(error: ValidationError) -> None:
    console.print("[bold red]Invalid viewscan settings:[/bold red]")
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        console.print(f"  [red]{location}: {item['msg']}[/red]")


def load_config(project_file: Path | None = None, **overrides) -> ScanSettings:
    """Build settings from every source.

    VIEWSCAN_LOG_LEVEL stands in for VIEWSCAN_LOGGING__LEVEL unless a
    logging override is given.

    Args:
        project_file: Use this file instead of searching upward for viewscan.yaml
        **overrides: Field values that win over every other source

    Raises:
        ValidationError: A source holds a value the schema rejects
    """
    if LOG_LEVEL_SHORTHAND in os.environ:
        overrides.setdefault('logging', {'level': os.environ[LOG_LEVEL_SHORTHAND]})
    if project_file is not None:
        overrides['project_file'] = Path(project_file)

    try:
        return ScanSettings(**overrides)
    except ValidationError as e:
        _report(e)
        raise


@lru_cache(maxsize=1)
def get_config() -> ScanSettings:
    """Settings shared by library callers, built once."""
    return load_config()


def reset_config() -> None:
    """Drop the memoized settings so the next get_config() rebuilds them."""
    get_config.cache_clear()


def get_default_config() -> ScanSettings:
    """Settings from field defaults alone: no project file, no VIEWSCAN_* variables."""
    unprefixed = {
        name: value for name, value in os.environ.items()
        if not name.upper().startswith(ENV_PREFIX)
    }
    with patch.dict(os.environ, unprefixed, clear=True):
        return load_config(project_file=Path(os.devnull))

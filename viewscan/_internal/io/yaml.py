# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""YAML helpers for viewscan.yaml.

- load_yaml(): parse a file, an empty document being ``{}``
- expand_env_vars(): substitute ``$VAR`` / ``${VAR}`` in every string value
- resolve_paths(): anchor relative path strings at a base directory

None of these mutate their input or os.environ.
"""

import os
from pathlib import Path
from typing import Any, Iterable

import yaml


def load_yaml(file_path: str | Path) -> Any:
    """Parse a YAML file without further processing.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the YAML is invalid
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")

    data = yaml.safe_load(path.read_text())
    return {} if data is None else data


def expand_env_vars(data: Any) -> Any:
    """Expand environment variables in strings nested anywhere in data.

    Undefined variables are left as written (``${MISSING}`` stays as-is).
    """
    if isinstance(data, str):
        return os.path.expandvars(data)
    if isinstance(data, dict):
        return {key: expand_env_vars(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return type(data)(expand_env_vars(item) for item in data)
    return data


def resolve_paths(values: Iterable[str | Path], base: Path) -> list[str]:
    """Absolute form of each path, relative ones taken from base."""
    return [
        str(Path(value)) if Path(value).is_absolute() else str((base / value).resolve())
        for value in values
    ]

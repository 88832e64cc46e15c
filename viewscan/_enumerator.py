# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Enumerate the modules living under a namespace prefix.

Path entries are grouped (see ModuleLoader.path_groups). Groups are tried in
order and the first group where the namespace exists wins; later groups are
not consulted. Inside a group, every entry holding the namespace directory
contributes modules, either by walking the directory or by listing a zip
archive.

Logging Strategy:
    - DEBUG: excluded packages, unsupported path entries, failed groups
    - WARNING: namespace not found anywhere, whole-path scans
"""

import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from viewscan._loading import ModuleLoader
from viewscan.constants import EXCLUDED_PREFIXES

logger = logging.getLogger(__name__)


def normalize_namespace(namespace: str) -> str:
    """Convert 'pkg/sub/' or '.pkg.sub' to 'pkg.sub'."""
    return re.sub(r"[./\\]+", ".", namespace.strip()).strip(".")


def is_excluded(module_name: str, prefixes: Iterable[str]) -> bool:
    """Whether a module name equals or lives under one of the prefixes."""
    return any(
        module_name == prefix or module_name.startswith(prefix + ".")
        for prefix in prefixes
    )


def _join(package: str, name: str) -> str:
    return f"{package}.{name}" if package else name


@dataclass(frozen=True)
class _Resource:
    """Where a namespace was found inside one path entry."""

    kind: str  # 'directory' | 'module' | 'archive'
    path: Path
    package: str


class NamespaceEnumerator:
    """Lists importable module names under a namespace.

    Args:
        loader: Supplies the path groups to search
        excluded_prefixes: Module prefixes never yielded
    """

    def __init__(self, loader: ModuleLoader, excluded_prefixes: Iterable[str] = EXCLUDED_PREFIXES):
        self.loader = loader
        self.excluded_prefixes = frozenset(excluded_prefixes)

    def iter_module_names(self, namespace: str) -> list[str]:
        """Module names under the namespace, de-duplicated, in walk order.

        Args:
            namespace: Dotted or slash-separated prefix; '' scans every entry

        Raises:
            Whatever the last path group raised while being walked
        """
        namespace = normalize_namespace(namespace)
        if not namespace:
            logger.warning("Scanning every path entry for views; pass a namespace to limit the scan")

        groups = self.loader.path_groups()
        for index, group in enumerate(groups):
            try:
                resources = [
                    resource
                    for entry in group
                    if (resource := self._locate(Path(entry), namespace)) is not None
                ]
                if not resources:
                    continue
                names: dict[str, None] = {}
                for resource in resources:
                    names.update(dict.fromkeys(self._walk(resource)))
                return list(names)
            except Exception as e:
                if index == len(groups) - 1:
                    raise
                logger.debug(f"Failed to scan path group {index} for '{namespace}': {e}")

        logger.warning(f"No modules found for namespace '{namespace}'")
        return []

    # ------------------------------------------------------------------------
    # Locating
    # ------------------------------------------------------------------------

    def _locate(self, entry: Path, namespace: str) -> _Resource | None:
        relative = namespace.replace(".", "/")

        if entry.is_dir():
            candidate = entry / relative if relative else entry
            if candidate.is_dir():
                return _Resource("directory", candidate, namespace)
            if relative and candidate.with_suffix(".py").is_file():
                return _Resource("module", candidate.with_suffix(".py"), namespace)
            return None

        if entry.is_file() and zipfile.is_zipfile(entry):
            prefix = relative + "/" if relative else ""
            with zipfile.ZipFile(entry) as archive:
                if any(item.startswith(prefix) for item in archive.namelist()):
                    return _Resource("archive", entry, namespace)
            return None

        if entry.exists():
            logger.debug(f"Unsupported path entry kind, skipping: {entry}")
        return None

    def _walk(self, resource: _Resource) -> Iterator[str]:
        if resource.kind == "directory":
            yield from self._walk_directory(resource.path, resource.package)
        elif resource.kind == "module":
            if not is_excluded(resource.package, self.excluded_prefixes):
                yield resource.package
        elif resource.kind == "archive":
            yield from self._walk_archive(resource.path, resource.package)
        else:
            logger.debug(f"Unsupported resource kind '{resource.kind}' at {resource.path}")

    # ------------------------------------------------------------------------
    # Walkers
    # ------------------------------------------------------------------------

    def _walk_directory(self, directory: Path, package: str) -> Iterator[str]:
        if package and is_excluded(package, self.excluded_prefixes):
            logger.debug(f"Skipping excluded package: {package}")
            return

        if package and (directory / "__init__.py").is_file():
            yield package

        for child in sorted(directory.iterdir()):
            if child.is_dir():
                if child.name.isidentifier() and child.name != "__pycache__":
                    yield from self._walk_directory(child, _join(package, child.name))
            elif child.suffix == ".py" and child.stem != "__init__" and child.stem.isidentifier():
                name = _join(package, child.stem)
                if not is_excluded(name, self.excluded_prefixes):
                    yield name

    def _walk_archive(self, archive_path: Path, package: str) -> Iterator[str]:
        prefix = package.replace(".", "/") + "/" if package else ""
        with zipfile.ZipFile(archive_path) as archive:
            entries = sorted(archive.namelist())

        for entry in entries:
            if not entry.startswith(prefix) or not entry.endswith((".py", ".pyc")):
                continue
            parts = entry.rsplit(".", 1)[0].split("/")
            if parts[-1] == "__init__":
                parts = parts[:-1]
            if not parts or "__pycache__" in parts or not all(p.isidentifier() for p in parts):
                continue
            name = ".".join(parts)
            if not is_excluded(name, self.excluded_prefixes):
                yield name

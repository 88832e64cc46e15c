# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Module loading for namespace scans.

ModuleLoader wraps the import system so scans can be observed or stubbed
in tests. load_unit() classifies failures: a module that does not exist or
whose dependencies are missing is skipped, everything else is fatal.

Logging Strategy:
    - DEBUG: skipped modules (not found, dependencies missing), evictions
"""

import importlib
import inspect
import logging
import os
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


def _defining_path_entry() -> str:
    """The sys.path entry viewscan itself was imported from."""
    return str(Path(__file__).resolve().parent.parent)


class ModuleLoader:
    """Import-system access used by the scanner.

    Args:
        search_paths: Extra path entries searched before anything else
    """

    def __init__(self, search_paths: Iterable[str | Path] = ()):
        self.search_paths = [os.path.abspath(p) for p in search_paths]

    def path_groups(self) -> list[list[str]]:
        """Path entries to search, grouped and ordered.

        Groups are tried in order until one yields the namespace:
        configured search paths, viewscan's own path entry, then sys.path.
        An entry appearing in several groups is kept only in the first.
        """
        groups = [self.search_paths, [_defining_path_entry()], list(sys.path)]

        seen: set[str] = set()
        result = []
        for group in groups:
            unique = []
            for entry in group:
                # '' on sys.path means the current directory
                resolved = os.path.abspath(entry or os.getcwd())
                if resolved not in seen:
                    seen.add(resolved)
                    unique.append(resolved)
            if unique:
                result.append(unique)
        return result

    def load(self, name: str) -> ModuleType:
        """Import a module by name, with the search paths importable."""
        for entry in reversed(self.search_paths):
            if entry not in sys.path:
                sys.path.insert(0, entry)
                logger.debug(f"Added search path to sys.path: {entry}")
        return importlib.import_module(name)

    def evict(self, names: Iterable[str]) -> None:
        """Forget imported modules so the next load re-executes them.

        All modules of a namespace are evicted together before any is
        reloaded; a module importing a sibling then sees the sibling's new
        objects rather than those of the previous import.
        """
        evicted = [name for name in names if sys.modules.pop(name, None) is not None]
        importlib.invalidate_caches()
        if evicted:
            logger.debug(f"Evicted {len(evicted)} modules for reload")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(search_paths={self.search_paths!r})"


def load_unit(loader: ModuleLoader, name: str) -> ModuleType | None:
    """Load a module, returning None for benign failures.

    Raises:
        Anything other than ImportError raised while executing the module
    """
    try:
        return loader.load(name)
    except ModuleNotFoundError as e:
        if e.name == name:
            logger.debug(f"Module not found: {name}")
        else:
            logger.debug(f"Dependencies missing for {name}: {e}")
        return None
    except ImportError as e:
        logger.debug(f"Dependencies missing for {name}: {e}")
        return None


def iter_units(module: ModuleType) -> Iterator[type | ModuleType]:
    """Yield classes defined at the top level of a module, then the module itself."""
    for name, value in list(vars(module).items()):
        if (
            inspect.isclass(value)
            and value.__module__ == module.__name__
            and value.__qualname__ == name
        ):
            yield value
    yield module

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Shared runtime state: process-wide scan caches.

Two caches exist, one per ScanMode, so precomputed and reload registries of
the same namespace never share state. Each entry is a memoized Future: the
first caller of a key runs the scan, concurrent callers wait on the same
Future and observe the same result or the same exception. A failed scan
leaves no entry behind.
"""

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Mapping

from viewscan._metadata import ScanKey, ScanMode, ViewBinding
from viewscan._resolver import ResolutionCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """A published registry and its resolution memo."""

    key: ScanKey
    bindings: Mapping[type, ViewBinding]
    resolution_cache: ResolutionCache


class ScanCache:
    """Compute-if-absent cache of ScanResults keyed by ScanKey."""

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._entries: dict[ScanKey, Future] = {}

    def get_or_scan(self, key: ScanKey, scan: Callable[[], ScanResult]) -> ScanResult:
        """Return the cached result for key, running scan at most once."""
        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._entries[key] = future

        if owner:
            self._run(key, future, scan)
        else:
            logger.debug(f"{self.name}: reusing scan of {key}")
        return future.result()

    def refresh(self, key: ScanKey, scan: Callable[[], ScanResult]) -> ScanResult:
        """Replace the entry for key with a fresh scan.

        A caller arriving while a scan of key is still running shares that
        scan instead of starting another.
        """
        with self._lock:
            current = self._entries.get(key)
            owner = current is None or current.done()
            if owner:
                future = Future()
                self._entries[key] = future
            else:
                future = current

        if owner:
            self._run(key, future, scan)
        return future.result()

    def _run(self, key: ScanKey, future: Future, scan: Callable[[], ScanResult]) -> None:
        try:
            result = scan()
        except BaseException as e:
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            logger.debug(f"{self.name}: scan of {key} failed: {e}")
            future.set_exception(e)
        else:
            future.set_result(result)

    def invalidate(self, key: ScanKey) -> bool:
        """Drop a completed entry. Returns whether one was removed."""
        with self._lock:
            future = self._entries.get(key)
            if future is None or not future.done():
                return False
            del self._entries[key]
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries = {k: f for k, f in self._entries.items() if not f.done()}

    def __contains__(self, key: ScanKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_scan_caches: dict[ScanMode, ScanCache] = {
    ScanMode.PRECOMPUTED: ScanCache("precomputed"),
    ScanMode.RELOAD: ScanCache("reload"),
}


def cache_for(mode: ScanMode) -> ScanCache:
    return _scan_caches[mode]


def reset_registries() -> None:
    """Drop every cached namespace scan, in both modes.

    Renderers already built keep the registry they hold. Primarily used
    for testing and as an explicit reload trigger.

    Example:
        >>> from viewscan import reset_registries
        >>> reset_registries()
    """
    for cache in _scan_caches.values():
        cache.clear()

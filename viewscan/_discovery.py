# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Namespace scan: enumerate, load, provision and scan every unit.

scan_namespace() is the one place the pipeline is assembled. It returns a
frozen (model type -> ViewBinding) mapping; caching lives in _state.

Logging Strategy:
    - DEBUG: per-module and per-class progress, timing (VIEWSCAN_PROFILE=1)
    - INFO: scan start and completion with binding counts
    - WARNING: namespace produced no modules (from the enumerator)
"""

import inspect
import logging
import os
import time
from contextlib import contextmanager
from typing import Mapping

from viewscan._enumerator import NamespaceEnumerator, normalize_namespace
from viewscan._loading import ModuleLoader, iter_units, load_unit
from viewscan._metadata import ScanMode, ViewBinding
from viewscan._provisioning import provision_instance, should_skip_class
from viewscan._registry import ViewRegistry
from viewscan._scanner import MemberScanner
from viewscan.constants import EXCLUDED_PREFIXES
from viewscan.views import ViewEngine

logger = logging.getLogger(__name__)


# ============================================================================
# Performance Instrumentation
# ============================================================================

@contextmanager
def _measure_scan(operation: str, target: str = ""):
    """Time and log a scan phase (only when VIEWSCAN_PROFILE is set)."""
    if not os.environ.get('VIEWSCAN_PROFILE'):
        yield
        return

    label = f"{operation}({target})" if target else operation
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{label}: {duration_ms:.1f}ms")


# ============================================================================
# Scan Pipeline
# ============================================================================

def scan_namespace(
    namespace: str,
    mode: ScanMode = ScanMode.PRECOMPUTED,
    loader: ModuleLoader | None = None,
    engine: ViewEngine | None = None,
    settings=None,
) -> Mapping[type, ViewBinding]:
    """Build the view registry for every module under a namespace.

    Args:
        namespace: Dotted or slash-separated package prefix
        mode: RELOAD evicts and re-imports the namespace's modules
        loader: Import-system access (defaults to ModuleLoader over settings.search_paths)
        engine: Passed to constructors and accessors taking a ViewEngine
        settings: ScanSettings (defaults to get_config())

    Returns:
        Immutable mapping of model type to binding

    Raises:
        DuplicateViewError: If two distinct views target the same model type
        Exception: Any non-import failure while loading or scanning a module
    """
    if settings is None:
        from viewscan.settings import get_config
        settings = get_config()

    namespace = normalize_namespace(namespace)
    loader = loader or ModuleLoader(settings.search_paths)
    enumerator = NamespaceEnumerator(loader, EXCLUDED_PREFIXES | set(settings.excluded_prefixes))
    registry = ViewRegistry()
    scanner = MemberScanner(registry, engine=engine, precompile=mode.precompile)
    fresh = mode is ScanMode.RELOAD

    logger.info(f"Scanning namespace '{namespace}' for views ({mode})...")

    with _measure_scan("scan_namespace", namespace):
        module_names = enumerator.iter_module_names(namespace)
        if fresh and namespace:
            loader.evict(module_names)
        for module_name in module_names:
            with _measure_scan("scan_module", module_name):
                _scan_module(module_name, loader, scanner, engine)

    logger.info(
        f"Scanned {len(module_names)} modules in '{namespace}', found {len(registry)} views"
    )
    return registry.freeze()


def _scan_module(
    module_name: str,
    loader: ModuleLoader,
    scanner: MemberScanner,
    engine: ViewEngine | None,
) -> None:
    module = load_unit(loader, module_name)
    if module is None:
        return

    for unit in iter_units(module):
        if inspect.ismodule(unit):
            scanner.scan_module(unit)
            continue

        instance = None
        if not should_skip_class(unit):
            instance = provision_instance(unit, engine)
        else:
            logger.debug(f"Not instantiating {unit.__qualname__}, scanning class members only")
        scanner.scan_class(unit, instance)

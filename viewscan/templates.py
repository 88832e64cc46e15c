# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Entry points: build a render dispatcher for a namespace.

Example:
    >>> from viewscan import build_registry
    >>> render = build_registry("myapp.views")
    >>> render(Person("Bob", 45))
    '<html><body>...Bob is 45...</body></html>'

Modes:
    - PRECOMPUTED: the namespace is scanned once per process; every
      dispatcher for it shares the registry and resolution cache
    - RELOAD: the namespace is scanned when the dispatcher is built and
      again before every dispatch, so source edits are picked up
"""

import logging
from typing import Any, Mapping

from viewscan._discovery import scan_namespace
from viewscan._enumerator import normalize_namespace
from viewscan._invoker import render_binding
from viewscan._loading import ModuleLoader
from viewscan._metadata import ScanKey, ScanMode, ViewBinding
from viewscan._resolver import ResolutionCache, ViewResolver
from viewscan._state import ScanResult, cache_for
from viewscan.exceptions import UnsupportedTemplatesOperation
from viewscan.views import ViewEngine

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Callable dispatching a model to the view bound to its type.

    Built by build_registry(); not meant to be constructed directly.
    """

    def __init__(self, key: ScanKey, scan, assignable_fallback: bool = True):
        self.key = key
        self.assignable_fallback = assignable_fallback
        self._scan = scan
        self._cache = cache_for(key.mode)
        if key.mode is ScanMode.RELOAD:
            self._result = self._cache.refresh(key, scan)
        else:
            self._result = self._cache.get_or_scan(key, scan)

    @property
    def namespace(self) -> str:
        return self.key.namespace

    @property
    def mode(self) -> ScanMode:
        return self.key.mode

    @property
    def bindings(self) -> Mapping[type, ViewBinding]:
        return self._result.bindings

    @property
    def resolution_cache(self) -> ResolutionCache:
        return self._result.resolution_cache

    def resolve(self, model: Any) -> ViewBinding:
        """Binding that would render this model, without rendering.

        Raises:
            NoCompatibleViewError: If no registered type matches
        """
        if self.key.mode is ScanMode.RELOAD:
            self._result = self._cache.refresh(self.key, self._scan)
        result = self._result
        return ViewResolver(result.bindings, result.resolution_cache, self.assignable_fallback).resolve(model)

    def __call__(self, model: Any) -> str:
        """Render a model with the view bound to its type.

        Raises:
            NoCompatibleViewError: If no registered type matches
            ViewRenderError: If the view raised while rendering
        """
        return render_binding(self.resolve(model), model)

    def __repr__(self) -> str:
        return f"TemplateRenderer({self.key}, {len(self.bindings)} views)"


def build_registry(
    namespace: str,
    mode: ScanMode | str = ScanMode.PRECOMPUTED,
    *,
    engine: ViewEngine | None = None,
    loader: ModuleLoader | None = None,
    settings=None,
) -> TemplateRenderer:
    """Scan a namespace for views and return a render dispatcher.

    Registries are cached per (namespace, mode) for the whole process, so
    the engine and loader of the first build of a key are the ones used.

    Args:
        namespace: Dotted ('myapp.views') or slash-separated ('myapp/views') prefix
        mode: ScanMode or its string value
        engine: ViewEngine for classes and accessors taking one
        loader: Import-system access (tests pass doubles here)
        settings: ScanSettings (defaults to get_config())

    Raises:
        DuplicateViewError: If two distinct views target the same model type
    """
    if settings is None:
        from viewscan.settings import get_config
        settings = get_config()

    if isinstance(mode, str):
        mode = ScanMode.from_string(mode)
    key = ScanKey(normalize_namespace(namespace), mode)

    def scan() -> ScanResult:
        bindings = scan_namespace(key.namespace, mode, loader=loader, engine=engine, settings=settings)
        return ScanResult(key, bindings, ResolutionCache())

    return TemplateRenderer(key, scan, assignable_fallback=settings.assignable_fallback)


class ViewTemplates:
    """Factory for template renderers, by namespace.

    Directory-based template loading is not available; views are always
    discovered by scanning importable modules.
    """

    def __init__(self, engine: ViewEngine | None = None, loader: ModuleLoader | None = None):
        self.engine = engine
        self.loader = loader

    def caching(self, base_template_dir: str = "./") -> TemplateRenderer:
        raise UnsupportedTemplatesOperation(
            "Template directory caching is not supported. Use caching_namespace() instead."
        )

    def hot_reload(self, base_template_dir: str = "./") -> TemplateRenderer:
        raise UnsupportedTemplatesOperation(
            "Template directory hot reload is not supported. Use hot_reload_namespace() instead."
        )

    def caching_namespace(self, namespace: str) -> TemplateRenderer:
        return build_registry(namespace, ScanMode.PRECOMPUTED, engine=self.engine, loader=self.loader)

    def hot_reload_namespace(self, namespace: str) -> TemplateRenderer:
        """Reload dispatcher; also accepts a slash-separated source path."""
        return build_registry(namespace, ScanMode.RELOAD, engine=self.engine, loader=self.loader)

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
viewscan: namespace-scanned view registries

Declare views anywhere under a package and render models without wiring:
viewscan scans the package, binds each view to the model type it declares,
and dispatches models to views by type (falling back to ancestors).

Quick Start:
    >>> # myapp/views/people.py
    >>> person_view: View[Person] = TemplateView("<p>{{ model.name }}</p>")
    >>>
    >>> from viewscan import build_registry
    >>> render = build_registry("myapp.views")
    >>> render(Person("Bob", 45))
    '<p>Bob</p>'

Development (re-scan on every render):
    >>> render = build_registry("myapp.views", ScanMode.RELOAD)
"""

__version__ = "0.1.0"

from ._metadata import ScanKey, ScanMode, ViewBinding
from ._state import reset_registries
from .exceptions import (
    DuplicateViewError,
    NoCompatibleViewError,
    UnsupportedTemplatesOperation,
    UnsupportedViewError,
    ViewConfigurationError,
    ViewModelMismatchError,
    ViewRenderError,
    ViewscanError,
)
from .templates import TemplateRenderer, ViewTemplates, build_registry
from .views import (
    AsyncTemplateView,
    AsyncView,
    BaseView,
    FunctionView,
    TemplateView,
    View,
    ViewEngine,
    renderer,
)

__all__ = [
    # Entry points
    "build_registry",
    "TemplateRenderer",
    "ViewTemplates",
    "reset_registries",
    "ScanMode",
    "ScanKey",
    "ViewBinding",
    # Views
    "BaseView",
    "View",
    "AsyncView",
    "TemplateView",
    "AsyncTemplateView",
    "FunctionView",
    "ViewEngine",
    "renderer",
    # Errors
    "ViewscanError",
    "ViewConfigurationError",
    "DuplicateViewError",
    "NoCompatibleViewError",
    "ViewRenderError",
    "ViewModelMismatchError",
    "UnsupportedViewError",
    "UnsupportedTemplatesOperation",
]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""View contracts and the jinja2-backed markup engine.

A view is anything that turns a model into markup. Two contracts exist:

- View[M]: synchronous, ``render(model) -> str``
- AsyncView[M]: asynchronous, ``render_async(model)`` returns an awaitable
  or a ``concurrent.futures.Future`` resolving to ``str``

The model type M is what the namespace scanner binds views by, so declare
it either through the class (``class HomeView(View[Home])``) or through the
annotation of the member holding the view (``home: View[Home] = ...``).

Example:
    >>> engine = ViewEngine()
    >>> person_view: View[Person] = engine.view("<p>{{ model.name }}</p>")
    >>> person_view.render(Person("Bob", 45))
    '<p>Bob</p>'
"""

import copy
import logging
from functools import lru_cache
from typing import Any, Awaitable, Callable, Generic, TypeVar

import jinja2

logger = logging.getLogger(__name__)

M = TypeVar("M")


class BaseView(Generic[M]):
    """Marker base shared by every view contract."""

    def configured(self, precompile: bool) -> "BaseView[M]":
        """Return this view adapted to a scan mode.

        Precomputed scans pass ``precompile=True`` so views may cache expensive
        preparation; reload scans pass ``False`` so edits show up immediately.
        """
        return self


class View(BaseView[M]):
    """Synchronous view."""

    def render(self, model: M) -> str:
        raise NotImplementedError


class AsyncView(BaseView[M]):
    """Asynchronous view."""

    def render_async(self, model: M) -> Awaitable[str]:
        raise NotImplementedError


class _TemplateMixin:
    """Shared compile-once / compile-every-time handling for template views."""

    def __init__(self, source: str, environment: jinja2.Environment, precompile: bool = True):
        self.source = source
        self.environment = environment
        self.precompile = precompile
        self._template: jinja2.Template | None = None

    def _get_template(self) -> jinja2.Template:
        if not self.precompile:
            return self.environment.from_string(self.source)
        if self._template is None:
            self._template = self.environment.from_string(self.source)
        return self._template

    def configured(self, precompile: bool):
        if precompile == self.precompile:
            return self
        # copy.copy keeps __orig_class__, so the declared model type survives
        clone = copy.copy(self)
        clone.precompile = precompile
        clone._template = None
        return clone

    def __repr__(self) -> str:
        preview = self.source if len(self.source) <= 40 else self.source[:37] + "..."
        return f"{type(self).__name__}({preview!r}, precompile={self.precompile})"


class TemplateView(_TemplateMixin, View[M]):
    """jinja2 template rendered with the model bound to ``model``."""

    def __init__(
        self,
        source: str,
        environment: jinja2.Environment | None = None,
        precompile: bool = True,
    ):
        super().__init__(source, environment or default_engine().environment, precompile)

    def render(self, model: M) -> str:
        return self._get_template().render(model=model)


class AsyncTemplateView(_TemplateMixin, AsyncView[M]):
    """jinja2 template rendered through jinja2's async API."""

    def __init__(
        self,
        source: str,
        environment: jinja2.Environment | None = None,
        precompile: bool = True,
    ):
        super().__init__(source, environment or default_engine().async_environment, precompile)

    async def render_async(self, model: M) -> str:
        return await self._get_template().render_async(model=model)


class FunctionView(View[M]):
    """Adapts a plain ``model -> str`` callable to the View contract."""

    def __init__(self, fn: Callable[[M], str]):
        self.fn = fn

    def render(self, model: M) -> str:
        return self.fn(model)

    def __repr__(self) -> str:
        return f"FunctionView({getattr(self.fn, '__qualname__', self.fn)!r})"


class ViewEngine:
    """Markup engine configuration shared by the views it creates.

    This is the one configuration argument scanned classes and accessor
    methods may accept: a class whose constructor takes a single ViewEngine
    is instantiated with the engine passed to ``build_registry``.

    Args:
        autoescape: HTML-escape interpolated values
        trim_blocks: Remove the first newline after a block tag
        lstrip_blocks: Strip whitespace before block tags
        strict: Raise on undefined template variables instead of rendering ''
    """

    def __init__(
        self,
        autoescape: bool = True,
        trim_blocks: bool = True,
        lstrip_blocks: bool = True,
        strict: bool = True,
    ):
        options: dict[str, Any] = dict(
            autoescape=autoescape,
            trim_blocks=trim_blocks,
            lstrip_blocks=lstrip_blocks,
            undefined=jinja2.StrictUndefined if strict else jinja2.Undefined,
        )
        self.options = options
        self.environment = jinja2.Environment(**options)
        self.async_environment = jinja2.Environment(enable_async=True, **options)

    @classmethod
    def from_settings(cls, settings) -> "ViewEngine":
        """Build an engine from ScanSettings."""
        return cls(autoescape=settings.autoescape, strict=settings.strict_undefined)

    def view(self, source: str, precompile: bool = True) -> TemplateView:
        return TemplateView(source, self.environment, precompile)

    def view_async(self, source: str, precompile: bool = True) -> AsyncTemplateView:
        return AsyncTemplateView(source, self.async_environment, precompile)

    def __repr__(self) -> str:
        return f"ViewEngine(autoescape={self.options['autoescape']})"


@lru_cache(maxsize=1)
def default_engine() -> ViewEngine:
    """Process-wide engine used when a view is created without one."""
    return ViewEngine()


def renderer(view: BaseView, model_type: type | None = None) -> Callable[[Any], str]:
    """Wrap a single view as a type-checked ``model -> str`` callable.

    The expected model type is taken from ``model_type`` or, when omitted,
    recovered from the view's declared type. Async views are awaited
    synchronously.

    Raises:
        ViewModelMismatchError: If the expected type does not support
            isinstance checks (a Protocol without @runtime_checkable), or,
            from the returned callable, if the model is not an instance of it
    """
    from viewscan._invoker import invoke_view
    from viewscan._types import declared_type_of, extract_model_type
    from viewscan.exceptions import ViewModelMismatchError

    expected = model_type or extract_model_type(declared_type_of(view))
    view_name = type(view).__name__

    if expected is not None:
        try:
            isinstance(None, expected)
        except TypeError as e:
            raise ViewModelMismatchError(
                f"Cannot check models for view {view_name} against {expected!r}: {e}"
            ) from e

    def render(model: Any) -> str:
        if expected is not None and not isinstance(model, expected):
            raise ViewModelMismatchError(
                f"ViewModel type mismatch for view {view_name}. "
                f"Expected: {expected.__name__}, Got: {type(model).__name__}"
            )
        return invoke_view(view, model)

    return render

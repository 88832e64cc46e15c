# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Type extraction: recover the model type a view declaration accepts.

Declarations come from three places:
- annotations (``home: View[Home]``, ``def home(self) -> View[Home]``)
- ``__orig_class__`` of instances created as ``TemplateView[Home](...)``
- the class of a view subclass (``class HomeView(View[Home])``)
"""

import inspect
import logging
import sys
import types
import typing
from typing import Any, ClassVar, Final, Union, get_args, get_origin

from viewscan.views import BaseView

logger = logging.getLogger(__name__)

_WRAPPERS = (ClassVar, Final)


def _unwrap(declared: Any) -> Any:
    """Strip ClassVar/Final and single-member Optional wrappers."""
    origin = get_origin(declared)
    if origin in _WRAPPERS:
        args = get_args(declared)
        return _unwrap(args[0]) if args else declared
    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(declared) if a is not type(None)]
        if len(members) == 1:
            return _unwrap(members[0])
    return declared


def _is_view_class(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, BaseView)


def is_view_type(declared: Any) -> bool:
    """Whether a declared type denotes a view."""
    declared = _unwrap(declared)
    return _is_view_class(get_origin(declared) or declared)


def declared_type_of(value: Any) -> Any:
    """Runtime type of a value, preferring its parameterized origin class."""
    return getattr(value, "__orig_class__", None) or type(value)


def extract_model_type(declared: Any) -> type | None:
    """Model type accepted by a declared view type, or None if not recoverable.

    Example:
        >>> extract_model_type(View[Person])
        <class 'Person'>
        >>> extract_model_type(View)  # unparameterized
    """
    declared = _unwrap(declared)
    origin = get_origin(declared)

    if origin is not None:
        if not _is_view_class(origin):
            return None
        args = get_args(declared)
        if not args:
            return None
        model = args[0]
        if model is typing.Any:
            return object
        if isinstance(model, type):
            return model
        # TypeVar, string forward reference, or another special form
        return None

    if _is_view_class(declared):
        return _extract_from_class(declared)

    return None


def _extract_from_class(cls: type) -> type | None:
    # Only the class's own __orig_bases__; attribute lookup would find a parent's
    for base in cls.__dict__.get("__orig_bases__", ()):
        if get_origin(base) is not None:
            model = extract_model_type(base)
            if model is not None:
                return model

    for base in cls.__bases__:
        if base is not object and _is_view_class(base):
            model = _extract_from_class(base)
            if model is not None:
                return model

    return None


def _annotation_namespaces(owner: Any) -> tuple[dict[str, Any], dict[str, Any] | None]:
    """Globals and locals string annotations of owner are evaluated in."""
    if isinstance(owner, types.ModuleType):
        return vars(owner), None
    if isinstance(owner, type):
        module = sys.modules.get(owner.__module__)
        return (vars(module) if module is not None else {}), dict(vars(owner))
    return getattr(inspect.unwrap(owner), "__globals__", {}), None


def own_annotations(owner: Any) -> dict[str, Any]:
    """Annotations declared directly on a class, module or function.

    String annotations are evaluated one at a time; one that cannot be
    resolved (a name imported only under TYPE_CHECKING, say) is dropped
    without affecting the others.
    """
    try:
        raw = inspect.get_annotations(owner)
    except Exception as e:
        logger.debug(f"Could not read annotations of {owner!r}: {e}")
        return {}

    if not any(isinstance(value, str) for value in raw.values()):
        return raw

    global_ns, local_ns = _annotation_namespaces(owner)
    annotations = {}
    for name, value in raw.items():
        if not isinstance(value, str):
            annotations[name] = value
            continue
        try:
            annotations[name] = eval(value, global_ns, local_ns)
        except Exception as e:
            logger.debug(f"Could not evaluate annotation {name}: {value!r} of {owner!r}: {e}")
    return annotations


def return_annotation(func: Any) -> Any | None:
    """Declared return type of a function, or None when unannotated."""
    return own_annotations(func).get("return")

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Obtain an instance of a scanned class so its instance views can be read.

Strategies, first success wins:
1. ``INSTANCE`` class attribute holding an instance (singleton objects)
2. ``_instance`` class attribute, or ``Companion.INSTANCE``
3. ``get_instance()`` static or class method
4. zero-argument constructor
5. single-argument constructor taking a ViewEngine (only with an engine)

A class with no obtainable instance still has its class-level views scanned.
"""

import enum
import inspect
import logging
from typing import Any, Callable

from viewscan.constants import (
    COMPANION_ATTRIBUTE,
    COMPANION_CLASS,
    INSTANCE_ACCESSOR,
    SINGLETON_ATTRIBUTE,
)
from viewscan.views import BaseView, ViewEngine

logger = logging.getLogger(__name__)


def should_skip_class(cls: type) -> bool:
    """Classes never instantiated: abstract, protocols, enums and views."""
    return (
        inspect.isabstract(cls)
        or getattr(cls, "_is_protocol", False)
        or issubclass(cls, enum.Enum)
        or issubclass(cls, BaseView)
    )


def _singleton_attribute(cls: type) -> Any:
    value = cls.__dict__.get(SINGLETON_ATTRIBUTE)
    return value if isinstance(value, cls) else None


def _companion_instance(cls: type) -> Any:
    value = cls.__dict__.get(COMPANION_ATTRIBUTE)
    if isinstance(value, cls):
        return value

    companion = cls.__dict__.get(COMPANION_CLASS)
    if inspect.isclass(companion):
        value = getattr(companion, SINGLETON_ATTRIBUTE, None)
        if isinstance(value, cls):
            return value
    return None


def _instance_accessor(cls: type) -> Any:
    raw = inspect.getattr_static(cls, INSTANCE_ACCESSOR, None)
    if not isinstance(raw, (staticmethod, classmethod)):
        return None
    value = getattr(cls, INSTANCE_ACCESSOR)()
    return value if isinstance(value, cls) else None


def _default_constructor(cls: type) -> Any:
    return cls()


def _required_parameters(cls: type) -> list[inspect.Parameter]:
    try:
        signature = inspect.signature(cls, eval_str=True)
    except NameError:
        signature = inspect.signature(cls)
    return [
        p for p in signature.parameters.values()
        if p.default is p.empty and p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]


def accepts_engine(parameter: inspect.Parameter) -> bool:
    """Whether a parameter is the single configuration argument."""
    annotation = parameter.annotation
    if annotation is parameter.empty:
        return parameter.name == "engine"
    return isinstance(annotation, type) and issubclass(annotation, ViewEngine)


def _engine_constructor(cls: type, engine: ViewEngine) -> Any:
    required = _required_parameters(cls)
    if len(required) != 1 or not accepts_engine(required[0]):
        return None
    return cls(engine)


_STRATEGIES: list[tuple[str, Callable[[type], Any]]] = [
    ("singleton attribute", _singleton_attribute),
    ("companion instance", _companion_instance),
    ("instance accessor", _instance_accessor),
    ("default constructor", _default_constructor),
]


def provision_instance(cls: type, engine: ViewEngine | None = None) -> Any | None:
    """Try each strategy in order; None when every one fails."""
    strategies = list(_STRATEGIES)
    if engine is not None:
        strategies.append(("engine constructor", lambda c: _engine_constructor(c, engine)))

    for label, strategy in strategies:
        try:
            instance = strategy(cls)
        except Exception as e:
            logger.debug(f"{label} failed for {cls.__qualname__}: {e}")
            continue
        if instance is not None:
            logger.debug(f"Provisioned {cls.__qualname__} via {label}")
            return instance

    logger.debug(f"No instance obtainable for {cls.__qualname__}")
    return None

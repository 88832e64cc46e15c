# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Read view declarations out of a class or module.

Accessor methods are scanned before fields. A member counts when its
declared type (annotation, return annotation, or runtime type of the value)
is a view type. Dunder members are never scanned.

Logging Strategy:
    - DEBUG: per-member skips (unannotated, needs instance, access failed)
"""

import dis
import functools
import inspect
import logging
from types import CodeType, ModuleType
from typing import Any, Callable

from viewscan._provisioning import accepts_engine
from viewscan._registry import ViewRegistry
from viewscan._types import declared_type_of, is_view_type, own_annotations, return_annotation
from viewscan.views import BaseView, ViewEngine

logger = logging.getLogger(__name__)

_NOT_FIELDS = (property, staticmethod, classmethod, functools.cached_property)


def _is_synthetic(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _assigned_attributes(init: Any) -> set[str] | None:
    """Attribute names a constructor's own code stores, None without bytecode."""
    code = getattr(inspect.unwrap(init), "__code__", None)
    if code is None:
        return None

    names = set()
    pending = [code]
    while pending:
        current = pending.pop()
        names.update(
            instruction.argval
            for instruction in dis.get_instructions(current)
            if instruction.opname == "STORE_ATTR"
        )
        pending.extend(c for c in current.co_consts if isinstance(c, CodeType))
    return names


class MemberScanner:
    """Registers every view a unit declares.

    Args:
        registry: Receives discovered bindings
        engine: Passed to accessor methods taking a ViewEngine
        precompile: Forwarded to ``View.configured`` for the scan mode
    """

    def __init__(self, registry: ViewRegistry, engine: ViewEngine | None = None, precompile: bool = True):
        self.registry = registry
        self.engine = engine
        self.precompile = precompile

    def scan_class(self, cls: type, instance: Any = None) -> None:
        owner = f"{cls.__module__}.{cls.__qualname__}"
        self._scan_methods(cls, instance, owner)
        self._scan_fields(cls, instance, owner)

    def scan_module(self, module: ModuleType) -> None:
        owner = module.__name__
        for name, value in list(vars(module).items()):
            if _is_synthetic(name) or not inspect.isfunction(value):
                continue
            if value.__module__ != owner or value.__name__ != name:
                continue
            self._scan_accessor(f"{owner}.{name}()", value, value)
        self._scan_module_fields(module, owner)

    # ------------------------------------------------------------------------
    # Accessor methods
    # ------------------------------------------------------------------------

    def _scan_methods(self, cls: type, instance: Any, owner: str) -> None:
        for name, raw in list(vars(cls).items()):
            if _is_synthetic(name):
                continue

            if isinstance(raw, staticmethod):
                func, bound, location = raw.__func__, raw.__func__, f"{owner}.{name}()"
            elif isinstance(raw, classmethod):
                func, bound, location = raw.__func__, getattr(cls, name), f"{owner}.{name}()"
            elif isinstance(raw, property) and raw.fget is not None:
                if instance is None:
                    continue
                func, location = raw.fget, f"{owner}.{name}"
                bound = functools.partial(getattr, instance, name)
            elif inspect.isfunction(raw):
                func, location = raw, f"{owner}.{name}()"
                bound = getattr(instance, name) if instance is not None else None
            else:
                continue

            if bound is None:
                if is_view_type(return_annotation(func)):
                    logger.debug(f"Skipping {location}: instance method and no instance available")
                continue
            self._scan_accessor(location, func, bound)

    def _scan_accessor(self, location: str, func: Callable, bound: Callable) -> None:
        declared = return_annotation(func)
        if declared is None or not is_view_type(declared):
            return

        call = self._accessor_call(location, bound)
        if call is None:
            return

        try:
            view = call()
        except Exception as e:
            logger.debug(f"Accessor {location} raised, skipping: {e}")
            return
        self._register(view, declared, location)

    def _accessor_call(self, location: str, bound: Callable) -> Callable[[], Any] | None:
        if isinstance(bound, functools.partial):
            return bound

        try:
            signature = inspect.signature(bound)
        except (TypeError, ValueError) as e:
            logger.debug(f"No signature for {location}: {e}")
            return None

        required = [
            p for p in signature.parameters.values()
            if p.default is p.empty and p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
        ]
        if not required:
            return bound
        if len(required) == 1 and self.engine is not None and accepts_engine(required[0]):
            return functools.partial(bound, self.engine)

        logger.debug(f"Skipping {location}: takes arguments")
        return None

    # ------------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------------

    def _scan_fields(self, cls: type, instance: Any, owner: str) -> None:
        hints = own_annotations(cls)
        class_vars = vars(cls)
        names = list(dict.fromkeys([*hints, *class_vars]))
        # Instance attributes belong to the class whose own constructor stores them
        if instance is not None and "__init__" in class_vars and hasattr(instance, "__dict__"):
            assigned = _assigned_attributes(class_vars["__init__"])
            names.extend(
                n for n in vars(instance)
                if n not in names and (assigned is None or n in assigned)
            )

        for name in names:
            if _is_synthetic(name):
                continue
            raw = class_vars.get(name)
            if inspect.isroutine(raw) or inspect.isclass(raw) or isinstance(raw, _NOT_FIELDS):
                continue

            location = f"{owner}.{name}"
            try:
                value = self._read_field(cls, instance, name, raw)
            except Exception as e:
                logger.debug(f"Field {location} not accessible, skipping: {e}")
                continue
            self._register_field(value, hints.get(name), location)

    @staticmethod
    def _read_field(cls: type, instance: Any, name: str, raw: Any) -> Any:
        if instance is not None:
            instance_vars = getattr(instance, "__dict__", {})
            if name in instance_vars:
                return instance_vars[name]
            if inspect.ismemberdescriptor(raw) or name not in vars(cls):
                return getattr(instance, name)
        if inspect.ismemberdescriptor(raw):
            return None
        return raw

    def _scan_module_fields(self, module: ModuleType, owner: str) -> None:
        hints = own_annotations(module)
        for name, value in list(vars(module).items()):
            if _is_synthetic(name):
                continue
            if inspect.ismodule(value) or inspect.isclass(value) or inspect.isroutine(value):
                continue
            self._register_field(value, hints.get(name), f"{owner}.{name}")

    def _register_field(self, value: Any, annotation: Any, location: str) -> None:
        if value is None:
            return
        if annotation is not None:
            if not is_view_type(annotation):
                return
            declared = annotation
        elif isinstance(value, BaseView):
            declared = declared_type_of(value)
        else:
            return
        self._register(value, declared, location)

    # ------------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------------

    def _register(self, view: Any, declared: Any, location: str) -> None:
        if view is None:
            logger.debug(f"{location} produced no view, skipping")
            return
        configured = view.configured(self.precompile) if isinstance(view, BaseView) else view
        self.registry.register(configured, declared, location, source=view)

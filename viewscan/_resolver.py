# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Resolve a model instance to the view that renders it.

Precedence, first match wins:
1. exact model type in the registry
2. resolution cache (earlier successful lookups)
3. ancestor chain: first-base chain upward, excluding ``object``
4. directly declared secondary bases, in declaration order
5. optional fallback: any registered type the model type is a subclass of

Successful lookups from steps 3-5 are memoized in the ResolutionCache.
"""

import logging
from typing import Any, Iterator, Mapping

from viewscan._metadata import ViewBinding
from viewscan.exceptions import NoCompatibleViewError

logger = logging.getLogger(__name__)


class ResolutionCache:
    """Memo of model type -> binding for types resolved by ancestry.

    Races between dispatches resolving the same type are benign: both
    resolve to the same binding and ``put_if_absent`` keeps the first.
    """

    def __init__(self):
        self._entries: dict[type, ViewBinding] = {}

    def get(self, model_type: type) -> ViewBinding | None:
        return self._entries.get(model_type)

    def put_if_absent(self, model_type: type, binding: ViewBinding) -> ViewBinding:
        return self._entries.setdefault(model_type, binding)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, model_type: type) -> bool:
        return model_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def iter_ancestors(model_type: type) -> Iterator[type]:
    """Walk ``__bases__[0]`` upward from the parent of model_type, stopping before object."""
    current = model_type.__bases__[0] if model_type.__bases__ else object
    while current is not object:
        yield current
        current = current.__bases__[0] if current.__bases__ else object


class ViewResolver:
    """Looks up bindings for model instances against one published registry."""

    def __init__(
        self,
        bindings: Mapping[type, ViewBinding],
        cache: ResolutionCache,
        assignable_fallback: bool = True,
    ):
        self.bindings = bindings
        self.cache = cache
        self.assignable_fallback = assignable_fallback

    def resolve(self, model: Any) -> ViewBinding:
        """Find the binding for a model instance.

        Raises:
            NoCompatibleViewError: If no registered type matches
        """
        return self.resolve_type(type(model))

    def resolve_type(self, model_type: type) -> ViewBinding:
        binding = self.bindings.get(model_type)
        if binding is not None:
            return binding

        binding = self.cache.get(model_type)
        if binding is not None:
            return binding

        binding = self._search(model_type)
        if binding is None:
            raise NoCompatibleViewError(model_type, list(self.bindings))

        logger.debug(f"Resolved {model_type.__name__} to {binding.location} via {binding.model_type.__name__}")
        return self.cache.put_if_absent(model_type, binding)

    def _search(self, model_type: type) -> ViewBinding | None:
        for ancestor in iter_ancestors(model_type):
            if ancestor in self.bindings:
                return self.bindings[ancestor]

        for interface in model_type.__bases__[1:]:
            if interface in self.bindings:
                return self.bindings[interface]

        if self.assignable_fallback:
            for registered, binding in self.bindings.items():
                try:
                    if issubclass(model_type, registered):
                        return binding
                except TypeError:
                    # Protocols without @runtime_checkable refuse issubclass()
                    continue

        return None

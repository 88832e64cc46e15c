# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Registry builder: accumulate (model type -> view) bindings for one scan.

A registry is built by exactly one scan and published read-only through
``freeze()``. Two distinct views for the same model type abort the scan.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping

from viewscan._metadata import ViewBinding
from viewscan._types import extract_model_type
from viewscan.exceptions import DuplicateViewError

logger = logging.getLogger(__name__)


class ViewRegistry:
    """Mutable binding table used while a namespace scan runs."""

    def __init__(self):
        self._bindings: dict[type, ViewBinding] = {}
        # Declared view objects, before configured(); used to spot re-exports
        self._sources: dict[type, Any] = {}

    def register(
        self,
        view: Any,
        declared_type: Any,
        location: str,
        source: Any = None,
    ) -> ViewBinding | None:
        """Bind a view under the model type recovered from its declaration.

        Args:
            view: View instance to bind (already configured for the scan mode)
            declared_type: Declared type of the member holding the view
            location: Provenance shown in errors and listings
            source: The object the member actually held, if ``view`` is a
                reconfigured copy of it

        Returns:
            The new binding, the existing one for a re-exported view, or None
            when no model type is recoverable.

        Raises:
            DuplicateViewError: If a different view is already bound to the model type
        """
        model_type = extract_model_type(declared_type)
        if model_type is None:
            logger.debug(f"No model type recoverable for {location} ({declared_type!r}), skipping")
            return None

        source = view if source is None else source
        existing = self._bindings.get(model_type)
        if existing is not None:
            if self._sources[model_type] is source:
                logger.debug(
                    f"View at {location} is the one already bound at {existing.location}, skipping"
                )
                return existing
            raise DuplicateViewError(model_type, existing.location, location)

        binding = ViewBinding(view=view, location=location, model_type=model_type)
        self._bindings[model_type] = binding
        self._sources[model_type] = source
        logger.debug(f"Bound {model_type.__name__} -> {location}")
        return binding

    def freeze(self) -> Mapping[type, ViewBinding]:
        """Publish the bindings as an immutable mapping."""
        return MappingProxyType(dict(self._bindings))

    @property
    def model_types(self) -> list[type]:
        return list(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, model_type: type) -> bool:
        return model_type in self._bindings

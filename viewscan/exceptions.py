# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Exception hierarchy for view discovery and rendering.

Scan-time errors (ViewConfigurationError and subclasses) abort registry
construction for a namespace. Render-time errors are raised per dispatch
and carry the failing location and model type in their message.
"""


class ViewscanError(Exception):
    """Base exception for all viewscan errors."""


class ViewConfigurationError(ViewscanError):
    """Fatal configuration problem found while scanning a namespace."""


class DuplicateViewError(ViewConfigurationError):
    """Two distinct views were declared for the same model type.

    Attributes:
        model_type: The model type bound twice
        existing_location: Location of the binding registered first
        new_location: Location of the conflicting binding
    """

    def __init__(self, model_type: type, existing_location: str, new_location: str):
        self.model_type = model_type
        self.existing_location = existing_location
        self.new_location = new_location
        super().__init__(
            f"Multiple views found for ViewModel type '{model_type.__name__}'. "
            f"Existing: {existing_location}, New: {new_location}"
        )


class NoCompatibleViewError(ViewscanError, LookupError):
    """No registered view accepts the model's type (directly or by ancestry)."""

    def __init__(self, model_type: type, available: list[type]):
        self.model_type = model_type
        self.available = list(available)
        names = ", ".join(t.__name__ for t in self.available)
        super().__init__(
            f"No compatible view found for ViewModel type: {model_type.__name__}. "
            f"Available views: {names}"
        )


class ViewRenderError(ViewscanError, RuntimeError):
    """A view raised while rendering. The original error is the __cause__."""


class ViewModelMismatchError(ViewscanError, TypeError):
    """A single-view renderer received a model of the wrong type."""


class UnsupportedViewError(ViewscanError, TypeError):
    """A registered object does not implement a known render contract."""


class UnsupportedTemplatesOperation(ViewscanError, NotImplementedError):
    """Directory-based template operations are not available."""

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Data structures shared by the scanning and resolution modules.

- ScanMode: precomputed (scan once) or reload (re-scan per dispatch)
- ScanKey: cache key for one namespace scan
- ViewBinding: one discovered (model type -> view) pairing
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ScanMode(Enum):
    """How a namespace registry is cached.

    Attributes:
        PRECOMPUTED: Scan once, cache for the lifetime of the process
        RELOAD: Re-scan before every dispatch, never share state with PRECOMPUTED
    """

    PRECOMPUTED = "precomputed"
    RELOAD = "reload"

    def __str__(self) -> str:
        return self.value

    @property
    def precompile(self) -> bool:
        """Whether views discovered in this mode may cache compiled templates."""
        return self is ScanMode.PRECOMPUTED

    @classmethod
    def from_string(cls, s: str) -> "ScanMode":
        """Parse a scan mode from its string value.

        Raises:
            ValueError: If string doesn't match any mode

        Example:
            >>> ScanMode.from_string('reload')
            <ScanMode.RELOAD: 'reload'>
        """
        try:
            return cls(s.lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid scan mode: '{s}'. Must be one of: {valid}")


@dataclass(frozen=True)
class ScanKey:
    """Identifies one cached namespace scan."""

    namespace: str
    mode: ScanMode

    def __str__(self) -> str:
        return f"{self.namespace or '<all>'}:{self.mode}"


@dataclass(frozen=True)
class ViewBinding:
    """A discovered view and the model type it accepts.

    Attributes:
        view: The view instance (View or AsyncView)
        location: Human-readable provenance, e.g. 'pkg.views.PageViews.home'
        model_type: The model class this view renders
    """

    view: Any
    location: str
    model_type: type

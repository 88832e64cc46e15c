# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Re-exports the view from .shared under another name."""

from .shared import shared_view as public_view  # noqa: F401

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Internal helpers. Not part of the public API."""

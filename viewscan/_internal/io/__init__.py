# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""File format helpers."""

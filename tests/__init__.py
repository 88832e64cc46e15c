# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Test suite for viewscan."""

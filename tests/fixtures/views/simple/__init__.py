# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Simple views: class fields, static methods, async and nested modules."""

PACKAGE_TITLE = "simple"

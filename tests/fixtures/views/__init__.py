# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Namespaces scanned by the tests. Model types are unique across all of them."""

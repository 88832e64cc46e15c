# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Shared test fixtures: models, loaders and scanned view namespaces."""

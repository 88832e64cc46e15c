# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Command line interface for viewscan."""

from .cli import create_cli, main

__all__ = ["create_cli", "main"]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""viewscan CLI commands.

Single source of truth for command registration. Each entry is
``name: (module, attribute, short_help)``; cli.LazyGroup imports the module
only when the command runs.
"""

COMMAND_MAP = {
    "scan": (
        "viewscan.cli.commands.scan", "scan",
        "List the views a namespace declares",
    ),
    "render": (
        "viewscan.cli.commands.render", "render",
        "Render a MODULE:CLASS model built from -f fields",
    ),
    "demo": (
        "viewscan.cli.commands.demo", "demo",
        "Render the built-in Person example",
    ),
}

__all__ = ["COMMAND_MAP"]

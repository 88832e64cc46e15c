# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""List the views a namespace declares."""

import click
from rich.table import Table

from ..context import ApplicationContext
from ..exceptions import CommandError
from ..utils import console, warning


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("namespace")
@click.option("--reload", "-r", "reload_", is_flag=True, help="Scan in reload mode (re-import modules)")
@click.pass_obj
def scan(ctx: ApplicationContext, namespace: str, reload_: bool) -> None:
    """Scan NAMESPACE (dotted or slash-separated) and list its view bindings."""
    settings = ctx.get_effective_config()

    from viewscan import ScanMode, ViewEngine, build_registry
    from viewscan.exceptions import ViewConfigurationError

    mode = ScanMode.RELOAD if reload_ else ScanMode.PRECOMPUTED
    try:
        render = build_registry(
            namespace, mode, engine=ViewEngine.from_settings(settings), settings=settings
        )
    except ViewConfigurationError as e:
        raise CommandError.from_exception(f"Scan of '{namespace}' failed", e) from e

    if not render.bindings:
        warning(f"No views found under '{render.namespace}'")
        return

    table = Table(title=f"Views in {render.namespace} ({mode})")
    table.add_column("Model", style="cyan")
    table.add_column("View", style="white")
    table.add_column("Location", style="white")

    for model_type, binding in sorted(render.bindings.items(), key=lambda item: item[1].location):
        table.add_row(
            f"{model_type.__module__}.{model_type.__qualname__}",
            type(binding.view).__name__,
            binding.location,
        )

    console.print(table)
    console.print(f"\n[bold]{len(render.bindings)}[/bold] views")

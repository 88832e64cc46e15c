# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Render the built-in Person example."""

import click

from ..context import ApplicationContext
from ..utils import print_markup


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--cached", is_flag=True, help="Scan once instead of re-scanning per render")
@click.pass_obj
def demo(ctx: ApplicationContext, cached: bool) -> None:
    """Render Person("Bob", 45) through a scanned namespace and a single-view renderer."""
    from viewscan.demo import run_demo

    ctx.get_effective_config()
    for line in run_demo(hot_reload=not cached):
        print_markup(line)

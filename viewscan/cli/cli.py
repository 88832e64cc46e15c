# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Entry point for the viewscan command line.

Commands are imported lazily so `viewscan --help` stays fast and a broken
command module only affects that command.
"""

import importlib
import logging
import sys
from pathlib import Path

import click

from .constants import CLI_NAME, LOG_LEVELS, ExitCode
from .context import ApplicationContext
from .utils import console

logger = logging.getLogger(__name__)


def _print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    from viewscan import __version__
    console.print(f"[bold]{CLI_NAME}[/bold] {__version__}", highlight=False)
    ctx.exit()


class LazyGroup(click.Group):
    """Group whose subcommands are imported on first use.

    ``lazy_commands`` maps a command name to ``(module, attribute, short_help)``.
    The short help is what ``--help`` lists, so listing never imports.
    """

    def __init__(self, *args, lazy_commands=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lazy_commands = dict(lazy_commands or {})
        self._loaded: dict[str, click.Command] = {}

    def list_commands(self, ctx):
        return sorted(set(self.lazy_commands) | set(super().list_commands(ctx)))

    def get_command(self, ctx, name):
        if name not in self.lazy_commands:
            return super().get_command(ctx, name)

        if name not in self._loaded:
            module_path, attr_name, _ = self.lazy_commands[name]
            command = getattr(importlib.import_module(module_path), attr_name)
            if not isinstance(command, click.Command):
                raise TypeError(f"{module_path}.{attr_name} is not a click command")
            self._loaded[name] = command
        return self._loaded[name]

    def format_commands(self, ctx, formatter):
        rows = []
        for name in self.list_commands(ctx):
            if name in self.lazy_commands:
                rows.append((name, self.lazy_commands[name][2]))
                continue
            command = super().get_command(ctx, name)
            if command is not None and not command.hidden:
                rows.append((name, command.get_short_help_str()))

        if rows:
            with formatter.section("Commands"):
                formatter.write_dl(rows)


def create_cli() -> click.Group:
    """Build the root command group."""
    from viewscan.cli.commands import COMMAND_MAP

    @click.group(
        name=CLI_NAME,
        cls=LazyGroup,
        lazy_commands=COMMAND_MAP,
        context_settings={"help_option_names": ["-h", "--help"]},
    )
    @click.option(
        "-c", "--config",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Use this viewscan.yaml instead of searching for one",
    )
    @click.option(
        "-p", "--search-path", "search_paths",
        type=click.Path(exists=True, path_type=Path),
        multiple=True,
        help="Path entry searched for namespaces before sys.path (repeatable)",
    )
    @click.option(
        "-l", "--log-level",
        type=click.Choice(LOG_LEVELS),
        default="normal",
        show_default=True,
        help="Console verbosity",
    )
    @click.option(
        "--version",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print_version,
        help="Show the version and exit.",
    )
    @click.pass_context
    def cli(ctx: click.Context, config: Path | None, search_paths: tuple[Path, ...], log_level: str) -> None:
        """Discover views by scanning a namespace and render models with them.

        \b
        Examples:
          viewscan scan myapp.views
          viewscan render myapp.views myapp.models:Person -f name=Bob -f age=45
          viewscan demo
        """
        ctx.obj = ApplicationContext.from_cli_args(
            config_file=config,
            search_paths=search_paths,
            log_level=log_level,
        )

    return cli


def main() -> None:
    """Run CLI with consistent error handling."""
    from .exceptions import CLIError

    try:
        cli = create_cli()
        cli(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(ExitCode.USAGE)
    except (click.Abort, KeyboardInterrupt):
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(ExitCode.INTERRUPTED)
    except CLIError as e:
        console.print(e.format_for_console())
        sys.exit(e.exit_code)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        logger.exception(f"Unexpected error in {CLI_NAME} CLI")
        sys.exit(ExitCode.SOFTWARE)


if __name__ == "__main__":
    main()

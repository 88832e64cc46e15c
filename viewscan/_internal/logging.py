# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Rich-backed logging setup for viewscan applications.

Library modules only create loggers; setup_logging() is what attaches a
handler, and the CLI calls it once per invocation.
"""

import logging

# CLI verbosity names, plus the standard names settings files may use
LEVELS = {
    'quiet': logging.ERROR,
    'normal': logging.WARNING,
    'verbose': logging.INFO,
    'debug': logging.DEBUG,
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
}

QUIET_LIBRARIES = ('jinja2',)


def _rich_handler(tracebacks: bool) -> logging.Handler:
    from rich.logging import RichHandler

    handler = RichHandler(
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=tracebacks,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(level: str = "normal") -> None:
    """Route viewscan logs to a Rich handler on the root logger.

    Unrecognized names mean WARNING. Repeated calls reuse the installed
    handler and only change levels.
    """
    from rich.logging import RichHandler

    numeric = LEVELS.get(level.lower(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(numeric)

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(_rich_handler(tracebacks=numeric == logging.DEBUG))
    for handler in root.handlers:
        handler.setLevel(numeric)

    library_level = logging.NOTSET if numeric == logging.DEBUG else logging.WARNING
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(library_level)

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum

CLI_NAME = "viewscan"

# Console verbosity names accepted by --log-level, quietest first
LOG_LEVELS = ("quiet", "normal", "verbose", "debug")


class ExitCode(IntEnum):
    """Process exit statuses, from BSD sysexits.h where one fits."""

    SUCCESS = 0
    USAGE = 64      # bad command line (click usage errors, CLIError default)
    DATAERR = 65    # model reference or field values unusable
    SOFTWARE = 70   # scan or render failed
    CONFIG = 78     # viewscan.yaml / environment invalid
    INTERRUPTED = 130

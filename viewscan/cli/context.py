# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Per-invocation state handed to subcommands through ``ctx.obj``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from viewscan.settings import ScanSettings

logger = logging.getLogger(__name__)


def _describe(errors: list[dict]) -> list[str]:
    return [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors]


@dataclass
class ApplicationContext:
    """Group-level options, turned into ScanSettings on first use.

    Settings are built on the first get_effective_config() call.
    """

    config_file: Path | None = None
    overrides: dict[str, Any] = field(default_factory=dict)
    config: ScanSettings | None = None

    @classmethod
    def from_cli_args(
        cls,
        config_file: Path | None,
        search_paths: tuple[Path, ...],
        log_level: str,
    ) -> ApplicationContext:
        """Record the group options and install logging at log_level."""
        from viewscan._internal.logging import setup_logging

        setup_logging(level=log_level)

        overrides: dict[str, Any] = {"logging": {"level": log_level}}
        if search_paths:
            overrides["search_paths"] = [str(Path(p).resolve()) for p in search_paths]

        logger.debug(f"CLI options: config={config_file}, overrides={overrides}")
        return cls(config_file=config_file, overrides=overrides)

    def load_configuration(self) -> None:
        """Build settings from the config file and CLI overrides.

        Raises:
            ConfigurationError: The settings failed validation
        """
        from pydantic import ValidationError

        from viewscan.settings import load_config

        from .exceptions import ConfigurationError

        try:
            self.config = load_config(project_file=self.config_file, **self.overrides)
        except ValidationError as e:
            raise ConfigurationError("Invalid configuration", details=_describe(e.errors())) from e

    def get_effective_config(self) -> ScanSettings:
        if self.config is None:
            self.load_configuration()
        return self.config

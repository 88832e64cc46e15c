# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Global pytest configuration and fixtures."""

import logging
import sys
import uuid

import pytest

from viewscan import reset_registries
from viewscan.settings import reset_config


@pytest.fixture(autouse=True)
def reset_viewscan_state(monkeypatch):
    """Give every test empty scan caches and freshly loaded settings."""
    for name in ("VIEWSCAN_PROJECT_DIR", "VIEWSCAN_LOG_LEVEL", "VIEWSCAN_ASSIGNABLE_FALLBACK"):
        monkeypatch.delenv(name, raising=False)
    reset_registries()
    reset_config()
    yield
    reset_registries()
    reset_config()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI installs a Rich handler on the root logger; undo it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def unique_package_name():
    """Module name no other test (or earlier import) has used."""
    return f"viewscan_tmp_{uuid.uuid4().hex[:12]}"


@pytest.fixture
def no_bytecode(monkeypatch):
    """Rewritten modules must be recompiled from source."""
    monkeypatch.setattr(sys, "dont_write_bytecode", True)

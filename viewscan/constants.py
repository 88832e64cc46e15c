# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Centralized constants for namespace scanning.

Single source of truth for exclusion prefixes and the well-known member
names the instance provisioner probes.
"""

# Module prefixes never worth importing while looking for views.
# Matched on dotted boundaries: 'rich' excludes 'rich.table' but not 'richer'.
EXCLUDED_PREFIXES = frozenset([
    # Interpreter and standard library runtime
    'builtins',
    'abc',
    'asyncio',
    'collections',
    'concurrent',
    'ctypes',
    'encodings',
    'importlib',
    'typing',
    'typing_extensions',
    'multiprocessing',
    'distutils',
    'setuptools',
    'pip',
    'pkg_resources',
    'site',
    # Testing and mocking
    'unittest',
    'doctest',
    'pytest',
    '_pytest',
    'pluggy',
    'hypothesis',
    # Logging
    'logging',
    'rich',
    'structlog',
    # Libraries viewscan itself depends on
    'click',
    'jinja2',
    'markupsafe',
    'pydantic',
    'pydantic_core',
    'pydantic_settings',
    'yaml',
])

# Provisioner probes, in order
SINGLETON_ATTRIBUTE = 'INSTANCE'
COMPANION_ATTRIBUTE = '_instance'
COMPANION_CLASS = 'Companion'
INSTANCE_ACCESSOR = 'get_instance'

# Configuration file looked up by the settings loader
PROJECT_CONFIG_FILE = 'viewscan.yaml'
ENV_PREFIX = 'VIEWSCAN_'

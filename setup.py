# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from setuptools import setup, find_packages

setup(
    name="viewscan",
    version="0.1.0",
    description="Namespace-scanned view registries: render models by type without wiring",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["viewscan", "viewscan.*"]),
    install_requires=[
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Programming Language :: Python",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    license="MIT",
    entry_points={
        'console_scripts': [
            'viewscan=viewscan.cli.cli:main',
        ],
    },
    python_requires=">=3.10",
)

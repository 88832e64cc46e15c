# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Render a model built on the command line."""

import importlib

import click
import yaml

from ..context import ApplicationContext
from ..exceptions import CommandError, ValidationError
from ..utils import print_markup


def _import_model(model_ref: str) -> type:
    """Resolve 'package.module:ClassName' to the class."""
    module_name, sep, class_name = model_ref.partition(":")
    if not sep or not module_name or not class_name:
        raise ValidationError(
            f"Invalid model reference '{model_ref}'",
            details=["Expected MODULE:CLASS, e.g. myapp.models:Person"],
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValidationError(f"Cannot import '{module_name}': {e}") from e

    model_type = getattr(module, class_name, None)
    if not isinstance(model_type, type):
        raise ValidationError(f"'{class_name}' is not a class in {module_name}")
    return model_type


def _parse_fields(fields: tuple[str, ...]) -> dict:
    """Parse key=value pairs; values are read as YAML scalars ('45' -> 45)."""
    parsed = {}
    for item in fields:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValidationError(f"Invalid field '{item}'", details=["Expected KEY=VALUE"])
        parsed[key] = yaml.safe_load(value) if value else ""
    return parsed


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("namespace")
@click.argument("model_ref")
@click.option("--field", "-f", "fields", multiple=True, help="Model constructor argument KEY=VALUE (repeatable)")
@click.option("--reload", "-r", "reload_", is_flag=True, help="Scan in reload mode")
@click.pass_obj
def render(ctx: ApplicationContext, namespace: str, model_ref: str, fields: tuple[str, ...], reload_: bool) -> None:
    """Render a MODEL_REF instance with the view NAMESPACE binds to it.

    \b
    Example:
      viewscan render viewscan.demo.views viewscan.demo:Person -f name=Bob -f age=45
    """
    settings = ctx.get_effective_config()

    from viewscan import ScanMode, ViewEngine, build_registry
    from viewscan.exceptions import ViewscanError

    model_type = _import_model(model_ref)
    kwargs = _parse_fields(fields)
    try:
        model = model_type(**kwargs)
    except TypeError as e:
        raise ValidationError(f"Cannot construct {model_type.__name__}: {e}") from e

    mode = ScanMode.RELOAD if reload_ else ScanMode.PRECOMPUTED
    try:
        dispatch = build_registry(
            namespace, mode, engine=ViewEngine.from_settings(settings), settings=settings
        )
        output = dispatch(model)
    except ViewscanError as e:
        raise CommandError.from_exception(str(e), e) from e

    print_markup(output)

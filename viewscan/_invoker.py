# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Invoke a resolved view and collapse async results to a string."""

import asyncio
import inspect
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from viewscan._metadata import ViewBinding
from viewscan.exceptions import UnsupportedViewError, ViewRenderError
from viewscan.views import AsyncView, View

logger = logging.getLogger(__name__)


async def _await(awaitable: Any) -> Any:
    return await awaitable


def collapse_async(result: Any) -> Any:
    """Block until an async render result is available.

    Futures are waited on directly. Awaitables run on a fresh event loop, on
    a worker thread when the calling thread already runs one.
    """
    if isinstance(result, Future):
        return result.result()

    if not inspect.isawaitable(result):
        return result

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_await(result))

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="viewscan-render") as pool:
        return pool.submit(asyncio.run, _await(result)).result()


def invoke_view(view: Any, model: Any) -> str:
    """Render a model with a view of either contract.

    Raises:
        UnsupportedViewError: If the view implements neither contract
    """
    if isinstance(view, View):
        return view.render(model)
    if isinstance(view, AsyncView):
        return collapse_async(view.render_async(model))
    raise UnsupportedViewError(f"Unsupported view type: {type(view).__name__}")


def render_binding(binding: ViewBinding, model: Any) -> str:
    """Render a model with a resolved binding.

    Raises:
        ViewRenderError: Wrapping any failure; the original is the __cause__
    """
    try:
        return invoke_view(binding.view, model)
    except Exception as e:
        logger.debug(f"Render failed at {binding.location}: {e}")
        raise ViewRenderError(
            f"Failed to render view at {binding.location} for model {type(model).__name__}"
        ) from e

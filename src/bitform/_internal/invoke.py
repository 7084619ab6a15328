"""Invoke helpers — call sync or async handlers uniformly.

Route callbacks can be ``def`` or ``async def``. ``Route.call`` returns
whatever the callback returns; providers that run on an event loop use
this helper so the sync/async check lives in exactly one place.

Usage::

    from bitform._internal.invoke import invoke

    result = await invoke(route.call, method, request, response)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result

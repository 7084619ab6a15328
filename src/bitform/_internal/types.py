"""Shared type aliases used across bitform modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route callback: ``(request, response)`` returning a body string, the
# response, JSON-able data, ``None``, or an awaitable of one of those
RouteCallback: TypeAlias = Callable[..., Any]

# Page loader: receives the provider and registers routes on it
PageLoader: TypeAlias = Callable[..., None]

"""Resolves ``"module:attribute"`` strings to Application instances.

Shared by ``bitform run`` and ``bitform routes``.
"""

import importlib

from bitform.app import Application


def resolve_application(import_string: str) -> Application:
    """Resolve an import string to a bitform Application.

    The attribute defaults to ``app`` (``"myapp"`` means ``myapp.app``).
    A callable that is not an Application is treated as a factory and
    called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the result is not an Application.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name or "app")

    if callable(obj) and not isinstance(obj, Application):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Application):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a bitform.Application"
        raise TypeError(msg)
    return obj

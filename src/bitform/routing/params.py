"""Path patterns — segment parsing and parameter conversion.

A route path is a ``/``-separated pattern whose segments are either
static text or ``{name}`` / ``{name:converter}`` placeholders::

    /users/{id:int}/files/{rest:path}
"""

import re
from dataclasses import dataclass

from bitform.errors import ConfigurationError

# converter name -> (segment regex, python type)
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One parsed segment of a route path."""

    value: str
    param_name: str | None = None
    param_type: str = "str"

    @property
    def is_param(self) -> bool:
        return self.param_name is not None

    @property
    def is_catch_all(self) -> bool:
        return self.param_type == "path"

    @property
    def pattern(self) -> re.Pattern[str]:
        regex, _ = CONVERTERS[self.param_type]
        return re.compile(f"^{regex}$")


def parse_path(path: str) -> list[PathSegment]:
    """Split a route path into segments.

    Raises ``ConfigurationError`` for an unknown converter, a catch-all
    that is not the last segment, or Flask-style ``<param>`` syntax.
    """
    parts = [part for part in path.strip("/").split("/") if part]
    segments: list[PathSegment] = []
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = f"Route {path!r} uses <param> syntax; bitform expects {{param}}."
            raise ConfigurationError(msg)
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(part))
            continue

        name, _, param_type = part[1:-1].partition(":")
        param_type = param_type or "str"
        if param_type not in CONVERTERS:
            msg = f"Unknown path converter {param_type!r} in route {path!r}"
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"Catch-all {{{name}:path}} must be the last segment of {path!r}"
            raise ConfigurationError(msg)
        segments.append(PathSegment(part, param_name=name, param_type=param_type))
    return segments


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the converter's type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)

"""Content negotiation — pick the best offer for an ``Accept*`` header.

Pure functions over header strings so any provider's request type can
use them. Every ``best_*`` function returns the winning candidate as the
caller wrote it, or ``None`` when nothing is acceptable. Turning ``None``
into a 406 is left to the caller.

Ranking follows RFC 9110: highest quality first, then the most specific
matching range, then the order the client listed its ranges, then the
order the caller listed its candidates.
"""

import mimetypes
from collections.abc import Callable, Sequence
from dataclasses import dataclass

# Shorthands accepted wherever a MIME type is expected.
_TYPE_ALIASES: dict[str, str] = {
    "urlencoded": "application/x-www-form-urlencoded",
    "multipart": "multipart/*",
}


@dataclass(frozen=True, slots=True)
class AcceptItem:
    """One comma-separated entry of an ``Accept*`` header."""

    value: str
    quality: float
    index: int


def parse_accept_header(header: str | None) -> list[AcceptItem]:
    """Split an ``Accept*`` header into items, in header order.

    Parameters other than ``q`` are dropped. A malformed ``q`` counts
    as ``1``.
    """
    if not header:
        return []
    items: list[AcceptItem] = []
    for index, entry in enumerate(header.split(",")):
        value, *params = (part.strip() for part in entry.split(";"))
        if not value:
            continue
        quality = 1.0
        for param in params:
            key, _, raw = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = max(0.0, min(1.0, float(raw)))
                except ValueError:
                    quality = 1.0
        items.append(AcceptItem(value=value.lower(), quality=quality, index=index))
    return items


def normalize_type(value: str) -> str:
    """Expand shorthands to full MIME types.

    ``"json"`` -> ``"application/json"``, ``"+json"`` -> ``"*/*+json"``,
    ``"urlencoded"`` -> ``"application/x-www-form-urlencoded"``.
    Full types pass through lowercased.
    """
    value = value.strip().lower()
    if value in _TYPE_ALIASES:
        return _TYPE_ALIASES[value]
    if value.startswith("+"):
        return f"*/*{value}"
    if "/" in value:
        return value
    guessed, _ = mimetypes.guess_type(f"file.{value}", strict=False)
    return guessed or value


# -- Specificity scorers: -1 = no match, higher = more specific --


def _type_specificity(item: str, candidate: str) -> int:
    item_type, _, item_sub = item.partition("/")
    cand_type, _, cand_sub = candidate.partition("/")
    if item_type == "*" and item_sub in ("*", ""):
        return 0
    if item_type != cand_type:
        return -1
    if item_sub == "*":
        return 1
    return 2 if item_sub == cand_sub else -1


def _token_specificity(item: str, candidate: str) -> int:
    if item == "*":
        return 0
    return 1 if item == candidate else -1


def _language_specificity(item: str, candidate: str) -> int:
    if item == "*":
        return 0
    if item == candidate:
        return 3
    if candidate.startswith(item + "-"):
        return 2
    if item.startswith(candidate + "-"):
        return 1
    return -1


def _best(
    header: str | None,
    candidates: Sequence[str],
    specificity: Callable[[str, str], int],
    *,
    normalize: Callable[[str], str] = str.lower,
    implicit: Callable[[str], bool] = lambda _: False,
) -> str | list[str] | None:
    items = parse_accept_header(header)

    if not candidates:
        ranked = sorted((i for i in items if i.quality > 0), key=lambda i: (-i.quality, i.index))
        return [item.value for item in ranked]
    if not items:
        return candidates[0]

    best_key: tuple[float, int, int, int] | None = None
    best_candidate: str | None = None
    for position, candidate in enumerate(candidates):
        normalized = normalize(candidate)
        # The most specific matching range decides the quality
        match: tuple[int, AcceptItem] | None = None
        for item in items:
            score = specificity(item.value, normalized)
            if score < 0:
                continue
            if match is None or score > match[0] or (score == match[0] and item.index < match[1].index):
                match = (score, item)

        if match is None:
            if not implicit(normalized):
                continue
            # Implicitly acceptable offers rank with the lowest listed quality
            floor = min((i.quality for i in items if i.quality > 0), default=1.0)
            key = (floor, -1, -len(items), -position)
        else:
            score, item = match
            if item.quality <= 0:
                continue
            key = (item.quality, score, -item.index, -position)

        if best_key is None or key > best_key:
            best_key = key
            best_candidate = candidate
    return best_candidate


def best_type(header: str | None, candidates: Sequence[str]) -> str | list[str] | None:
    """Best candidate MIME type (or extension) for an ``Accept`` header."""
    return _best(header, candidates, _type_specificity, normalize=normalize_type)


def best_charset(header: str | None, candidates: Sequence[str]) -> str | list[str] | None:
    """Best candidate for an ``Accept-Charset`` header."""
    return _best(header, candidates, _token_specificity)


def best_encoding(header: str | None, candidates: Sequence[str]) -> str | list[str] | None:
    """Best candidate for an ``Accept-Encoding`` header.

    ``identity`` stays acceptable unless the header rules it out.
    """
    return _best(header, candidates, _token_specificity, implicit=lambda c: c == "identity")


def best_language(header: str | None, candidates: Sequence[str]) -> str | list[str] | None:
    """Best candidate for an ``Accept-Language`` header.

    A range matches its subtags: ``en`` accepts ``en-US``.
    """
    return _best(header, candidates, _language_specificity)


def match_type(content_type: str | None, patterns: Sequence[str]) -> str | bool:
    """Check a ``Content-Type`` value against MIME patterns.

    Patterns may be full types, wildcards (``text/*``, ``*/*``), suffix
    patterns (``+json``, ``*/*+json``), or shorthands (``json``, ``html``,
    ``urlencoded``, ``multipart``). Returns the matching pattern as given,
    or the actual type when the pattern contains a wildcard. Returns
    ``False`` when nothing matches.
    """
    if not content_type:
        return False
    actual = content_type.split(";", 1)[0].strip().lower()
    actual_type, _, actual_sub = actual.partition("/")
    if not actual_sub:
        return False

    for pattern in patterns:
        expected = normalize_type(pattern)
        exp_type, _, exp_sub = expected.partition("/")
        if exp_type not in ("*", actual_type):
            continue
        if exp_sub.startswith("*+"):
            if not actual_sub.endswith(exp_sub[1:]):
                continue
        elif exp_sub not in ("*", actual_sub):
            continue
        return actual if "*" in expected else pattern
    return False

"""Pull ``http(s)://`` links out of raw document text."""

from __future__ import annotations

import re

from linkcheck.errors import ExtractionError
from linkcheck.models import LinkSet

# Group 1: a bare URI.  Group 2: the target of a markdown ``[label](target)``.
_LINK_PATTERN = r"""(https?://[^\s)"'<>]+)|\[.*?\]\((.*?)\)"""

_SCHEMES = ("http://", "https://")

# A markdown target ends at the first character a bare URI may not contain,
# which drops an optional ``"title"`` and any padding.
_TARGET_END = re.compile(r"""[\s"'<>]""")


def _has_http_prefix(candidate: str) -> bool:
    """Return ``True`` if *candidate* is a scheme followed by at least one char."""
    for scheme in _SCHEMES:
        if candidate.startswith(scheme) and len(candidate) > len(scheme):
            return True
    return False


def _clean_target(target: str) -> str:
    """Trim a markdown target down to its destination, e.g. ``<url> "title"`` -> ``url``."""
    target = target.strip()
    if target.startswith("<"):
        target = target[1:]
    return _TARGET_END.split(target, maxsplit=1)[0]


def extract(text: str) -> LinkSet:
    """Return the unique links found in *text*, in first-seen order.

    Both alternatives of the pattern are scanned in a single left-to-right
    pass.  Each capture of a match is tested on its own, so a markdown target
    and a bare URI can both contribute; repeats are dropped afterwards.

    Raises:
        ExtractionError: If the link pattern fails to compile.
    """
    try:
        pattern = re.compile(_LINK_PATTERN)
    except re.error as exc:
        raise ExtractionError(f"failed to compile link pattern: {exc}") from exc

    candidates: list[str] = []
    for match in pattern.finditer(text):
        bare, target = match.groups()
        if bare and _has_http_prefix(bare):
            candidates.append(bare)
        if target:
            target = _clean_target(target)
            if _has_http_prefix(target):
                candidates.append(target)

    # Deduplicate while preserving insertion order.
    return tuple(dict.fromkeys(candidates))

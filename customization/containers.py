"""
Container Locator

Finds elements opted into rewriting by a class token and resolves the inner
range of each one without an HTML parser.

Matching is a finite-depth bracket count scoped to the marker's own tag name:
further openings of that name increment depth, closings decrement it, and the
container ends where depth returns to zero. Unclosed containers are dropped.
"""

import logging
import re
from functools import lru_cache
from typing import List, Pattern, Tuple

from .types import Container

logger = logging.getLogger(__name__)

MARKER_CLASS = "generative-customization"

_TAG_NAME_RE = re.compile(r"<([a-zA-Z][\w:-]*)")


@lru_cache(maxsize=8)
def _marker_pattern(marker_class: str) -> Pattern[str]:
    return re.compile(
        r"""class\s*=\s*["'](?:[^"']*\s)?""" + re.escape(marker_class) + r"""(?=[\s"'])[^"']*["']""",
        re.IGNORECASE,
    )


@lru_cache(maxsize=64)
def _tag_patterns(tag_name: str) -> Tuple[Pattern[str], Pattern[str]]:
    name = re.escape(tag_name)
    open_re = re.compile(rf"<{name}(?=[\s>])", re.IGNORECASE)
    close_re = re.compile(rf"</{name}>", re.IGNORECASE)
    return open_re, close_re


def _match_close(html: str, tag_name: str, open_tag_end: int) -> int:
    """Return the start offset of the matching closing tag, or -1."""
    open_re, close_re = _tag_patterns(tag_name)
    depth = 1
    pos = open_tag_end

    while pos < len(html):
        next_close = close_re.search(html, pos)
        if next_close is None:
            return -1

        next_open = open_re.search(html, pos)
        if next_open is not None and next_open.start() < next_close.start():
            depth += 1
            pos = next_open.end()
            continue

        depth -= 1
        if depth == 0:
            return next_close.start()
        pos = next_close.end()

    return -1


def find_containers(html: str, marker_class: str = MARKER_CLASS) -> List[Container]:
    """
    Locate every element whose class attribute carries ``marker_class``.

    Args:
        html: Raw document text
        marker_class: Class token marking opt-in regions

    Returns:
        Containers in document order. Markers inside an already-found
        container are absorbed into it and not reported again.
    """
    containers: List[Container] = []
    covered_until = -1

    for marker in _marker_pattern(marker_class).finditer(html):
        if marker.start() < covered_until:
            continue

        tag_start = html.rfind("<", 0, marker.start())
        close_bracket = html.find(">", marker.end())
        if tag_start == -1 or close_bracket == -1:
            continue

        name_match = _TAG_NAME_RE.match(html, tag_start)
        if name_match is None:
            continue

        tag_name = name_match.group(1)
        open_tag_end = close_bracket + 1
        close_start = _match_close(html, tag_name, open_tag_end)

        if close_start == -1:
            logger.debug(
                f"Dropping unclosed <{tag_name}> container at offset {tag_start}",
                extra={"tag_name": tag_name, "offset": tag_start},
            )
            continue

        containers.append(Container(inner_start=open_tag_end, inner_end=close_start))
        covered_until = close_start

    return containers

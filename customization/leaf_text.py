"""Leaf Text Extractor: text-bearing elements inside a container slice."""

import re
from typing import Iterable, List

from .types import LeafSpan

LEAF_TAGS = ("p", "h[1-6]", "li", "blockquote", "figcaption")


def _leaf_pattern(leaf_tags: Iterable[str]) -> re.Pattern:
    alternation = "|".join(leaf_tags)
    return re.compile(
        rf"<((?:{alternation}))(\s[^>]*)?>(.*?)</\1>",
        re.IGNORECASE | re.DOTALL,
    )


_LEAF_RE = _leaf_pattern(LEAF_TAGS)

_SCRIPT_RE = re.compile(r"<script.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_NBSP_RE = re.compile(r"&nbsp;", re.IGNORECASE)
_AMP_RE = re.compile(r"&amp;", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")


def strip_html(value: str) -> str:
    value = _SCRIPT_RE.sub(" ", value)
    value = _STYLE_RE.sub(" ", value)
    value = _TAG_RE.sub(" ", value)
    value = _NBSP_RE.sub(" ", value)
    return _AMP_RE.sub("&", value)


def collapse_whitespace(value: str) -> str:
    return _WS_RE.sub(" ", value).strip()


def plain_text(inner_html: str) -> str:
    """Human-readable text of a markup fragment."""
    return collapse_whitespace(strip_html(inner_html))


def extract_leaf_spans(fragment: str, pattern: re.Pattern = _LEAF_RE) -> List[LeafSpan]:
    """
    Find leaf elements in ``fragment`` that carry visible text.

    Offsets are relative to ``fragment``. Each span keeps its original inner
    markup; the plain-text form only decides whether the span is empty.
    """
    spans: List[LeafSpan] = []

    for match in pattern.finditer(fragment):
        inner_html = match.group(3)
        text = plain_text(inner_html)
        if not text:
            continue

        spans.append(
            LeafSpan(
                start=match.start(),
                end=match.end(),
                tag_name=match.group(1),
                attrs=match.group(2) or "",
                inner_html=inner_html,
                plain_text=text,
            )
        )

    return spans

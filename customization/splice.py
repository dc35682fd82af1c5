"""Splice Replacer: apply range edits right-to-left so stored offsets stay valid."""

from typing import Sequence

from .types import Edit


def apply_edits(html: str, edits: Sequence[Edit]) -> str:
    """
    Replace ``html[edit.start:edit.end]`` with each edit's rendering.

    Edits must not overlap. With no edits the input object itself is returned,
    which callers use to tell "not customized" apart.
    """
    if not edits:
        return html

    result = html
    for edit in sorted(edits, key=lambda e: e.start, reverse=True):
        result = result[: edit.start] + edit.render() + result[edit.end:]

    return result

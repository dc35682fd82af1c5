"""
Rewrite pipeline: containers → leaf spans → one batch → splice.

Pure text in, text out; the only I/O is the batch call through the
provider chain.
"""

import logging
from typing import List

from store.personalities import Personality

from .batch import BatchRewriter
from .containers import MARKER_CLASS, find_containers
from .leaf_text import extract_leaf_spans
from .splice import apply_edits
from .types import Edit, GenerationRequest, RewriteOutcome

logger = logging.getLogger(__name__)


def collect_edits(html: str, marker_class: str = MARKER_CLASS) -> List[Edit]:
    """Candidate edits for every non-empty leaf span of every container."""
    edits: List[Edit] = []

    for container in find_containers(html, marker_class):
        inner = html[container.inner_start:container.inner_end]
        for span in extract_leaf_spans(inner):
            edits.append(
                Edit(
                    start=container.inner_start + span.start,
                    end=container.inner_start + span.end,
                    tag_name=span.tag_name,
                    attrs=span.attrs,
                    original_inner=span.inner_html,
                )
            )

    return edits


async def rewrite_generative_sections(
    html: str,
    main_prompt: str,
    personality: Personality,
    rewriter: BatchRewriter,
    marker_class: str = MARKER_CLASS,
) -> RewriteOutcome:
    """
    Rewrite the opt-in regions of ``html`` in the voice of ``personality``.

    Returns the input text object untouched (customized=False) when there is
    nothing to rewrite or every provider failed.
    """
    outcome = RewriteOutcome(html=html, personality=personality)

    edits = collect_edits(html, marker_class)
    if not edits:
        return outcome

    logger.info(
        f"Rewriting {len(edits)} fragment(s) as '{personality.id}'",
        extra={"fragments": len(edits), "personality": personality.id},
    )

    batch = await rewriter.rewrite(
        GenerationRequest(
            main_prompt=main_prompt,
            personality=personality,
            items=[edit.original_inner for edit in edits],
        )
    )
    outcome.errors.extend(batch.errors)
    outcome.provider = batch.provider
    outcome.model = batch.model

    if not batch.succeeded:
        return outcome

    for edit, rewritten in zip(edits, batch.items):
        edit.rewritten_inner = rewritten

    rewritten_html = apply_edits(html, edits)
    outcome.html = rewritten_html
    outcome.customized = rewritten_html != html
    return outcome

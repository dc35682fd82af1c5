"""
Markup customization core.

Locates opt-in containers, extracts their leaf text, rewrites it in one
provider batch and splices the results back, all without an HTML parser.
"""

from .types import Container, Edit, GenerationRequest, LeafSpan, RewriteOutcome
from .containers import MARKER_CLASS, find_containers
from .leaf_text import LEAF_TAGS, collapse_whitespace, extract_leaf_spans, plain_text, strip_html
from .splice import apply_edits
from .batch import (
    BatchResult,
    BatchRewriter,
    build_batch_system_prompt,
    parse_batch_response,
    token_budget,
)
from .pipeline import collect_edits, rewrite_generative_sections

__all__ = [
    "Container",
    "Edit",
    "GenerationRequest",
    "LeafSpan",
    "RewriteOutcome",
    "MARKER_CLASS",
    "find_containers",
    "LEAF_TAGS",
    "collapse_whitespace",
    "extract_leaf_spans",
    "plain_text",
    "strip_html",
    "apply_edits",
    "BatchResult",
    "BatchRewriter",
    "build_batch_system_prompt",
    "parse_batch_response",
    "token_budget",
    "collect_edits",
    "rewrite_generative_sections",
]

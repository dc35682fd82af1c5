"""
Batch Rewriter
==============

Turns the extracted markup fragments of one page into a single generation
request, and validates what comes back.

Invariants:
- One request per page, whatever the number of fragments
- Token budget is min(N * 300, 4096)
- A reply is only accepted if it holds a JSON array of exactly N items
- When no backend produces a valid reply the fragments come back unchanged
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from inference import ModelRequest, ProviderChain, ProviderError

from .types import GenerationRequest

logger = logging.getLogger(__name__)

TOKENS_PER_ITEM = 300
MAX_TOKENS = 4096


def token_budget(count: int) -> int:
    return min(count * TOKENS_PER_ITEM, MAX_TOKENS)


def build_batch_system_prompt(main_prompt: str, personality_prompt: str, count: int) -> str:
    """System instruction for rewriting ``count`` snippets in one call."""
    return "\n".join([
        f"You will receive a JSON array of {count} website text snippets.",
        "Rewrite each snippet according to the provided prompt and personality.",
        "CRITICAL: Snippets may contain HTML tags such as <strong>, <em>, <a>, <br>, <span>, etc.",
        "You MUST preserve every HTML tag exactly as-is. Do NOT add, remove, or modify any tags.",
        "Only change the human-readable text between and around the tags.",
        f"Return a JSON array of exactly {count} rewritten strings in the same order. No other output.",
        f"Main prompt: {main_prompt}",
        f"Personality instructions: {personality_prompt}",
    ])


def parse_batch_response(raw: str, count: int) -> List[str]:
    """
    Pull the JSON array out of a model reply.

    The candidate is the span from the first "[" to the last "]", so
    commentary around the array is tolerated but stray brackets in it make
    the reply invalid. Non-string items are coerced to their JSON text form.

    Raises:
        ProviderError: the reply holds no usable array of ``count`` items
    """
    start = raw.find("[")
    end = raw.rfind("]")
    if start == -1 or end < start:
        raise ProviderError("response did not contain a JSON array")

    try:
        parsed = json.loads(raw[start:end + 1])
    except json.JSONDecodeError:
        raise ProviderError("response contained invalid JSON")

    if not isinstance(parsed, list):
        raise ProviderError("parsed response is not an array")

    if len(parsed) != count:
        raise ProviderError(f"expected {count} items but got {len(parsed)}")

    return [item if isinstance(item, str) else json.dumps(item) for item in parsed]


@dataclass
class BatchResult:
    items: List[str]
    errors: List[str] = field(default_factory=list)
    provider: Optional[str] = None
    model: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.provider is not None


class BatchRewriter:
    """Rewrite a batch of fragments through a provider chain."""

    def __init__(self, chain: ProviderChain, timeout_s: Optional[float] = None):
        self.chain = chain
        self.timeout_s = timeout_s if timeout_s is not None else chain.attempt_timeout_s

    def build_request(self, generation: GenerationRequest) -> ModelRequest:
        count = len(generation.items)
        return ModelRequest(
            system_prompt=build_batch_system_prompt(
                generation.main_prompt,
                generation.personality.prompt,
                count,
            ),
            user_content=json.dumps(generation.items, ensure_ascii=False),
            max_tokens=token_budget(count),
            timeout_s=self.timeout_s,
        )

    async def rewrite(self, generation: GenerationRequest) -> BatchResult:
        items = list(generation.items)
        if not items:
            return BatchResult(items=items)

        count = len(items)
        result = await self.chain.run(
            self.build_request(generation),
            lambda raw: parse_batch_response(raw, count),
        )

        winner = result.winner
        if result.output is None or winner is None:
            logger.warning(
                f"All providers failed for a batch of {count}, keeping original text",
                extra={"errors": result.errors},
            )
            return BatchResult(items=items, errors=result.errors)

        return BatchResult(
            items=result.output,
            errors=result.errors,
            provider=winner.provider_name,
            model=winner.model,
        )

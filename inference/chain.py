"""
Provider Chain

Ordered fallback over generation backends (preferred → secondary → ...).

Invariants:
- Backends are tried strictly one after another, never raced
- Every attempt is bounded by its own deadline
- Every failed attempt leaves a labeled "<provider>: <reason>" error
- Never raises; callers read ChainResult.output (None when all failed)
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from .base import ModelBackend, ProviderError
from .types import ModelRequest, ProviderOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_PROVIDER_ERROR = "No AI provider available"


@dataclass
class ChainResult(Generic[T]):
    output: Optional[T] = None
    outcomes: List[ProviderOutcome] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def winner(self) -> Optional[ProviderOutcome]:
        for outcome in self.outcomes:
            if outcome.success:
                return outcome
        return None


class ProviderChain:
    """Walk configured backends in order until one yields a valid answer."""

    def __init__(self, backends: Sequence[ModelBackend], attempt_timeout_s: float = 20.0):
        self.backends = list(backends)
        self.attempt_timeout_s = attempt_timeout_s

    @property
    def names(self) -> List[str]:
        return [backend.name for backend in self.backends]

    def __len__(self) -> int:
        return len(self.backends)

    async def run(
        self,
        request: ModelRequest,
        validate: Callable[[str], T],
    ) -> ChainResult[T]:
        """
        Run the request against each backend until ``validate`` accepts a reply.

        Args:
            request: The model request, shared by every attempt
            validate: Turns raw model text into the caller's value; raises
                      ProviderError with a short reason when the text is unusable

        Returns:
            ChainResult with the validated output of the winning backend, or
            output=None and the accumulated errors when every backend failed
        """
        result: ChainResult[T] = ChainResult()

        if not self.backends:
            logger.warning("Provider chain is empty, skipping generation")
            result.errors.append(NO_PROVIDER_ERROR)
            return result

        for backend in self.backends:
            error = await self._attempt(backend, request, validate, result)
            if error is None:
                return result

            message = f"{backend.name}: {error}"
            logger.error(
                f"Provider attempt failed: {message}",
                extra={"provider": backend.name, "model": backend.model},
            )
            result.errors.append(message)
            result.outcomes.append(
                ProviderOutcome(backend.name, backend.model, success=False, error=error)
            )

        return result

    async def _attempt(self, backend, request, validate, result) -> Optional[str]:
        """One bounded attempt. Returns None on success, else the failure reason."""
        try:
            response = await asyncio.wait_for(
                backend.generate(request),
                timeout=self.attempt_timeout_s,
            )
        except asyncio.TimeoutError:
            return f"timed out after {self.attempt_timeout_s}s"
        except Exception as e:
            # Backends are expected to report errors, not raise them
            logger.exception(f"{backend.name} raised during generate")
            return str(e) or type(e).__name__

        if response.status != "success" or response.output is None:
            return response.error or response.error_type or "generation failed"

        try:
            result.output = validate(response.output)
        except ProviderError as e:
            logger.debug(f"{backend.name} raw output rejected: {response.output[:500]}")
            return str(e)

        result.outcomes.append(ProviderOutcome(backend.name, backend.model, success=True))
        logger.info(
            f"Batch generated by {backend.name}",
            extra={"provider": backend.name, "model": backend.model},
        )
        return None

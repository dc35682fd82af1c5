"""
Model boundary layer for text generation.

This package provides a clean abstraction for model invocation,
so the rewriting pipeline stays agnostic of the underlying backend.

Supported backends:
- CerebrasModelBackend: Hosted OpenAI-compatible chat completions
- WorkersAIModelBackend: Cloudflare Workers AI REST endpoint
- OllamaModelBackend: Local Ollama inference
- StubModelBackend: Deterministic fake model (CI/tests)

Example usage:
    from inference import ModelRequest, ProviderChain, StubModelBackend

    chain = ProviderChain([StubModelBackend()])
    result = await chain.run(ModelRequest(system_prompt="...", user_content='["Hi"]'), json.loads)
"""

from .types import ModelRequest, ModelResponse, ModelStatus, ProviderOutcome
from .base import HTTPModelBackend, ModelBackend, ProviderError
from .stub import StubModelBackend
from .ollama import OllamaModelBackend
from .cerebras import CerebrasModelBackend
from .workers_ai import WorkersAIModelBackend
from .chain import ChainResult, ProviderChain, NO_PROVIDER_ERROR

__all__ = [
    "ModelRequest",
    "ModelResponse",
    "ModelStatus",
    "ProviderOutcome",
    "ModelBackend",
    "HTTPModelBackend",
    "ProviderError",
    "StubModelBackend",
    "OllamaModelBackend",
    "CerebrasModelBackend",
    "WorkersAIModelBackend",
    "ChainResult",
    "ProviderChain",
    "NO_PROVIDER_ERROR",
]

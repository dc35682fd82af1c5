from dataclasses import dataclass
from typing import Optional, Literal

ModelStatus = Literal["success", "recoverable_error", "fatal_error"]


@dataclass
class ModelRequest:
    system_prompt: str         # batch instruction, sent in the system role
    user_content: str          # JSON-encoded array of markup fragments
    max_tokens: int = 4096
    temperature: float = 0.8
    timeout_s: Optional[float] = 20.0


@dataclass
class ModelResponse:
    status: ModelStatus
    output: Optional[str] = None
    error: Optional[str] = None        # human-readable reason, used in x-errors
    error_type: Optional[str] = None   # timeout | http_error | empty_output | backend_unavailable


@dataclass
class ProviderOutcome:
    """One attempt against one backend of the provider chain."""

    provider_name: str
    model: str
    success: bool
    error: Optional[str] = None

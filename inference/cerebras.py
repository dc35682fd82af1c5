"""
Cerebras inference backend.

Cerebras exposes an OpenAI-compatible chat completions endpoint; the batch
instruction goes in the system role and the JSON payload in the user role.
"""

from typing import Any, Dict, Optional

import httpx

from .base import HTTPModelBackend
from .types import ModelRequest

CEREBRAS_API_URL = "https://api.cerebras.ai/v1/chat/completions"
DEFAULT_CEREBRAS_MODEL = "gpt-oss-120b"


class CerebrasModelBackend(HTTPModelBackend):
    """Preferred backend: fast hosted inference, needs CEREBRAS_API_KEY."""

    name = "Cerebras"

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_CEREBRAS_MODEL,
        api_url: str = CEREBRAS_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport=transport)
        self.api_key = api_key
        self.model = model_name
        self.api_url = api_url

    def build_call(self, request: ModelRequest):
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        payload = {
            "model": self.model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_content},
            ],
        }
        return self.api_url, headers, payload

    def extract_text(self, data: Dict[str, Any]) -> str:
        choices = data.get("choices") or [{}]
        return (choices[0].get("message") or {}).get("content") or ""

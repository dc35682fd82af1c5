"""
Cloudflare Workers AI backend (REST).

POST {base}/accounts/{account_id}/ai/run/{model}
Reply shape: {"success": true, "result": {"response": "..."}}
"""

from typing import Any, Dict, Optional

import httpx

from .base import HTTPModelBackend
from .types import ModelRequest

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4"
DEFAULT_WORKERS_AI_MODEL = "@cf/meta/llama-3.1-8b-instruct"


class WorkersAIModelBackend(HTTPModelBackend):
    """Secondary backend, needs an account id and an API token."""

    name = "Cloudflare Workers AI"

    def __init__(
        self,
        account_id: str,
        api_token: str,
        model_name: str = DEFAULT_WORKERS_AI_MODEL,
        api_base: str = CLOUDFLARE_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport=transport)
        self.account_id = account_id
        self.api_token = api_token
        self.model = model_name
        self.api_base = api_base.rstrip("/")

    def build_call(self, request: ModelRequest):
        url = f"{self.api_base}/accounts/{self.account_id}/ai/run/{self.model}"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_token}",
        }
        payload = {
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_content},
            ],
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }
        return url, headers, payload

    def extract_text(self, data: Dict[str, Any]) -> str:
        result = data.get("result") or {}
        response = result.get("response")
        return response if isinstance(response, str) else ""

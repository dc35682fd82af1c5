from typing import Any, Dict, Optional

import httpx

from .base import HTTPModelBackend
from .types import ModelRequest


class OllamaModelBackend(HTTPModelBackend):
    """
    Ollama backend for local model inference.

    Uses /api/chat so the batch instruction can travel in the system role.
    Handy as a last-resort fallback or for offline development.
    """

    name = "Ollama"

    def __init__(
        self,
        model_name: str,
        base_url: str = "http://localhost:11434",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Ollama backend.

        Args:
            model_name: Name of the model (e.g. "llama3.1", "phi3:mini")
            base_url:   Base URL of the Ollama service
        """
        super().__init__(transport=transport)
        self.model = model_name
        self.base_url = base_url.rstrip("/")

    def build_call(self, request: ModelRequest):
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_content},
            ],
            "stream": False,
            "options": {
                "num_predict": request.max_tokens,
                "temperature": request.temperature,
            },
        }
        return f"{self.base_url}/api/chat", {"Content-Type": "application/json"}, payload

    def extract_text(self, data: Dict[str, Any]) -> str:
        return (data.get("message") or {}).get("content") or ""

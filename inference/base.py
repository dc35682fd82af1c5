import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import httpx

from .types import ModelRequest, ModelResponse

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """A generation backend returned an unusable answer."""
    pass


class ModelBackend(ABC):
    """
    Abstract generation boundary.
    The provider chain depends ONLY on this interface.
    """

    name: str = "backend"
    model: str = ""

    @abstractmethod
    async def generate(self, request: ModelRequest) -> ModelResponse:
        """Generate raw model text for a system prompt and a payload."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, model={self.model!r})"


class HTTPModelBackend(ModelBackend):
    """
    Shared plumbing for backends reached over a JSON HTTP API.

    Subclasses build the payload and pull the text out of the reply;
    this class owns transport errors and maps them onto ModelResponse.
    Never raises.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # Injected in tests (httpx.MockTransport)
        self._transport = transport

    @abstractmethod
    def build_call(self, request: ModelRequest) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        """Return (url, headers, json payload) for one generation call."""
        raise NotImplementedError

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """Pull the generated text out of a decoded reply."""
        raise NotImplementedError

    async def generate(self, request: ModelRequest) -> ModelResponse:
        url, headers, payload = self.build_call(request)

        try:
            async with httpx.AsyncClient(
                timeout=request.timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=payload, headers=headers)

            if response.status_code >= 400:
                raise ProviderError(f"{self.name} API {response.status_code}: {response.text}")

            text = (self.extract_text(response.json()) or "").strip()
            if not text:
                raise ProviderError(f"{self.name} returned empty content")

            return ModelResponse(status="success", output=text)

        except httpx.TimeoutException:
            return ModelResponse(
                status="recoverable_error",
                error=f"request timed out after {request.timeout_s}s",
                error_type="timeout",
            )

        except ProviderError as e:
            return ModelResponse(
                status="fatal_error",
                error=str(e),
                error_type="http_error",
            )

        except (httpx.RequestError, ValueError, LookupError, TypeError) as e:
            # undecodable or unexpectedly shaped reply bodies land here too
            logger.debug(f"{self.name} call failed: {e}", exc_info=True)
            return ModelResponse(
                status="fatal_error",
                error=str(e) or type(e).__name__,
                error_type="backend_unavailable",
            )

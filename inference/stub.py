from typing import List, Optional

from .base import ModelBackend
from .types import ModelRequest, ModelResponse


class StubModelBackend(ModelBackend):
    """
    Deterministic fake backend for testing and CI.

    Without scripted outputs it echoes the request payload back, which is a
    valid batch answer that leaves every fragment unchanged. With scripted
    outputs it returns them in order, one per call; a scripted ``None``
    produces a recoverable error.
    """

    def __init__(
        self,
        outputs: Optional[List[Optional[str]]] = None,
        name: str = "Stub",
        model: str = "stub-echo",
    ):
        self.name = name
        self.model = model
        self._outputs = list(outputs) if outputs is not None else None
        self.calls: List[ModelRequest] = []

    async def generate(self, request: ModelRequest) -> ModelResponse:
        self.calls.append(request)

        if self._outputs is None:
            return ModelResponse(status="success", output=request.user_content)

        if not self._outputs:
            return ModelResponse(
                status="fatal_error",
                error="stub has no scripted output left",
                error_type="backend_unavailable",
            )

        output = self._outputs.pop(0)
        if output is None:
            return ModelResponse(
                status="recoverable_error",
                error="stub scripted failure",
                error_type="empty_output",
            )

        return ModelResponse(status="success", output=output)

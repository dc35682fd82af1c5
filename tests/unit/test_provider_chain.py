"""
tests/unit/test_provider_chain.py

Tests for ProviderChain ordering, deadlines and error accumulation.

Verifies:
✔ Backends are tried in order and the first valid answer wins
✔ Later backends are not called after a success
✔ A hanging backend is cut off by the per-attempt deadline
✔ A raising backend is recorded, not propagated
✔ Empty chain reports "No AI provider available"
✔ Never raises
"""

import asyncio
import json

import pytest

from inference import (
    ModelBackend,
    ModelRequest,
    ModelResponse,
    NO_PROVIDER_ERROR,
    ProviderChain,
    ProviderError,
    StubModelBackend,
)


# ─────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────


class SlowBackend(ModelBackend):
    name = "Slow"
    model = "slow-1"

    def __init__(self):
        self.cancelled = False

    async def generate(self, request):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return ModelResponse(status="success", output="[]")


class BrokenBackend(ModelBackend):
    name = "Broken"
    model = "broken-1"

    async def generate(self, request):
        raise RuntimeError("socket exploded")


def make_request():
    return ModelRequest(system_prompt="rewrite", user_content=json.dumps(["a"]), max_tokens=300)


def validate_one(raw):
    parsed = json.loads(raw)
    if len(parsed) != 1:
        raise ProviderError(f"expected 1 items but got {len(parsed)}")
    return parsed


# ─────────────────────────────────────────────────────
# Ordering
# ─────────────────────────────────────────────────────


class TestChainOrdering:

    @pytest.mark.asyncio
    async def test_first_success_wins(self):
        first = StubModelBackend(outputs=['["first"]'], name="First", model="m1")
        second = StubModelBackend(outputs=['["second"]'], name="Second", model="m2")

        result = await ProviderChain([first, second]).run(make_request(), validate_one)

        assert result.output == ["first"]
        assert result.errors == []
        assert result.winner.provider_name == "First"
        assert result.winner.model == "m1"
        assert second.calls == []

    @pytest.mark.asyncio
    async def test_failure_advances_with_labeled_error(self):
        first = StubModelBackend(outputs=[None], name="First")
        second = StubModelBackend(outputs=['["second"]'], name="Second")

        result = await ProviderChain([first, second]).run(make_request(), validate_one)

        assert result.output == ["second"]
        assert result.errors == ["First: stub scripted failure"]
        assert [o.success for o in result.outcomes] == [False, True]

    @pytest.mark.asyncio
    async def test_validation_error_is_recorded(self):
        first = StubModelBackend(outputs=['["a", "b"]'], name="First")

        result = await ProviderChain([first]).run(make_request(), validate_one)

        assert result.output is None
        assert result.winner is None
        assert result.errors == ["First: expected 1 items but got 2"]

    def test_names(self):
        chain = ProviderChain([StubModelBackend(name="A"), StubModelBackend(name="B")])
        assert chain.names == ["A", "B"]
        assert len(chain) == 2


# ─────────────────────────────────────────────────────
# Failure modes
# ─────────────────────────────────────────────────────


class TestChainFailures:

    @pytest.mark.asyncio
    async def test_empty_chain(self):
        result = await ProviderChain([]).run(make_request(), validate_one)

        assert result.output is None
        assert result.errors == [NO_PROVIDER_ERROR]

    @pytest.mark.asyncio
    async def test_hanging_backend_times_out(self):
        slow = SlowBackend()
        fallback = StubModelBackend(outputs=['["ok"]'], name="Fallback")

        chain = ProviderChain([slow, fallback], attempt_timeout_s=0.05)
        result = await chain.run(make_request(), validate_one)

        assert slow.cancelled
        assert result.output == ["ok"]
        assert result.errors == ["Slow: timed out after 0.05s"]

    @pytest.mark.asyncio
    async def test_raising_backend_is_contained(self):
        fallback = StubModelBackend(outputs=['["ok"]'], name="Fallback")

        result = await ProviderChain([BrokenBackend(), fallback]).run(make_request(), validate_one)

        assert result.output == ["ok"]
        assert result.errors == ["Broken: socket exploded"]

    @pytest.mark.asyncio
    async def test_all_fail(self):
        chain = ProviderChain([
            StubModelBackend(outputs=[None], name="A"),
            StubModelBackend(outputs=["not json"], name="B"),
        ])

        def validate(raw):
            try:
                return validate_one(raw)
            except json.JSONDecodeError:
                raise ProviderError("response contained invalid JSON")

        result = await chain.run(make_request(), validate)

        assert result.output is None
        assert result.errors == ["A: stub scripted failure", "B: response contained invalid JSON"]

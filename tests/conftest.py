"""Shared fixtures: registry, descriptors and LiteLLM stream chunks."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from types import SimpleNamespace
from typing import Any

import pytest

from reasonbridge.core.interface.config import ModelDescriptor
from reasonbridge.core.registry import ProviderRegistry, build_default_registry


@pytest.fixture
def registry() -> ProviderRegistry:
    return build_default_registry()


@pytest.fixture
def openai_smart(registry: ProviderRegistry) -> ModelDescriptor:
    return registry.descriptor_for("openai:smart")


@pytest.fixture
def anthropic_smart(registry: ProviderRegistry) -> ModelDescriptor:
    return registry.descriptor_for("anthropic:smart")


def _chunk(
    content: str | None = None,
    reasoning: str | None = None,
    thinking_blocks: list[dict[str, Any]] | None = None,
    tool_calls: list[Any] | None = None,
    finish_reason: str | None = None,
    usage: dict[str, int] | None = None,
) -> SimpleNamespace:
    """Build an object shaped like LiteLLM's ``ModelResponseStream``."""
    delta = SimpleNamespace(
        content=content,
        reasoning_content=reasoning,
        thinking_blocks=thinking_blocks,
        tool_calls=tool_calls,
    )
    choice = SimpleNamespace(delta=delta, finish_reason=finish_reason)
    return SimpleNamespace(
        model="test-model",
        choices=[choice],
        usage=SimpleNamespace(**usage) if usage else None,
    )


def _tool_call_delta(
    index: int, call_id: str | None = None, name: str | None = None, arguments: str = ""
) -> SimpleNamespace:
    return SimpleNamespace(
        index=index,
        id=call_id,
        function=SimpleNamespace(name=name, arguments=arguments),
    )


@pytest.fixture
def make_chunk() -> Callable[..., SimpleNamespace]:
    return _chunk


@pytest.fixture
def make_tool_call_delta() -> Callable[..., SimpleNamespace]:
    return _tool_call_delta


@pytest.fixture
def stream_of() -> Callable[[list[Any]], AsyncIterator[Any]]:
    """Turn a list of chunks into the async iterator ``acompletion`` returns."""

    def _factory(chunks: list[Any]) -> AsyncIterator[Any]:
        async def _gen() -> AsyncIterator[Any]:
            for chunk in chunks:
                yield chunk

        return _gen()

    return _factory

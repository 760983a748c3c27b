"""ModelClient — streams a reply from any configured provider via LiteLLM.

Before every call the history is translated for the provider about to be
invoked, so reasoning produced by one provider never reaches another in a
shape its schema validator rejects.
"""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

import litellm

from reasonbridge.core.interface.config import ResolvedModel
from reasonbridge.core.interface.models import Message
from reasonbridge.core.interface.stream import StreamAccumulator
from reasonbridge.core.interface.transpiler import LiteLLMTranspiler
from reasonbridge.core.translator import UnresolvedReasoningPolicy, translate_history
from reasonbridge.errors import StreamFailure
from reasonbridge.utils.telemetry import (
    ATTR_HISTORY_LENGTH,
    ATTR_MODEL,
    ATTR_PROVIDER,
    ATTR_REASONING,
    ATTR_TRANSLATED,
    get_tracer,
    record_completion,
)

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class ModelClient:
    """Async streaming client for the models of a provider registry.

    Usage::

        registry = build_default_registry()
        client = ModelClient()
        async for draft in client.stream(history, registry.resolve("anthropic:smart")):
            render(draft)
    """

    def __init__(
        self,
        policy: UnresolvedReasoningPolicy = UnresolvedReasoningPolicy.AUTO,
    ) -> None:
        self.policy = policy

    def prepare(self, history: Sequence[Message], model: ResolvedModel) -> list[dict[str, Any]]:
        """Translate *history* for *model*'s provider and convert it for LiteLLM."""
        translated = translate_history(history, model.provider, policy=self.policy)
        return LiteLLMTranspiler(model.provider).to_provider(translated)

    async def stream(
        self,
        history: Sequence[Message],
        model: ResolvedModel,
        *,
        tools: list[dict[str, Any]] | None = None,
        message_id: str | None = None,
        **kwargs: Any,
    ) -> AsyncIterator[Message]:
        """Yield successive drafts of the assistant reply; the last one is final.

        Drafts carry no provenance; attaching it is up to the caller once the
        stream has completed.

        Raises:
            StreamFailure: If the provider call fails before or while streaming.
        """
        with _tracer.start_as_current_span("model.stream") as span:
            span.set_attribute(ATTR_MODEL, model.model_id)
            span.set_attribute(ATTR_PROVIDER, model.provider.value)
            span.set_attribute(ATTR_REASONING, model.descriptor.reasoning_capable)
            span.set_attribute(ATTR_HISTORY_LENGTH, len(history))
            span.set_attribute(ATTR_TRANSLATED, _count_foreign_reasoning(history, model))

            call_kwargs: dict[str, Any] = {
                "model": model.litellm_model,
                "messages": self.prepare(history, model),
                "stream": True,
                **model.request_options,
                **(model.tool_options if tools else {}),
                **kwargs,
            }
            if model.api_key:
                call_kwargs["api_key"] = model.api_key
            if model.api_base:
                call_kwargs["api_base"] = model.api_base
            if tools:
                call_kwargs["tools"] = tools

            accumulator = StreamAccumulator(model.provider, message_id=message_id)
            logger.debug("Streaming %s (%s)", model.model_id, model.litellm_model)

            try:
                response = await litellm.acompletion(**call_kwargs)  # pyright: ignore[reportUnknownMemberType]
                async for chunk in response:
                    accumulator.feed(chunk)
                    yield accumulator.snapshot()
            except Exception as exc:
                logger.warning("Stream from %s failed: %s", model.model_id, exc)
                raise StreamFailure(model.model_id, str(exc)) from exc

            record_completion(span, accumulator.usage, accumulator.finish_reason)
            yield accumulator.finalize()

    async def complete(
        self,
        history: Sequence[Message],
        model: ResolvedModel,
        **kwargs: Any,
    ) -> Message:
        """Consume the whole stream and return the final (unannotated) message."""
        final: Message | None = None
        async for draft in self.stream(history, model, **kwargs):
            final = draft
        assert final is not None
        return final


def _count_foreign_reasoning(history: Sequence[Message], model: ResolvedModel) -> int:
    """Messages whose reasoning needs translating for *model*'s provider."""
    return sum(
        1
        for m in history
        if m.has_reasoning and m.provenance is not None and m.provenance.provider != model.provider
    )

"""Conversation session — one conversation, one model call at a time.

Each call runs the same serialized sequence:

1. translate the history for the provider about to be called and send it,
2. stream the reply into a provenance-less draft,
3. annotate the finished reply with the model that produced it,
4. append it to the history.

A cancelled or failed call never reaches steps 3 and 4: the draft is
discarded and the history stays as it was before the call.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from reasonbridge.core.interface.client import ModelClient
from reasonbridge.core.interface.config import Provider, ResolvedModel
from reasonbridge.core.interface.models import ChatRequest, Conversation, Message
from reasonbridge.core.provenance import annotate, merge_annotations
from reasonbridge.core.registry import ProviderRegistry
from reasonbridge.utils.telemetry import ATTR_CANCELLED, ATTR_MODEL, get_tracer

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

DraftCallback = Callable[[Message], None]


class ConversationSession:
    """Owns the message history of a single conversation.

    Usage::

        session = ConversationSession(build_default_registry())
        reply = await session.send("Why is the sky blue?", "openai:smart")
        reply = await session.send("Shorter, please.", "anthropic:smart")
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        client: ModelClient | None = None,
        messages: Iterable[Message] = (),
    ) -> None:
        self.registry = registry
        self.client = client or ModelClient()
        self._messages: list[Message] = list(messages)
        self._draft: Message | None = None
        self._draft_provider: Provider | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_request(
        cls,
        request: ChatRequest | Conversation,
        registry: ProviderRegistry,
        client: ModelClient | None = None,
    ) -> "ConversationSession":
        """Build a session from inbound messages, merging their model annotations."""
        messages = [merge_annotations(m, registry) for m in request.messages]
        return cls(registry, client, messages)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def draft(self) -> Message | None:
        """The reply currently streaming, if any. Never carries provenance."""
        return self._draft

    @property
    def draft_provider(self) -> Provider | None:
        """Provider generating the current draft, for rendering its reasoning."""
        return self._draft_provider

    def conversation(self) -> Conversation:
        """Snapshot of the history, e.g. for saving."""
        return Conversation(messages=list(self._messages))

    async def send(
        self,
        text: str,
        model_id: str,
        *,
        tools: list[dict[str, Any]] | None = None,
        on_draft: DraftCallback | None = None,
        **kwargs: Any,
    ) -> Message:
        """Append a user message and generate the reply with *model_id*.

        Raises:
            ConfigurationError: If *model_id* cannot be resolved. Nothing is
                appended in that case.
            StreamFailure: If the model call fails. The user message stays.
        """
        model = self.registry.resolve(model_id)
        async with self._lock:
            self._messages.append(Message.user(text))
            reply = await self._generate(model, self._messages, tools, on_draft, kwargs)
            self._messages.append(reply)
            return reply

    async def generate(
        self,
        model_id: str,
        *,
        tools: list[dict[str, Any]] | None = None,
        on_draft: DraftCallback | None = None,
        **kwargs: Any,
    ) -> Message:
        """Generate the next assistant message for the current history."""
        model = self.registry.resolve(model_id)
        async with self._lock:
            reply = await self._generate(model, self._messages, tools, on_draft, kwargs)
            self._messages.append(reply)
            return reply

    async def reload(
        self,
        model_id: str,
        *,
        tools: list[dict[str, Any]] | None = None,
        on_draft: DraftCallback | None = None,
        **kwargs: Any,
    ) -> Message:
        """Regenerate the last assistant message, possibly with another model.

        The previous reply is only replaced once the new one has completed.
        """
        model = self.registry.resolve(model_id)
        async with self._lock:
            history = list(self._messages)
            if history and history[-1].role == "assistant":
                history.pop()
            reply = await self._generate(model, history, tools, on_draft, kwargs)
            self._messages = [*history, reply]
            return reply

    async def _generate(
        self,
        model: ResolvedModel,
        history: Sequence[Message],
        tools: list[dict[str, Any]] | None,
        on_draft: DraftCallback | None,
        kwargs: dict[str, Any],
    ) -> Message:
        with _tracer.start_as_current_span("conversation.send") as span:
            span.set_attribute(ATTR_MODEL, model.model_id)

            final: Message | None = None
            self._draft_provider = model.provider
            try:
                async for draft in self.client.stream(tuple(history), model, tools=tools, **kwargs):
                    self._draft = draft
                    final = draft
                    if on_draft is not None:
                        on_draft(draft)
            except asyncio.CancelledError:
                span.set_attribute(ATTR_CANCELLED, True)
                logger.info("Generation with %s cancelled; draft discarded", model.model_id)
                raise
            finally:
                self._draft = None
                self._draft_provider = None

            assert final is not None
            return annotate(final, model.descriptor)

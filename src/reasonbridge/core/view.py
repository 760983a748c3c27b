"""Canonical message view — render-ready parts, whatever the source provider.

The view is read-only and cheap; it can be recomputed on every render.
"""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from reasonbridge.core.codec import decode
from reasonbridge.core.interface.config import Provider
from reasonbridge.core.interface.models import (
    Message,
    MessagePart,
    ReasoningPart,
    StepStartPart,
    TextPart,
    ToolInvocationPart,
    UnknownPart,
)


class NormalizedText(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    content: str


class NormalizedReasoning(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["reasoning"] = "reasoning"
    content: str


class NormalizedToolInvocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["tool-invocation"] = "tool-invocation"
    tool_name: str
    args: dict[str, Any] = {}
    state: str
    result: Any = None


class NormalizedUnknown(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["unknown"] = "unknown"
    content: str


NormalizedPart = NormalizedText | NormalizedReasoning | NormalizedToolInvocation | NormalizedUnknown


class MessageView(BaseModel):
    """Everything a renderer needs for one message."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: str
    model: str | None = None
    has_reasoning: bool = False
    pending: bool = False
    parts: list[NormalizedPart] = []


def normalize(message: Message, *, provider: Provider | None = None) -> list[NormalizedPart]:
    """Normalize the parts of *message* for display.

    Reasoning is decoded with the message's provenance. For drafts that have
    no provenance yet, *provider* (the provider currently streaming) is used
    instead; without either, reasoning content is empty. Step markers are
    left out.
    """
    source = message.provenance.provider if message.provenance is not None else provider

    result: list[NormalizedPart] = []
    for part in message.parts:
        normalized = _normalize_part(part, source)
        if normalized is not None:
            result.append(normalized)
    return result


def _normalize_part(part: MessagePart, source: Provider | None) -> NormalizedPart | None:
    if isinstance(part, StepStartPart):
        return None
    if isinstance(part, TextPart):
        return NormalizedText(content=part.text)
    if isinstance(part, ReasoningPart):
        return NormalizedReasoning(content=decode(source, part).content)
    if isinstance(part, ToolInvocationPart):
        return NormalizedToolInvocation(
            tool_name=part.tool_name,
            args=part.args,
            state=part.state,
            result=part.result,
        )
    raw = part.raw if isinstance(part, UnknownPart) else part.wire()
    return NormalizedUnknown(content=json.dumps(raw, separators=(",", ":"), default=str))


def is_pending(message: Message) -> bool:
    """True while a message has nothing renderable yet (no parts or only a step marker)."""
    return all(isinstance(part, StepStartPart) for part in message.parts)


def message_view(message: Message, *, provider: Provider | None = None) -> MessageView:
    """Build the full render model of *message*."""
    return MessageView(
        id=message.id,
        role=message.role,
        model=message.provenance.model_id if message.provenance is not None else None,
        has_reasoning=message.has_reasoning,
        pending=is_pending(message),
        parts=normalize(message, provider=provider),
    )

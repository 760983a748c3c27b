"""Message schema and model identity."""

from reasonbridge.core.interface.config import (
    ModelClass,
    ModelDescriptor,
    Provider,
    ResolvedModel,
)
from reasonbridge.core.interface.models import (
    ChatRequest,
    Conversation,
    FilePart,
    Message,
    MessagePart,
    ReasoningPart,
    SourcePart,
    StepStartPart,
    TextPart,
    ToolInvocationPart,
    UnknownPart,
)

__all__ = [
    "ChatRequest",
    "Conversation",
    "FilePart",
    "Message",
    "MessagePart",
    "ModelClass",
    "ModelDescriptor",
    "Provider",
    "ReasoningPart",
    "ResolvedModel",
    "SourcePart",
    "StepStartPart",
    "TextPart",
    "ToolInvocationPart",
    "UnknownPart",
]

"""Message schema — the in-memory form of a chat conversation.

Messages follow the streaming library's UI message format: an ordered list
of typed parts per message. Every part carries exactly one ``type`` tag;
inbound parts with a tag we do not know, or with a body that does not fit
their tag, are kept as ``UnknownPart`` rather than rejected, so nothing a
client sends is silently lost.

Reasoning parts keep their provider-native fields verbatim. Which provider's
shape a reasoning part has is never guessed from its fields: it is read from
the owning message's ``provenance``.
"""

import logging
from typing import TYPE_CHECKING, Annotated, Any, Literal
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from reasonbridge.core.interface.config import ModelDescriptor

if TYPE_CHECKING:
    from reasonbridge.core.interface.client import ModelClient
    from reasonbridge.core.registry import ProviderRegistry
    from reasonbridge.core.session import ConversationSession

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Message parts
# ---------------------------------------------------------------------------


class _Part(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def wire(self) -> dict[str, Any]:
        """Serialize to the UI message wire format."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TextPart(_Part):
    """Plain text emitted by the user or the model."""

    type: Literal["text"] = "text"
    text: str


class ReasoningPart(_Part):
    """Chain-of-thought emitted by a reasoning-capable model.

    Apart from ``type`` the fields are whatever the producing provider's wire
    shape defines, e.g. ``reasoning``/``details`` or ``thinking``. They are
    kept as-is; ``reasonbridge.core.codec`` interprets them.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["reasoning"] = "reasoning"

    @property
    def payload(self) -> dict[str, Any]:
        """The raw native fields, including ``type``."""
        return self.model_dump(mode="python")


class ToolInvocationPart(_Part):
    """A tool call made by the model and, once available, its result.

    On the wire the call sits under ``toolInvocation``. Fields not modelled
    here (e.g. ``step``) are kept, inside and next to ``toolInvocation``, and
    written back as they came.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["tool-invocation"] = "tool-invocation"
    tool_call_id: str = Field(default_factory=lambda: uuid4().hex[:12])
    tool_name: str
    args: dict[str, Any] = {}
    state: Literal["partial-call", "call", "result"] = "call"
    result: Any = None
    part_fields: dict[str, Any] = Field(default_factory=dict, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _unnest_invocation(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("toolInvocation"), dict):
            flat = dict(data["toolInvocation"])
            if "type" in data:
                flat["type"] = data["type"]
            outer = {k: v for k, v in data.items() if k not in ("type", "toolInvocation")}
            if outer:
                flat["partFields"] = outer
            return flat
        return data

    def wire(self) -> dict[str, Any]:
        invocation = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        part_type = invocation.pop("type")
        return {"type": part_type, **self.part_fields, "toolInvocation": invocation}


class FilePart(_Part):
    """An attached file, base64 or URL data."""

    type: Literal["file"] = "file"
    mime_type: str
    data: str


class SourcePart(_Part):
    """A cited source (e.g. a web search result)."""

    type: Literal["source"] = "source"
    source: dict[str, Any] = {}


class StepStartPart(_Part):
    """Marks the start of a generation step. Carries no content."""

    type: Literal["step-start"] = "step-start"


class UnknownPart(_Part):
    """Any part whose tag is not recognised. ``raw`` is the original dict."""

    type: Literal["unknown"] = "unknown"
    raw: dict[str, Any] = {}


MessagePart = Annotated[
    TextPart
    | ReasoningPart
    | ToolInvocationPart
    | FilePart
    | SourcePart
    | StepStartPart
    | UnknownPart,
    Field(discriminator="type"),
]

_KNOWN_PART_TYPES = frozenset(
    {"text", "reasoning", "tool-invocation", "file", "source", "step-start", "unknown"}
)


_PART_ADAPTER: TypeAdapter[Any] = TypeAdapter(MessagePart)


def _coerce_part(item: Any) -> Any:
    """Validate one inbound part, falling back to ``UnknownPart``.

    Unrecognised tags and known tags with an invalid body both end up as
    ``UnknownPart``, so one bad part never rejects the whole message.
    """
    if isinstance(item, _Part):
        return item
    if not isinstance(item, dict):
        return UnknownPart(raw={"value": item})
    if item.get("type") not in _KNOWN_PART_TYPES:
        return UnknownPart(raw=item)
    try:
        return _PART_ADAPTER.validate_python(item)
    except ValidationError as exc:
        logger.debug("Keeping invalid %r part as unknown: %s", item.get("type"), exc)
        return UnknownPart(raw=item)


# ---------------------------------------------------------------------------
# Message
# ---------------------------------------------------------------------------


class Message(BaseModel):
    """A single message of a conversation.

    ``provenance`` is only ever set on finalized assistant messages and only
    once (see ``reasonbridge.core.provenance``). ``annotations`` carries the
    out-of-band annotations a client sends back with the message.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex[:12])
    role: Literal["system", "user", "assistant"]
    parts: tuple[MessagePart, ...] = ()
    provenance: ModelDescriptor | None = None
    annotations: tuple[dict[str, Any], ...] = ()

    @field_validator("parts", mode="before")
    @classmethod
    def _wrap_unknown_parts(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_coerce_part(item) for item in value]
        return value

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(part.text for part in self.parts if isinstance(part, TextPart))

    @property
    def reasoning_parts(self) -> list[ReasoningPart]:
        return [part for part in self.parts if isinstance(part, ReasoningPart)]

    @property
    def has_reasoning(self) -> bool:
        return any(isinstance(part, ReasoningPart) for part in self.parts)

    def with_parts(self, parts: list[MessagePart] | tuple[MessagePart, ...]) -> "Message":
        """Return a copy of this message with *parts* replacing its parts."""
        return self.model_copy(update={"parts": tuple(parts)})

    def wire(self) -> dict[str, Any]:
        """Serialize to the UI message wire format."""
        data: dict[str, Any] = {
            "id": self.id,
            "role": self.role,
            "parts": [part.wire() for part in self.parts],
        }
        if self.provenance is not None:
            data["provenance"] = self.provenance.model_dump(mode="json")
        if self.annotations:
            data["annotations"] = list(self.annotations)
        return data

    @classmethod
    def system(cls, text: str) -> "Message":
        """Create a system message."""
        return cls(role="system", parts=(TextPart(text=text),))

    @classmethod
    def user(cls, text: str) -> "Message":
        """Create a user message."""
        return cls(role="user", parts=(TextPart(text=text),))

    @classmethod
    def assistant(
        cls,
        *parts: MessagePart,
        provenance: ModelDescriptor | None = None,
    ) -> "Message":
        """Create an assistant message from ready-made parts."""
        return cls(role="assistant", parts=tuple(parts), provenance=provenance)


# ---------------------------------------------------------------------------
# Conversation & inbound request
# ---------------------------------------------------------------------------


class Conversation(BaseModel):
    """An ordered sequence of messages forming one conversation."""

    messages: list[Message] = []

    def append(self, message: Message) -> None:
        """Append a message to the conversation."""
        self.messages.append(message)

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):  # type: ignore[override]
        return iter(self.messages)


class ChatRequest(BaseModel):
    """Inbound chat request: the full history plus the model to call next."""

    messages: list[Message]
    model: str

    def to_session(
        self, registry: "ProviderRegistry", client: "ModelClient | None" = None
    ) -> "ConversationSession":
        """Build a session from this request, merging inbound model annotations."""
        from reasonbridge.core.session import ConversationSession

        return ConversationSession.from_request(self, registry, client)

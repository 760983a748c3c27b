"""Stream accumulator — builds an assistant message from LiteLLM deltas.

Reasoning is accumulated in the wire shape of the provider that is
generating, so the finished message can be stored with its provenance and
later decoded by that provider's codec. Drafts produced while streaming
carry no provenance.
"""

import json
from typing import Any
from uuid import uuid4

from reasonbridge.core.interface.config import Provider
from reasonbridge.core.interface.models import (
    Message,
    MessagePart,
    ReasoningPart,
    StepStartPart,
    TextPart,
    ToolInvocationPart,
)


class _TextBuilder:
    def __init__(self) -> None:
        self.chunks: list[str] = []

    def build(self, final: bool) -> MessagePart:
        return TextPart(text="".join(self.chunks))


class _ReasoningBuilder:
    def __init__(self, provider: Provider) -> None:
        self.provider = provider
        self.chunks: list[str] = []
        self.signature: str | None = None
        self.redacted: list[str] = []

    def build(self, final: bool) -> MessagePart:
        text = "".join(self.chunks)
        if self.provider is Provider.ANTHROPIC:
            thinking: dict[str, Any] = {"content": text}
            if self.signature:
                thinking["signature"] = self.signature
            return ReasoningPart.model_validate({"type": "reasoning", "thinking": thinking})

        details: list[dict[str, Any]] = []
        if text:
            detail: dict[str, Any] = {"type": "text", "text": text}
            if self.signature:
                detail["signature"] = self.signature
            details.append(detail)
        details.extend({"type": "redacted", "data": data} for data in self.redacted)
        return ReasoningPart.model_validate(
            {"type": "reasoning", "reasoning": text, "details": details}
        )


class _ToolCallBuilder:
    def __init__(self, tool_call_id: str | None) -> None:
        self.tool_call_id = tool_call_id or uuid4().hex[:12]
        self.name = ""
        self.arguments: list[str] = []

    def build(self, final: bool) -> MessagePart:
        raw = "".join(self.arguments)
        args = _parse_arguments(raw)
        complete = final or (args is not None and bool(raw))
        return ToolInvocationPart(
            tool_call_id=self.tool_call_id,
            tool_name=self.name,
            args=args if args is not None else {},
            state="call" if complete else "partial-call",
        )


class _StepMarker:
    def build(self, final: bool) -> MessagePart:
        return StepStartPart()


_Builder = _TextBuilder | _ReasoningBuilder | _ToolCallBuilder | _StepMarker


class StreamAccumulator:
    """Collects streamed deltas of one model call into message parts."""

    def __init__(
        self,
        provider: Provider,
        message_id: str | None = None,
    ) -> None:
        self.provider = provider
        self.message_id = message_id or uuid4().hex[:12]
        self._builders: list[_Builder] = [_StepMarker()]
        self._text: _TextBuilder | None = None
        self._reasoning: _ReasoningBuilder | None = None
        self._tools: dict[int, _ToolCallBuilder] = {}
        self.finish_reason: str | None = None
        self.usage: dict[str, int] = {}
        self.model: str | None = None

    def feed(self, chunk: Any) -> None:
        """Apply one streamed chunk (a LiteLLM ``ModelResponseStream``)."""
        model = getattr(chunk, "model", None)
        if isinstance(model, str):
            self.model = model
        usage = getattr(chunk, "usage", None)
        if usage is not None:
            self._record_usage(usage)

        choices = getattr(chunk, "choices", None) or []
        if not choices:
            return
        choice = choices[0]
        finish_reason = getattr(choice, "finish_reason", None)
        if finish_reason:
            self.finish_reason = str(finish_reason)

        delta = getattr(choice, "delta", None)
        if delta is None:
            return

        reasoning = getattr(delta, "reasoning_content", None)
        if isinstance(reasoning, str) and reasoning:
            self._reasoning_builder().chunks.append(reasoning)

        for block in getattr(delta, "thinking_blocks", None) or []:
            self._feed_thinking_block(block)

        content = getattr(delta, "content", None)
        if isinstance(content, str) and content:
            self._text_builder().chunks.append(content)

        for tool_call in getattr(delta, "tool_calls", None) or []:
            self._feed_tool_call(tool_call)

    def snapshot(self, *, final: bool = False) -> Message:
        """The message as accumulated so far. Never carries provenance."""
        parts = [builder.build(final) for builder in self._builders]
        return Message(id=self.message_id, role="assistant", parts=tuple(parts))

    def finalize(self) -> Message:
        """The completed message; partial tool calls are closed."""
        return self.snapshot(final=True)

    def _text_builder(self) -> _TextBuilder:
        self._reasoning = None
        if self._text is None:
            self._text = _TextBuilder()
            self._builders.append(self._text)
        return self._text

    def _reasoning_builder(self) -> _ReasoningBuilder:
        self._text = None
        if self._reasoning is None:
            self._reasoning = _ReasoningBuilder(self.provider)
            self._builders.append(self._reasoning)
        return self._reasoning

    def _feed_thinking_block(self, block: Any) -> None:
        # Thinking text also arrives as reasoning_content; only take the
        # signature and redacted data from the blocks.
        if not isinstance(block, dict):
            return
        if block.get("type") == "redacted_thinking" and isinstance(block.get("data"), str):
            self._reasoning_builder().redacted.append(block["data"])
            return
        signature = block.get("signature")
        if isinstance(signature, str) and signature:
            self._reasoning_builder().signature = signature

    def _feed_tool_call(self, tool_call: Any) -> None:
        self._text = None
        self._reasoning = None
        index = getattr(tool_call, "index", None)
        if not isinstance(index, int):
            index = len(self._tools)
        builder = self._tools.get(index)
        if builder is None:
            call_id = getattr(tool_call, "id", None)
            builder = _ToolCallBuilder(call_id if isinstance(call_id, str) else None)
            self._tools[index] = builder
            self._builders.append(builder)

        function = getattr(tool_call, "function", None)
        name = getattr(function, "name", None)
        if isinstance(name, str) and name:
            builder.name = name
        arguments = getattr(function, "arguments", None)
        if isinstance(arguments, str):
            builder.arguments.append(arguments)

    def _record_usage(self, usage: Any) -> None:
        for key in ("prompt_tokens", "completion_tokens", "total_tokens"):
            value = getattr(usage, key, None)
            if isinstance(value, int):
                self.usage[key] = value


def _parse_arguments(raw: str) -> dict[str, Any] | None:
    """Parse streamed JSON tool arguments; ``None`` while still incomplete."""
    if not raw:
        return {}
    try:
        result = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return result if isinstance(result, dict) else {"value": result}

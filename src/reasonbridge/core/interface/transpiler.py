"""Transpiler — converts translated messages to LiteLLM's message format.

LiteLLM takes OpenAI-style messages and adapts them per provider. Two things
need care on top of the plain mapping:

* An assistant message spanning several generation steps is split at its
  step markers: each step becomes an assistant message followed by the tool
  results of that step. Tool calls that never got a result are left out.
* Reasoning parts travel as ``thinking_blocks`` for Anthropic. The Chat
  Completions input schema has no reasoning field, so for OpenAI they stay
  in the history but are not sent.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any

from reasonbridge.core.codec import is_native
from reasonbridge.core.interface.config import Provider
from reasonbridge.core.interface.models import (
    FilePart,
    Message,
    MessagePart,
    ReasoningPart,
    StepStartPart,
    TextPart,
    ToolInvocationPart,
)

logger = logging.getLogger(__name__)


class LiteLLMTranspiler:
    """Converts messages (already translated for *target*) to LiteLLM dicts."""

    def __init__(self, target: Provider) -> None:
        self.target = target

    def to_provider(self, messages: Iterable[Message]) -> list[dict[str, Any]]:
        result: list[dict[str, Any]] = []
        for msg in messages:
            if msg.role == "assistant":
                for step in _split_steps(msg.parts):
                    result.extend(self._step_to_litellm(step))
            else:
                result.append({"role": msg.role, "content": self._content_to_litellm(msg.parts)})
        return result

    def _content_to_litellm(self, parts: tuple[MessagePart, ...]) -> str | list[dict[str, Any]]:
        """Plain string for text-only content, a content array otherwise."""
        if not any(isinstance(p, FilePart) for p in parts):
            return "".join(p.text for p in parts if isinstance(p, TextPart))

        blocks: list[dict[str, Any]] = []
        for part in parts:
            if isinstance(part, TextPart):
                blocks.append({"type": "text", "text": part.text})
            elif isinstance(part, FilePart):
                blocks.append(_file_to_litellm(part))
        return blocks

    def _step_to_litellm(self, step: list[MessagePart]) -> list[dict[str, Any]]:
        text = "".join(p.text for p in step if isinstance(p, TextPart))
        invocations = _resolved_invocations(step)
        thinking_blocks = self._thinking_blocks(step)

        if not text and not invocations and not thinking_blocks:
            return []

        message: dict[str, Any] = {"role": "assistant", "content": text or None}
        if thinking_blocks:
            message["thinking_blocks"] = thinking_blocks
        if invocations:
            message["tool_calls"] = [
                {
                    "id": inv.tool_call_id,
                    "type": "function",
                    "function": {"name": inv.tool_name, "arguments": json.dumps(inv.args)},
                }
                for inv in invocations
            ]

        result = [message]
        result.extend(
            {
                "role": "tool",
                "tool_call_id": inv.tool_call_id,
                "content": json.dumps(inv.result, default=str),
            }
            for inv in invocations
        )
        return result

    def _thinking_blocks(self, step: list[MessagePart]) -> list[dict[str, Any]]:
        if self.target is not Provider.ANTHROPIC:
            return []
        blocks: list[dict[str, Any]] = []
        for part in step:
            if isinstance(part, ReasoningPart) and is_native(Provider.ANTHROPIC, part):
                thinking = part.payload["thinking"]
                blocks.append(
                    {
                        "type": "thinking",
                        "thinking": thinking["content"],
                        "signature": thinking["signature"],
                    }
                )
        return blocks


def _resolved_invocations(step: list[MessagePart]) -> list[ToolInvocationPart]:
    """Tool invocations of *step* that have a result.

    A call without a result cannot be sent: every assistant tool call must be
    answered by a tool message.
    """
    resolved: list[ToolInvocationPart] = []
    for part in step:
        if not isinstance(part, ToolInvocationPart):
            continue
        if part.state == "result":
            resolved.append(part)
        else:
            logger.debug("Skipping unresolved tool call %s (%s)", part.tool_call_id, part.tool_name)
    return resolved


def _split_steps(parts: tuple[MessagePart, ...]) -> list[list[MessagePart]]:
    """Group parts into generation steps delimited by step markers."""
    steps: list[list[MessagePart]] = [[]]
    for part in parts:
        if isinstance(part, StepStartPart):
            if steps[-1]:
                steps.append([])
            continue
        steps[-1].append(part)
    return steps


def _file_to_litellm(part: FilePart) -> dict[str, Any]:
    if part.mime_type.startswith("image/"):
        url = part.data
        if not url.startswith(("http://", "https://", "data:")):
            url = f"data:{part.mime_type};base64,{part.data}"
        return {"type": "image_url", "image_url": {"url": url}}
    return {"type": "text", "text": f"[File: {part.mime_type}]"}

"""Tests for the message schema."""

import pytest
from pydantic import ValidationError

from reasonbridge.core.interface.config import ModelDescriptor, Provider
from reasonbridge.core.interface.models import (
    ChatRequest,
    Conversation,
    FilePart,
    Message,
    ReasoningPart,
    SourcePart,
    StepStartPart,
    TextPart,
    ToolInvocationPart,
    UnknownPart,
)


class TestMessageParts:
    def test_parse_every_variant(self) -> None:
        msg = Message.model_validate(
            {
                "id": "m1",
                "role": "assistant",
                "parts": [
                    {"type": "step-start"},
                    {"type": "reasoning", "reasoning": "r", "details": []},
                    {"type": "text", "text": "hello"},
                    {
                        "type": "tool-invocation",
                        "toolInvocation": {
                            "state": "result",
                            "toolCallId": "call-1",
                            "toolName": "random",
                            "args": {"min": 1, "max": 6},
                            "result": 4,
                        },
                    },
                    {"type": "file", "mimeType": "image/png", "data": "aGk="},
                    {"type": "source", "source": {"url": "https://example.com"}},
                ],
            }
        )
        kinds = [type(p) for p in msg.parts]
        assert kinds == [StepStartPart, ReasoningPart, TextPart, ToolInvocationPart, FilePart, SourcePart]

        invocation = msg.parts[3]
        assert isinstance(invocation, ToolInvocationPart)
        assert invocation.tool_call_id == "call-1"
        assert invocation.tool_name == "random"
        assert invocation.result == 4

    def test_unknown_tag_becomes_unknown_part(self) -> None:
        msg = Message.model_validate(
            {"role": "assistant", "parts": [{"type": "hologram", "x": 1}, {"no": "type"}]}
        )
        assert msg.parts == (
            UnknownPart(raw={"type": "hologram", "x": 1}),
            UnknownPart(raw={"no": "type"}),
        )

    def test_reasoning_part_keeps_native_fields(self) -> None:
        raw = {"type": "reasoning", "thinking": {"signature": "s", "content": "c"}}
        part = ReasoningPart.model_validate(raw)
        assert part.payload == raw
        assert part.wire() == raw

    def test_reasoning_part_accepts_malformed_fields(self) -> None:
        part = ReasoningPart.model_validate({"type": "reasoning", "details": "garbage"})
        assert part.payload["details"] == "garbage"

    def test_tool_invocation_wire_nests_camel_case_fields(self) -> None:
        part = ToolInvocationPart(tool_call_id="c", tool_name="t", args={"a": 1})
        assert part.wire() == {
            "type": "tool-invocation",
            "toolInvocation": {
                "toolCallId": "c",
                "toolName": "t",
                "args": {"a": 1},
                "state": "call",
            },
        }

    def test_tool_invocation_wire_is_unchanged_on_the_way_back(self) -> None:
        inbound = {
            "type": "tool-invocation",
            "toolInvocation": {
                "state": "result",
                "step": 0,
                "toolCallId": "c1",
                "toolName": "random",
                "args": {"min": 1, "max": 6},
                "result": 3,
            },
        }
        part = ToolInvocationPart.model_validate(inbound)
        assert part.tool_call_id == "c1"
        assert part.state == "result"
        assert part.wire() == inbound

    def test_tool_invocation_keeps_fields_next_to_the_invocation(self) -> None:
        inbound = {
            "type": "tool-invocation",
            "providerMetadata": {"x": 1},
            "toolInvocation": {"state": "call", "toolCallId": "c1", "toolName": "t", "args": {}},
        }
        assert ToolInvocationPart.model_validate(inbound).wire() == inbound

    def test_flat_tool_invocation_input_is_accepted(self) -> None:
        part = ToolInvocationPart.model_validate(
            {"type": "tool-invocation", "toolCallId": "c", "toolName": "t", "state": "call"}
        )
        assert part.wire()["toolInvocation"]["toolName"] == "t"

    @pytest.mark.parametrize(
        "bad_part",
        [
            {"type": "text"},
            {"type": "file", "data": "aGk="},
            {"type": "tool-invocation", "toolInvocation": {"state": "bogus", "toolName": "t"}},
        ],
    )
    def test_invalid_known_part_becomes_unknown(self, bad_part: dict) -> None:
        conv = Conversation.model_validate(
            {
                "messages": [
                    {
                        "id": "m",
                        "role": "assistant",
                        "parts": [bad_part, {"type": "reasoning", "reasoning": "x", "details": []}],
                    }
                ]
            }
        )
        parts = conv.messages[0].parts
        assert parts[0] == UnknownPart(raw=bad_part)
        assert isinstance(parts[1], ReasoningPart)
        assert parts[1].payload == {"type": "reasoning", "reasoning": "x", "details": []}

    def test_non_mapping_part_becomes_unknown(self) -> None:
        msg = Message.model_validate({"role": "user", "parts": ["just text"]})
        assert msg.parts == (UnknownPart(raw={"value": "just text"}),)

    def test_parts_are_immutable(self) -> None:
        part = TextPart(text="x")
        with pytest.raises(ValidationError):
            part.text = "y"  # type: ignore[misc]


class TestMessage:
    def test_factories(self) -> None:
        assert Message.user("hi").role == "user"
        assert Message.system("be nice").text == "be nice"
        assistant = Message.assistant(TextPart(text="a"), TextPart(text="b"))
        assert assistant.text == "ab"
        assert assistant.provenance is None

    def test_has_reasoning(self) -> None:
        reasoning = ReasoningPart.model_validate({"type": "reasoning", "reasoning": "r", "details": []})
        msg = Message.assistant(reasoning, TextPart(text="t"))
        assert msg.has_reasoning
        assert msg.reasoning_parts == [reasoning]
        assert not Message.user("x").has_reasoning

    def test_with_parts_copies(self) -> None:
        msg = Message.assistant(TextPart(text="a"))
        copy = msg.with_parts([TextPart(text="b")])
        assert msg.text == "a"
        assert copy.text == "b"
        assert copy.id == msg.id

    def test_frozen(self) -> None:
        msg = Message.user("x")
        with pytest.raises(ValidationError):
            msg.role = "assistant"  # type: ignore[misc]

    def test_invalid_role(self) -> None:
        with pytest.raises(ValidationError):
            Message.model_validate({"role": "tool", "parts": []})

    def test_wire_round_trip(self) -> None:
        descriptor = ModelDescriptor(
            provider=Provider.ANTHROPIC, model_class="smart", name="claude", reasoning_capable=True
        )
        msg = Message.assistant(
            ReasoningPart.model_validate({"type": "reasoning", "thinking": {"signature": "s", "content": "c"}}),
            TextPart(text="answer"),
            provenance=descriptor,
        )
        restored = Message.model_validate(msg.wire())
        assert restored == msg
        assert restored.provenance is not None
        assert restored.provenance.model_id == "anthropic:smart"


class TestConversation:
    def test_append_and_iterate(self) -> None:
        conv = Conversation()
        conv.append(Message.user("a"))
        conv.append(Message.user("b"))
        assert len(conv) == 2
        assert [m.text for m in conv] == ["a", "b"]

    def test_chat_request(self) -> None:
        request = ChatRequest.model_validate(
            {
                "model": "openai:smart",
                "messages": [
                    {"id": "1", "role": "user", "parts": [{"type": "text", "text": "hi"}]},
                    {
                        "id": "2",
                        "role": "assistant",
                        "parts": [{"type": "text", "text": "hello"}],
                        "annotations": [{"model": "openai:default"}],
                    },
                ],
            }
        )
        assert request.model == "openai:smart"
        assert request.messages[1].annotations == ({"model": "openai:default"},)

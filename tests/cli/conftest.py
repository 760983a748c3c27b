"""Fixtures for CLI tests: conversation files on disk."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from pathlib import Path


def _conversation() -> dict[str, Any]:
    return {
        "messages": [
            {"id": "u1", "role": "user", "parts": [{"type": "text", "text": "Roll a die"}]},
            {
                "id": "a1",
                "role": "assistant",
                "parts": [
                    {"type": "step-start"},
                    {
                        "type": "reasoning",
                        "reasoning": "",
                        "details": [{"type": "text", "text": "step 1"}],
                    },
                    {"type": "text", "text": "You rolled a 4."},
                ],
                "annotations": [{"model": "openai:smart"}],
            },
            {"id": "u2", "role": "user", "parts": [{"type": "text", "text": "Again"}]},
            {
                "id": "a2",
                "role": "assistant",
                "parts": [
                    {"type": "reasoning", "thinking": {"signature": "abc123", "content": "analyzing"}},
                    {
                        "type": "tool-invocation",
                        "toolInvocation": {
                            "step": 0,
                            "toolCallId": "call-1",
                            "toolName": "random",
                            "args": {"max": 6},
                            "state": "result",
                            "result": 2,
                        },
                    },
                ],
                "annotations": [{"model": "anthropic:smart"}],
            },
        ]
    }


@pytest.fixture
def conversation_file(tmp_path: Path) -> Path:
    path = tmp_path / "conversation.json"
    path.write_text(json.dumps(_conversation()), encoding="utf-8")
    return path

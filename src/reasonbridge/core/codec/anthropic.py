"""Anthropic reasoning codec — the signature-mandatory shape.

Native shape::

    {"type": "reasoning", "thinking": {"signature": "<required>", "content": "..."}}

Anthropic rejects thinking blocks without a signature, so ``encode`` always
writes one: the original signature when the trace carries it, otherwise a
``translated-from-<source>`` sentinel.
"""

import logging
from collections.abc import Mapping
from typing import Any

from reasonbridge.core.codec.models import CanonicalReasoningTrace, ReasoningSegment
from reasonbridge.core.interface.config import Provider

logger = logging.getLogger(__name__)

SENTINEL_PREFIX = "translated-from-"


def sentinel_signature(source: Provider | None) -> str:
    """Placeholder signature for reasoning that was not signed by Anthropic."""
    return SENTINEL_PREFIX + (source.value if source is not None else "unknown")


class AnthropicReasoningCodec:
    """Converts between the canonical trace and Anthropic reasoning parts."""

    provider = Provider.ANTHROPIC

    def decode(self, raw: Mapping[str, Any]) -> CanonicalReasoningTrace:
        thinking = raw.get("thinking")
        if not isinstance(thinking, Mapping):
            logger.debug("Anthropic reasoning part has no thinking object")
            return CanonicalReasoningTrace.empty(self.provider)

        content = thinking.get("content")
        if not isinstance(content, str):
            content = ""
        signature = thinking.get("signature")
        if not isinstance(signature, str) or not signature:
            signature = None

        if not content and signature is None:
            return CanonicalReasoningTrace.empty(self.provider)

        segment = ReasoningSegment(kind="text", text=content, signature=signature)
        return CanonicalReasoningTrace(
            content=content,
            segments=(segment,),
            source=self.provider,
        )

    def encode(self, trace: CanonicalReasoningTrace) -> dict[str, Any]:
        signature = trace.signature or sentinel_signature(trace.source)
        return {
            "type": "reasoning",
            "thinking": {"signature": signature, "content": trace.content},
        }

    def is_native(self, raw: Mapping[str, Any]) -> bool:
        if raw.get("type") != "reasoning":
            return False
        thinking = raw.get("thinking")
        if not isinstance(thinking, Mapping):
            return False
        signature = thinking.get("signature")
        return isinstance(signature, str) and bool(signature) and isinstance(
            thinking.get("content"), str
        )

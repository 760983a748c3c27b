"""OpenAI reasoning codec — the detail-array shape.

Native shape::

    {"type": "reasoning",
     "reasoning": "<summary>",
     "details": [{"type": "text", "text": "...", "signature": "..."?},
                 {"type": "redacted", "data": "..."}]}
"""

import logging
from collections.abc import Mapping
from typing import Any

from reasonbridge.core.codec.models import CanonicalReasoningTrace, ReasoningSegment
from reasonbridge.core.interface.config import Provider

logger = logging.getLogger(__name__)


class OpenAIReasoningCodec:
    """Converts between the canonical trace and OpenAI reasoning parts."""

    provider = Provider.OPENAI

    def decode(self, raw: Mapping[str, Any]) -> CanonicalReasoningTrace:
        details = raw.get("details")
        segments: list[ReasoningSegment] = []
        if isinstance(details, list):
            for detail in details:
                segment = _segment_from_detail(detail)
                if segment is not None:
                    segments.append(segment)
        elif details is not None:
            logger.debug("Ignoring non-list OpenAI reasoning details: %r", type(details))

        summary = raw.get("reasoning")
        if isinstance(summary, str) and summary:
            content = summary
        else:
            content = "\n".join(s.text or "" for s in segments if s.kind == "text")

        return CanonicalReasoningTrace(
            content=content,
            segments=tuple(segments),
            source=self.provider,
        )

    def encode(self, trace: CanonicalReasoningTrace) -> dict[str, Any]:
        # Detail structure collapses to a single text detail.
        detail: dict[str, Any] = {"type": "text", "text": trace.content}
        signature = trace.signature
        if signature:
            detail["signature"] = signature
        return {"type": "reasoning", "reasoning": trace.content, "details": [detail]}

    def is_native(self, raw: Mapping[str, Any]) -> bool:
        if raw.get("type") != "reasoning" or not isinstance(raw.get("reasoning"), str):
            return False
        details = raw.get("details")
        if not isinstance(details, list):
            return False
        return all(_segment_from_detail(detail) is not None for detail in details)


def _segment_from_detail(detail: Any) -> ReasoningSegment | None:
    """Map one native detail to a segment, or ``None`` if it is malformed."""
    if not isinstance(detail, Mapping):
        return None

    kind = detail.get("type")
    if kind == "text":
        text = detail.get("text")
        if not isinstance(text, str):
            return None
        signature = detail.get("signature")
        return ReasoningSegment(
            kind="text",
            text=text,
            signature=signature if isinstance(signature, str) and signature else None,
        )
    if kind == "redacted":
        data = detail.get("data")
        if not isinstance(data, str):
            return None
        return ReasoningSegment(kind="redacted", opaque_data=data)

    logger.debug("Skipping OpenAI reasoning detail with type %r", kind)
    return None

"""Canonical reasoning trace — the provider-independent pivot format.

Every cross-provider translation goes native -> canonical -> native. Adding
a provider therefore only needs one decode/encode pair against this shape.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from reasonbridge.core.interface.config import Provider


class ReasoningSegment(BaseModel):
    """One piece of a reasoning trace.

    ``text`` segments carry readable reasoning (optionally signed by the
    provider); ``redacted`` segments carry provider-encrypted data that is
    only meaningful to the provider that produced it.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["text", "redacted"]
    text: str | None = None
    opaque_data: str | None = None
    signature: str | None = None


class CanonicalReasoningTrace(BaseModel):
    """Normalized reasoning: display text plus the ordered segments."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    segments: tuple[ReasoningSegment, ...] = ()
    source: Provider | None = None

    @property
    def signature(self) -> str | None:
        """The first non-empty signature carried by any segment."""
        for segment in self.segments:
            if segment.signature:
                return segment.signature
        return None

    @property
    def is_empty(self) -> bool:
        return not self.content and not self.segments

    @classmethod
    def empty(cls, source: Provider | None = None) -> "CanonicalReasoningTrace":
        """The trace malformed input decodes to."""
        return cls(source=source)

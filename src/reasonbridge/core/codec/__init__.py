"""Reasoning part codec — native provider shapes to and from the canonical trace."""

from reasonbridge.core.codec.anthropic import AnthropicReasoningCodec, sentinel_signature
from reasonbridge.core.codec.codec import ReasoningCodec, decode, encode, get_codec, is_native
from reasonbridge.core.codec.models import CanonicalReasoningTrace, ReasoningSegment
from reasonbridge.core.codec.openai import OpenAIReasoningCodec

__all__ = [
    "AnthropicReasoningCodec",
    "CanonicalReasoningTrace",
    "OpenAIReasoningCodec",
    "ReasoningCodec",
    "ReasoningSegment",
    "decode",
    "encode",
    "get_codec",
    "is_native",
    "sentinel_signature",
]

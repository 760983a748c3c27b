"""Reasoning codec protocol and provider dispatch.

``decode`` never raises: malformed or partial payloads produce an empty
trace. ``encode`` always emits every field the target schema requires.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from reasonbridge.core.codec.models import CanonicalReasoningTrace
from reasonbridge.core.interface.config import Provider
from reasonbridge.core.interface.models import ReasoningPart

logger = logging.getLogger(__name__)


class ReasoningCodec(Protocol):
    """Converts one provider's reasoning wire shape to and from the canonical trace."""

    provider: Provider

    def decode(self, raw: Mapping[str, Any]) -> CanonicalReasoningTrace:
        """Extract a canonical trace from a native reasoning part."""
        ...

    def encode(self, trace: CanonicalReasoningTrace) -> dict[str, Any]:
        """Build a schema-valid native reasoning part from *trace*."""
        ...

    def is_native(self, raw: Mapping[str, Any]) -> bool:
        """Whether *raw* already satisfies this provider's schema."""
        ...


def get_codec(provider: Provider | str) -> ReasoningCodec:
    """Return the codec for *provider*.

    Raises:
        ValueError: If *provider* is not a known provider name.
    """
    from reasonbridge.core.codec.anthropic import AnthropicReasoningCodec
    from reasonbridge.core.codec.openai import OpenAIReasoningCodec

    mapping: dict[Provider, ReasoningCodec] = {
        Provider.OPENAI: OpenAIReasoningCodec(),
        Provider.ANTHROPIC: AnthropicReasoningCodec(),
    }
    return mapping[Provider(provider)]


def _as_mapping(raw: Any) -> Mapping[str, Any] | None:
    if isinstance(raw, ReasoningPart):
        return raw.payload
    if isinstance(raw, Mapping):
        return raw
    return None


def decode(provider: Provider | str | None, raw: Any) -> CanonicalReasoningTrace:
    """Decode a native reasoning part from *provider* into a canonical trace.

    Unknown providers and non-mapping input yield an empty trace.
    """
    try:
        codec = get_codec(provider) if provider is not None else None
    except (KeyError, ValueError):
        codec = None
    if codec is None:
        logger.debug("No reasoning codec for provider %r; decoding as empty", provider)
        return CanonicalReasoningTrace.empty()

    payload = _as_mapping(raw)
    if payload is None:
        logger.debug("Reasoning payload from %s is not a mapping: %r", codec.provider, type(raw))
        return CanonicalReasoningTrace.empty(codec.provider)

    return codec.decode(payload)


def encode(provider: Provider | str, trace: CanonicalReasoningTrace) -> dict[str, Any]:
    """Encode *trace* as a native reasoning part for *provider*.

    Raises:
        ValueError: If *provider* is not a known provider name.
    """
    return get_codec(provider).encode(trace)


def is_native(provider: Provider | str, raw: Any) -> bool:
    """Whether *raw* is a schema-valid reasoning part for *provider*."""
    payload = _as_mapping(raw)
    if payload is None:
        return False
    try:
        codec = get_codec(provider)
    except (KeyError, ValueError):
        return False
    return codec.is_native(payload)

"""Message translator — rewrites reasoning parts for a target provider.

Translation always routes through the canonical trace::

    encode(target, decode(message.provenance.provider, part))

Only ``reasoning`` parts are touched; every other part is passed through
unchanged and in its original position. All functions here are pure.
"""

import logging
from collections.abc import Iterable
from enum import Enum

from reasonbridge.core.codec import decode, encode, is_native
from reasonbridge.core.interface.config import Provider
from reasonbridge.core.interface.models import Message, MessagePart, ReasoningPart

logger = logging.getLogger(__name__)


class UnresolvedReasoningPolicy(str, Enum):
    """What to do with reasoning parts of messages without provenance.

    * ``PASS_THROUGH`` — forward them verbatim.
    * ``DROP`` — remove them.
    * ``AUTO`` — keep a part only if it is already valid for the target
      provider, drop it otherwise.
    """

    PASS_THROUGH = "pass-through"
    DROP = "drop"
    AUTO = "auto"


def translate(
    message: Message,
    target: Provider,
    *,
    policy: UnresolvedReasoningPolicy = UnresolvedReasoningPolicy.PASS_THROUGH,
) -> Message:
    """Return *message* with its reasoning parts in *target*'s wire shape.

    Messages already produced by *target* are returned as-is. Messages with
    no provenance are handled according to *policy*; with the default
    ``PASS_THROUGH`` they are returned as-is too.
    """
    if not message.has_reasoning:
        return message

    provenance = message.provenance
    if provenance is None:
        return _apply_policy(message, target, policy)
    if provenance.provider == target:
        return message

    source = provenance.provider
    parts: list[MessagePart] = []
    for part in message.parts:
        if isinstance(part, ReasoningPart):
            trace = decode(source, part)
            parts.append(ReasoningPart.model_validate(encode(target, trace)))
        else:
            parts.append(part)

    logger.debug(
        "Translated %d reasoning part(s) of message %s: %s -> %s",
        len(message.reasoning_parts),
        message.id,
        source.value,
        target.value,
    )
    return message.with_parts(parts)


def translate_history(
    messages: Iterable[Message],
    target: Provider,
    *,
    policy: UnresolvedReasoningPolicy = UnresolvedReasoningPolicy.AUTO,
) -> list[Message]:
    """Translate every message of a conversation for a call to *target*."""
    return [translate(message, target, policy=policy) for message in messages]


def _apply_policy(
    message: Message,
    target: Provider,
    policy: UnresolvedReasoningPolicy,
) -> Message:
    if policy is UnresolvedReasoningPolicy.PASS_THROUGH:
        return message

    kept: list[MessagePart] = []
    dropped = 0
    for part in message.parts:
        if isinstance(part, ReasoningPart) and (
            policy is UnresolvedReasoningPolicy.DROP or not is_native(target, part)
        ):
            dropped += 1
            continue
        kept.append(part)

    if not dropped:
        return message

    logger.warning(
        "Dropped %d reasoning part(s) of message %s with unknown provenance (target %s)",
        dropped,
        message.id,
        target.value,
    )
    return message.with_parts(kept)

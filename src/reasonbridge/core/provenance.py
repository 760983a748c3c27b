"""Provenance annotator — records which model produced an assistant message.

Provenance is written exactly once, after a model call has finished and
before the message is stored. Clients receive it out-of-band as an
annotation (``{"model": "<provider>:<modelClass>"}``) and merge it back with
``merge_annotations``.
"""

import logging
from typing import Any

from reasonbridge.core.interface.config import ModelDescriptor
from reasonbridge.core.interface.models import Message
from reasonbridge.core.registry import ProviderRegistry
from reasonbridge.errors import ConfigurationError, ProvenanceError

logger = logging.getLogger(__name__)


def annotate(message: Message, descriptor: ModelDescriptor) -> Message:
    """Return *message* with ``provenance`` set to *descriptor*.

    Raises:
        ProvenanceError: If *message* is not an assistant message or already
            carries provenance.
    """
    if message.role != "assistant":
        raise ProvenanceError(message.id, f"{message.role} messages carry no provenance")
    if message.provenance is not None:
        raise ProvenanceError(
            message.id, f"provenance already set to {message.provenance.model_id}"
        )
    return message.model_copy(update={"provenance": descriptor})


def provenance_annotation(descriptor: ModelDescriptor) -> dict[str, Any]:
    """The out-of-band annotation sent to the client for a finished message."""
    return {"model": descriptor.model_id}


def collect_annotations(message: Message) -> dict[str, Any]:
    """Fold a message's annotations into one mapping; later keys win."""
    merged: dict[str, Any] = {}
    for annotation in message.annotations:
        if annotation:
            merged.update(annotation)
    return merged


def merge_annotations(message: Message, registry: ProviderRegistry) -> Message:
    """Attach provenance from the message's ``model`` annotation, if any.

    Messages that already carry provenance, non-assistant messages and
    messages without a ``model`` annotation are returned unchanged. A model
    annotation the registry cannot resolve leaves the message without
    provenance.
    """
    if message.role != "assistant" or message.provenance is not None:
        return message

    model_id = collect_annotations(message).get("model")
    if not isinstance(model_id, str):
        return message

    try:
        descriptor = registry.descriptor_for(model_id)
    except ConfigurationError as exc:
        logger.warning("Ignoring model annotation on message %s: %s", message.id, exc)
        return message
    return annotate(message, descriptor)

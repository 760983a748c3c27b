"""reasonbridge: carry model reasoning across provider switches.

A conversation can move between OpenAI and Anthropic reasoning models
mid-stream; reasonbridge records which model wrote each assistant message
and rewrites earlier reasoning into the shape the next model accepts.

    >>> import reasonbridge
    >>> session = reasonbridge.ConversationSession(reasonbridge.build_default_registry())
    >>> reply = await session.send("Roll a die", "anthropic:smart")  # doctest: +SKIP

The names below are imported on first access so that ``import reasonbridge``
does not load LiteLLM until a session or client is needed.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

if TYPE_CHECKING:
    from reasonbridge.core.interface.models import Conversation, Message
    from reasonbridge.core.registry import ProviderRegistry, RegistryLoader, build_default_registry
    from reasonbridge.core.session import ConversationSession
    from reasonbridge.core.translator import translate, translate_history
    from reasonbridge.core.view import message_view

_EXPORTS: dict[str, str] = {
    "Conversation": "reasonbridge.core.interface.models",
    "ConversationSession": "reasonbridge.core.session",
    "Message": "reasonbridge.core.interface.models",
    "ProviderRegistry": "reasonbridge.core.registry",
    "RegistryLoader": "reasonbridge.core.registry",
    "build_default_registry": "reasonbridge.core.registry",
    "message_view": "reasonbridge.core.view",
    "translate": "reasonbridge.core.translator",
    "translate_history": "reasonbridge.core.translator",
}

__all__ = ["__version__", *sorted(_EXPORTS)]


def __getattr__(name: str) -> Any:
    try:
        module = _EXPORTS[name]
    except KeyError:
        raise AttributeError(f"module 'reasonbridge' has no attribute {name!r}") from None
    value = getattr(importlib.import_module(module), name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted({*globals(), *_EXPORTS})

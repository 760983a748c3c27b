"""Smoke tests for the package surface."""

from __future__ import annotations

import pytest


def test_import() -> None:
    import reasonbridge

    assert reasonbridge.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from reasonbridge.cli import main

    assert callable(main)
    assert set(main.commands) == {"models", "translate", "render", "chat"}


def test_lazy_exports() -> None:
    import reasonbridge

    registry = reasonbridge.build_default_registry()
    session = reasonbridge.ConversationSession(registry)
    assert session.messages == ()


def test_unknown_attribute() -> None:
    import reasonbridge

    with pytest.raises(AttributeError, match="no attribute 'Missing'"):
        reasonbridge.Missing  # noqa: B018


def test_exports_are_listed() -> None:
    import reasonbridge

    for name in ("Message", "ProviderRegistry", "translate", "message_view"):
        assert name in reasonbridge.__all__
        assert name in dir(reasonbridge)
        assert callable(getattr(reasonbridge, name))


def test_commands_follow_listing_order() -> None:
    from reasonbridge.cli import main
    from reasonbridge.cli_commands import COMMANDS

    assert tuple(main.commands) == COMMANDS

"""Subcommands of the ``reasonbridge`` CLI.

Each module holds one click command named after the module: ``models``
lists the registry, ``translate`` rewrites a saved conversation for a
target provider, ``render`` shows it the way a chat UI would, and ``chat``
streams a live turn.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click

COMMANDS = ("models", "translate", "render", "chat")


def register_commands(cli: click.Group) -> None:
    """Attach every command in ``COMMANDS`` to *cli*, in listing order."""
    for name in COMMANDS:
        module = importlib.import_module(f"reasonbridge.cli_commands.{name}")
        cli.add_command(getattr(module, name))

"""``reasonbridge render`` — show a conversation through the canonical view."""

from __future__ import annotations

import json
from pathlib import Path

import click

from reasonbridge.cli_commands._output import (
    console,
    load_conversation,
    load_registry,
    print_message_view,
)
from reasonbridge.core.view import message_view


@click.command()
@click.argument("conversation_file", type=click.Path(exists=True))
@click.option("--registry", "registry_file", type=click.Path(exists=True), default=None,
              help="Provider registry YAML.")
@click.option("--json", "as_json", is_flag=True, help="Output normalized messages as JSON.")
def render(conversation_file: str, registry_file: str | None, as_json: bool) -> None:
    """Render CONVERSATION_FILE with reasoning normalized across providers."""
    registry = load_registry(registry_file)
    conversation = load_conversation(Path(conversation_file), registry)
    views = [message_view(m) for m in conversation]

    if as_json:
        console.print_json(json.dumps([v.model_dump(mode="json") for v in views]))
        return

    for view in views:
        print_message_view(view)

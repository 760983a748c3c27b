"""``reasonbridge chat`` — send one prompt, optionally continuing a saved conversation."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click
from rich.markup import escape

from reasonbridge.cli_commands._output import (
    console,
    dump_conversation,
    load_conversation,
    load_registry,
    print_message_view,
)
from reasonbridge.core.provenance import provenance_annotation
from reasonbridge.core.session import ConversationSession
from reasonbridge.core.view import message_view
from reasonbridge.errors import ReasonBridgeError


@click.command()
@click.argument("prompt")
@click.option("--model", "-m", "model_id", default="openai:default", show_default=True,
              help="Model as <provider>:<modelClass>.")
@click.option("--conversation", "-c", "conversation_file", type=click.Path(), default=None,
              help="Conversation JSON to continue (created if missing).")
@click.option("--save", is_flag=True, help="Write the updated conversation back to --conversation.")
@click.option("--registry", "registry_file", type=click.Path(exists=True), default=None,
              help="Provider registry YAML.")
@click.option("--json", "as_json", is_flag=True, help="Print the reply and its annotation as JSON.")
def chat(
    prompt: str,
    model_id: str,
    conversation_file: str | None,
    save: bool,
    registry_file: str | None,
    as_json: bool,
) -> None:
    """Send PROMPT to a model and print the reply."""
    registry = load_registry(registry_file)

    path = Path(conversation_file) if conversation_file else None
    if path is not None and path.exists():
        session = ConversationSession.from_request(load_conversation(path, registry), registry)
    else:
        session = ConversationSession(registry)

    try:
        reply = asyncio.run(session.send(prompt, model_id))
    except ReasonBridgeError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    if save and path is not None:
        path.write_text(dump_conversation(list(session.messages)) + "\n", encoding="utf-8")

    if as_json:
        assert reply.provenance is not None
        payload = {"message": reply.wire(), "annotation": provenance_annotation(reply.provenance)}
        click.echo(json.dumps(payload, indent=2))
        return

    print_message_view(message_view(reply))

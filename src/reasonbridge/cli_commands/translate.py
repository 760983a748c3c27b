"""``reasonbridge translate`` — rewrite a conversation's reasoning for a provider."""

from __future__ import annotations

from pathlib import Path

import click

from reasonbridge.cli_commands._output import (
    console,
    dump_conversation,
    load_conversation,
    load_registry,
)
from reasonbridge.core.interface.config import Provider
from reasonbridge.core.translator import UnresolvedReasoningPolicy, translate_history


@click.command()
@click.argument("conversation_file", type=click.Path(exists=True))
@click.option("--to", "target", required=True,
              type=click.Choice([p.value for p in Provider]), help="Target provider.")
@click.option("--policy", type=click.Choice([p.value for p in UnresolvedReasoningPolicy]),
              default=UnresolvedReasoningPolicy.AUTO.value, show_default=True,
              help="Handling of reasoning in messages without provenance.")
@click.option("--registry", "registry_file", type=click.Path(exists=True), default=None,
              help="Provider registry YAML.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Write to a file instead of stdout.")
def translate(
    conversation_file: str,
    target: str,
    policy: str,
    registry_file: str | None,
    output: str | None,
) -> None:
    """Translate CONVERSATION_FILE so it can be sent to another provider."""
    registry = load_registry(registry_file)
    conversation = load_conversation(Path(conversation_file), registry)

    translated = translate_history(
        conversation.messages,
        Provider(target),
        policy=UnresolvedReasoningPolicy(policy),
    )
    text = dump_conversation(translated)

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]Wrote {len(translated)} message(s) to {output}[/green]")
    else:
        click.echo(text)

"""Shared CLI helpers: registry/conversation loading and rich output."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from reasonbridge.core.interface.models import Conversation, Message
from reasonbridge.core.provenance import merge_annotations
from reasonbridge.core.registry import ProviderRegistry, RegistryLoader, build_default_registry
from reasonbridge.core.view import MessageView, NormalizedReasoning, NormalizedText, NormalizedToolInvocation
from reasonbridge.errors import ConfigurationError

console = Console()


def load_registry(path: str | None) -> ProviderRegistry:
    """Load the registry YAML at *path*, or the built-in one; exit on error."""
    if path is None:
        return build_default_registry()
    try:
        return RegistryLoader(Path(path)).load()
    except ConfigurationError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(1)


def load_conversation(path: Path, registry: ProviderRegistry) -> Conversation:
    """Read a conversation JSON file and merge model annotations into provenance.

    Accepts either ``{"messages": [...]}`` or a bare list of messages.
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, list):
            data = {"messages": data}
        conversation = Conversation.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        console.print(f"[red]Error loading conversation:[/red] {escape(str(exc))}")
        sys.exit(1)
    return Conversation(messages=[merge_annotations(m, registry) for m in conversation])


def dump_conversation(messages: list[Message]) -> str:
    return json.dumps({"messages": [m.wire() for m in messages]}, indent=2)


def print_models_table(registry: ProviderRegistry) -> None:
    """Pretty-print every configured model."""
    table = Table(title="Models")
    table.add_column("Model ID", style="cyan")
    table.add_column("Name")
    table.add_column("Reasoning")

    for descriptor in registry.descriptors():
        table.add_row(
            descriptor.model_id,
            descriptor.name,
            "yes" if descriptor.reasoning_capable else "-",
        )

    console.print(table)


def print_message_view(view: MessageView) -> None:
    """Render one message the way the chat UI does."""
    if view.role == "user":
        title = "[bold]You[/bold]"
    else:
        title = f"[bold]{view.role.capitalize()}[/bold]"
        if view.model:
            badge = "🧠 " if view.has_reasoning else ""
            title += f"  [dim]{badge}{view.model}[/dim]"

    if view.pending:
        console.print(Panel("[italic]Thinking...[/italic]", title=title, title_align="left"))
        return

    lines: list[str] = []
    for part in view.parts:
        if isinstance(part, NormalizedText):
            lines.append(escape(part.content))
        elif isinstance(part, NormalizedReasoning):
            lines.append(f"[italic dim]Reasoning:\n{escape(part.content)}[/italic dim]")
        elif isinstance(part, NormalizedToolInvocation):
            args = ", ".join(f"{k}: {escape(json.dumps(v))}" for k, v in part.args.items())
            line = f"[italic]Called tool [bold]{part.tool_name}[/bold] with {args}[/italic]"
            if part.state == "result":
                line += f"\n[italic]Result: [bold]{escape(json.dumps(part.result, default=str))}[/bold][/italic]"
            lines.append(line)
        else:
            lines.append(f"[dim]{escape(part.content)}[/dim]")

    console.print(Panel("\n\n".join(lines), title=title, title_align="left"))

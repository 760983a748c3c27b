"""``reasonbridge models`` — list configured providers and models."""

from __future__ import annotations

import json

import click

from reasonbridge.cli_commands._output import console, load_registry, print_models_table


@click.command()
@click.option("--registry", "registry_file", type=click.Path(exists=True), default=None,
              help="Provider registry YAML (defaults to the built-in providers).")
@click.option("--json", "as_json", is_flag=True, help="Output the model catalog as JSON.")
def models(registry_file: str | None, as_json: bool) -> None:
    """List the models that can be selected with --model."""
    registry = load_registry(registry_file)
    if as_json:
        console.print_json(json.dumps(registry.catalog()))
        return
    print_models_table(registry)

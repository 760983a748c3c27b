"""reasonbridge CLI entrypoint."""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from reasonbridge import __version__
from reasonbridge.utils.telemetry import configure_telemetry


@click.group()
@click.version_option(version=__version__, prog_name="reasonbridge")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--trace", is_flag=True, help="Print OpenTelemetry spans (requires the otel extra).")
@click.option("--otlp-endpoint", envvar="REASONBRIDGE_OTLP_ENDPOINT", default=None,
              help="Export spans to an OTLP/gRPC collector.")
def main(verbose: bool, trace: bool, otlp_endpoint: str | None) -> None:
    """reasonbridge — multi-provider chat with portable reasoning traces."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
        )
    if trace or otlp_endpoint:
        try:
            configure_telemetry(export_to_console=trace, otlp_endpoint=otlp_endpoint)
        except ImportError as exc:
            raise click.UsageError(str(exc)) from exc


# Register subcommands
from reasonbridge.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()

"""Tracing for model calls and conversation turns.

Only the OpenTelemetry API is a hard dependency. Until
:func:`configure_telemetry` installs an SDK tracer provider, every span is a
no-op. Span names used by reasonbridge:

* ``model.stream`` — one streamed provider call (``ModelClient.stream``)
* ``conversation.send`` — one turn of a ``ConversationSession``
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from opentelemetry import trace

ATTR_MODEL = "reasonbridge.model"
ATTR_PROVIDER = "reasonbridge.provider"
ATTR_REASONING = "reasonbridge.reasoning"
ATTR_HISTORY_LENGTH = "reasonbridge.history.length"
ATTR_TRANSLATED = "reasonbridge.history.translated"
ATTR_TOKENS_PROMPT = "reasonbridge.tokens.prompt"
ATTR_TOKENS_COMPLETION = "reasonbridge.tokens.completion"
ATTR_TOKENS_TOTAL = "reasonbridge.tokens.total"
ATTR_FINISH_REASON = "reasonbridge.finish_reason"
ATTR_CANCELLED = "reasonbridge.cancelled"

_INSTRUMENTATION_NAME = "reasonbridge"

_USAGE_ATTRIBUTES = {
    "prompt_tokens": ATTR_TOKENS_PROMPT,
    "completion_tokens": ATTR_TOKENS_COMPLETION,
    "total_tokens": ATTR_TOKENS_TOTAL,
}

_INSTALL_HINT = "Install it with: pip install reasonbridge[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def record_completion(
    span: trace.Span,
    usage: Mapping[str, int],
    finish_reason: str | None = None,
) -> None:
    """Attach token usage and the finish reason of a finished stream to *span*."""
    for key, attribute in _USAGE_ATTRIBUTES.items():
        if key in usage:
            span.set_attribute(attribute, usage[key])
    if finish_reason is not None:
        span.set_attribute(ATTR_FINISH_REASON, finish_reason)


def configure_telemetry(
    *,
    service_name: str = "reasonbridge",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider exporting reasonbridge spans.

    Spans go to stdout when *export_to_console* is set and, in batches, to
    the OTLP/gRPC collector at *otlp_endpoint* when one is given.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP export,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for tracing. {_INSTALL_HINT}") from exc

    processors: list[Any] = []
    if export_to_console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        processors.append(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))  # pyright: ignore[reportUnknownVariableType,reportUnknownMemberType]
    for processor in processors:
        provider.add_span_processor(processor)  # pyright: ignore[reportUnknownMemberType]
    trace.set_tracer_provider(provider)  # pyright: ignore[reportUnknownArgumentType]


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        raise ImportError(
            f"opentelemetry-exporter-otlp is required for OTLP export. {_INSTALL_HINT}"
        ) from exc
    return OTLPSpanExporter(endpoint=endpoint)

"""\
OpenTelemetry
=============

Created on: Wednesday, October 14 2026
Last updated on: Friday, October 16 2026

This module provides `OpenTelemetry` integration for `makit`. The
materializer opens one span per invocation and one per path, so a run
can be inspected in any OpenTelemetry backend when tracing is enabled.
"""

from __future__ import annotations

import sys

from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from makit.core.config import Config
from makit.utils.logging import get_logger

__all__: list[str] = ["get_provider"]

logger = get_logger(__name__)


def get_provider(config: Config | None = None) -> TracerProvider:
    """Build a tracer provider from the configuration.

    The provider is not installed globally. With telemetry disabled it
    has no span processor and nothing is exported. In debug mode spans
    are printed to standard error, otherwise they are sent with the OTLP
    exporter, which reads its endpoint from the standard
    `OTEL_EXPORTER_OTLP_*` environment variables.

    :param config: Configuration object, defaults to a fresh `Config`.
    :return: A configured `TracerProvider`.
    """
    if config is None:
        config = Config()
    service = config.telemetry.name or config.name
    resource = Resource.create(
        {
            "service.name": service,
            "service.version": config.version,
            "deployment.environment": (
                "development" if config.debug else "production"
            ),
        }
    )
    provider = TracerProvider(resource=resource)
    if not config.telemetry.enabled:
        return provider
    if config.debug:
        processor = SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
    else:
        try:
            processor = BatchSpanProcessor(OTLPSpanExporter())
        except Exception as error:
            logger.warning(
                f"OTLP exporter unavailable, falling back to console: {error}"
            )
            processor = SimpleSpanProcessor(
                ConsoleSpanExporter(out=sys.stderr)
            )
    provider.add_span_processor(processor)
    return provider

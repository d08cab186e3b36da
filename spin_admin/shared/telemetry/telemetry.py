"""OpenTelemetry tracing for the service.

One Telemetry instance is built from Settings in lifespan. start()
installs the tracer provider and instruments FastAPI (HTTP and
WebSocket routes) plus log records; shutdown() flushes pending spans.
Exporters: "console", "otlp" (gRPC) or "none".
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

if TYPE_CHECKING:
    from fastapi import FastAPI

    from spin_admin.core.config import Settings

logger = logging.getLogger(__name__)

# Probes hit these every few seconds; keep them out of traces.
_UNTRACED_URLS = "/api/v1/health,/api/v1/health/ready"


def _build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if kind == "none":
        return None
    if kind == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
    elif kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


class Telemetry:
    """Tracer provider plus the instrumentations attached to it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        *,
        environment: str = "development",
        exporter: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter = exporter
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> Telemetry:
        return cls(
            settings.app_name,
            settings.app_version,
            environment=settings.telemetry_environment,
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    def start(self, app: FastAPI) -> bool:
        """Install the provider and instrument app. Returns False if tracing could not start.

        Telemetry never blocks startup: failures are logged and the
        service runs untraced.
        """
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=TraceIdRatioBased(self.sample_rate),
            )
            exporter = _build_exporter(self.exporter, self.otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
            self.tracer_provider = provider

            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls=_UNTRACED_URLS
            )
            LoggingInstrumentor().instrument(tracer_provider=provider)
        except Exception:
            logger.exception("Telemetry setup failed; continuing without tracing")
            return False
        logger.info(
            "Tracing %s %s (%s) exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            self.environment,
            self.exporter,
            self.sample_rate,
        )
        return True

    def shutdown(self) -> None:
        """Flush and stop the provider."""
        provider, self.tracer_provider = self.tracer_provider, None
        if provider is None:
            return
        try:
            provider.shutdown()
        except Exception:
            logger.exception("Error flushing spans at shutdown")


_telemetry: Telemetry | None = None
_telemetry_lock = threading.Lock()


def get_telemetry() -> Telemetry | None:
    """The instance started in lifespan, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: Telemetry | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry

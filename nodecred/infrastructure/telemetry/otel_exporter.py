"""
OpenTelemetry Exporter for nodecred

Architectural Intent:
- Implements TelemetryPort on top of the OpenTelemetry SDK
- Exports enrichment outcome metrics and lookup spans to OTLP backends
- Telemetry failures never affect the enrichment result

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
- Validation in __post_init__ prevents accidental plaintext export
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

ENRICHMENT_METRIC = "nodecred.enrichment.outcome"
METRICS_BUFFER_SIZE = 1000


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "nodecred"
    environment: str = "development"
    enable_traces: bool = True
    enable_metrics: bool = True
    insecure: bool = False
    buffer_size: int = METRICS_BUFFER_SIZE

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


class OTELExporter:
    """
    OpenTelemetry exporter for enrichment telemetry.

    The most recent metrics (up to config.buffer_size) are kept locally so
    they can be inspected without a collector. They are forwarded to OTLP
    only once initialize() succeeds.
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: deque[dict[str, Any]] = deque(maxlen=config.buffer_size)
        self._meter: Any = None
        self._counters: dict[str, Any] = {}

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Initialize OpenTelemetry SDK and exporters."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, telemetry disabled")
            return

        resource = Resource(
            attributes={
                SERVICE_NAME: self.config.service_name,
                "environment": self.config.environment,
            }
        )

        if self.config.enable_traces:
            provider = TracerProvider(resource=resource)
            provider.add_span_processor(
                BatchSpanProcessor(
                    OTLPSpanExporter(
                        endpoint=self.config.endpoint, insecure=self.config.insecure
                    )
                )
            )
            trace.set_tracer_provider(provider)

        if self.config.enable_metrics:
            metric_reader = PeriodicExportingMetricReader(
                OTLPMetricExporter(
                    endpoint=self.config.endpoint, insecure=self.config.insecure
                )
            )
            metrics.set_meter_provider(
                MeterProvider(resource=resource, metric_readers=[metric_reader])
            )
            self._meter = metrics.get_meter(__name__)

        self._initialized = True
        logger.info("OTEL telemetry exporting to %s", self.config.endpoint)

    def _get_counter(self, name: str, unit: str = "") -> Any:
        """Get or create a counter for a metric name."""
        if name not in self._counters and self._meter:
            self._counters[name] = self._meter.create_counter(name, unit=unit)
        return self._counters.get(name)

    def record_metric(
        self,
        name: str,
        value: float,
        unit: str = "",
        attributes: Optional[dict[str, str]] = None,
    ) -> None:
        """Record a metric value."""
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "unit": unit,
                "attributes": attributes or {},
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

        if self._initialized:
            counter = self._get_counter(name, unit)
            if counter:
                counter.add(value, attributes=attributes or {})

    def record_enrichment(self, node_id: str, outcome: str) -> None:
        """Record which credential source an enrichment ended with."""
        self.record_metric(
            ENRICHMENT_METRIC,
            1.0,
            attributes={"node_id": node_id, "outcome": outcome},
        )

    def start_span(
        self,
        name: str,
        attributes: Optional[dict[str, str]] = None,
    ) -> Optional[Any]:
        """Start a tracing span."""
        if not self._initialized:
            return None

        try:
            tracer = trace.get_tracer(__name__)
            return tracer.start_span(name, attributes=attributes or {})
        except Exception as e:
            logger.debug("Could not start span %s: %s", name, e)
            return None

    def end_span(self, span: Any) -> None:
        """End a tracing span."""
        if span:
            try:
                span.end()
            except Exception as e:
                logger.debug("Could not end span: %s", e)

    def drain(self) -> list[dict[str, Any]]:
        """Return and clear the locally buffered metrics."""
        drained = list(self._metrics_buffer)
        self._metrics_buffer.clear()
        return drained


def create_exporter(
    endpoint: Optional[str] = None,
    service_name: str = "nodecred",
    insecure: bool = False,
) -> OTELExporter:
    """Factory function to create OTEL exporter."""
    config = OTELConfig(
        endpoint=endpoint or "",
        service_name=service_name,
        insecure=insecure,
    )
    exporter = OTELExporter(config)
    exporter.initialize()
    return exporter

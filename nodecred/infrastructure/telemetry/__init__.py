"""
nodecred Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for observability
- Enrichment outcome metrics and lookup traces
"""

from nodecred.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]

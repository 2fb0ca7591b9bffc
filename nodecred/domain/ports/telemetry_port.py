"""
Telemetry Port

Architectural Intent:
- Lets use cases report outcomes and spans without depending on the
  OpenTelemetry SDK
- Implemented by OTELExporter
"""

from typing import Protocol, runtime_checkable, Optional, Any


@runtime_checkable
class TelemetryPort(Protocol):
    """Port for recording enrichment telemetry."""

    def start_span(
        self, name: str, attributes: Optional[dict[str, str]] = None
    ) -> Optional[Any]:
        ...

    def end_span(self, span: Any) -> None:
        ...

    def record_enrichment(self, node_id: str, outcome: str) -> None:
        ...

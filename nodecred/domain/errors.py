"""
Domain Errors

Architectural Intent:
- Names the failures callers are expected to distinguish
- Both subclass ValueError so existing validation handlers still apply
- A node that simply does not exist is not an error: sources return None
"""


class InvalidNodeIdError(ValueError):
    """Raised when a node lookup is attempted without an identifier."""


class MalformedNodeError(ValueError):
    """Raised when a fetched node lacks data required for enrichment."""

    def __init__(self, node_id: str, reason: str) -> None:
        super().__init__(f"Node {node_id!r} is malformed: {reason}")
        self.node_id = node_id
        self.reason = reason

"""
Credentials Value Object

Architectural Intent:
- Immutable login credentials attached to a node record
- The secret is either a private key or a provider-default password
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Credentials:
    """
    Value Object holding an account name and its secret.
    """
    account: str
    secret: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.account:
            raise ValueError("Credentials account cannot be empty")

    def __repr__(self) -> str:
        masked = "***" if self.secret else None
        return f"Credentials(account={self.account!r}, secret={masked!r})"

    def __str__(self) -> str:
        return self.account

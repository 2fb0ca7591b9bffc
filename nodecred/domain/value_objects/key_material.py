from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KeyMaterial:
    """
    Value Object representing a key pair generated for an (org, tag) group.
    The account is the key pair name registered with the provider.
    """
    account: str
    private_key: str
    fingerprint: Optional[str] = None

    def __post_init__(self):
        if not self.private_key:
            raise ValueError("Key material private key cannot be empty")

    def __repr__(self):
        return (
            f"KeyMaterial(account={self.account!r}, private_key='***', "
            f"fingerprint={self.fingerprint!r})"
        )

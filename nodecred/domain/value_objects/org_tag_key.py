from dataclasses import dataclass


@dataclass(frozen=True)
class OrgTagKey:
    """
    Value Object identifying cached key material by organization and tag.
    Equal fields compare and hash equal.
    """
    org_id: str
    tag: str

    def __post_init__(self):
        if not self.org_id:
            raise ValueError("Organization id cannot be empty")
        if not self.tag:
            raise ValueError("Tag cannot be empty")

    def __str__(self):
        return f"{self.org_id}/{self.tag}"

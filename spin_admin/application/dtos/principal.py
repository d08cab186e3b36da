"""Authenticated caller identity."""

from dataclasses import dataclass, field
from typing import Any

ADMIN_CLAIM = "admin"


@dataclass(frozen=True)
class Principal:
    """Verified caller: uid plus the claims carried by the ID token."""

    uid: str
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.claims.get(ADMIN_CLAIM) is True

"""
Client domain model.
Clients are referenced by invoices and projects; they are managed elsewhere.
"""

from dataclasses import dataclass
from typing import Optional

from bizdesk.domain.models.base import BaseEntity, ValidationError


@dataclass(eq=False)
class Client(BaseEntity):
    """Client entity."""

    name: Optional[str] = None
    email: Optional[str] = None

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Client name is required", "name")

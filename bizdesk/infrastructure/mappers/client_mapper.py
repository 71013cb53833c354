"""
Client mapper for converting database models to domain entities.
"""

from bizdesk.domain.models.client import Client
from bizdesk.infrastructure.db.models import ClientModel


class ClientMapper:
    """Maps ClientModel rows to Client entities."""

    def model_to_domain(self, model: ClientModel) -> Client:
        return Client(
            id=model.id,
            name=model.name,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at
        )

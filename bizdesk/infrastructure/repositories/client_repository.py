"""
Client repository implementation using SQLAlchemy.
"""

from typing import Optional
from sqlalchemy.orm import Session

from bizdesk.domain.models.client import Client
from bizdesk.domain.repositories.client_repository import ClientRepository as ClientRepositoryInterface
from bizdesk.infrastructure.db.models import ClientModel
from bizdesk.infrastructure.mappers.client_mapper import ClientMapper


class SQLAlchemyClientRepository(ClientRepositoryInterface):
    """SQLAlchemy implementation of client repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ClientMapper()

    def get_by_id(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        model = self.session.get(ClientModel, client_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

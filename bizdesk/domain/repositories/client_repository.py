"""Client repository interface.
Clients are only looked up here, to resolve references.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bizdesk.domain.models.client import Client


class ClientRepository(ABC):
    """
    Repository interface for Client lookups.
    """

    @abstractmethod
    def get_by_id(self, client_id: int) -> Optional[Client]:
        """
        Find a client by its ID.
        Returns None if not found.
        """
        pass

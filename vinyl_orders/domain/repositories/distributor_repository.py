"""Repository interface for Distributor (read-only for the engine)."""

from abc import ABC, abstractmethod

from ..entities.distributor import Distributor


class DistributorRepository(ABC):
    """Abstract read access to distributors."""

    @abstractmethod
    async def get_by_id(self, distributor_id: str) -> Distributor:
        """Retrieve distributor by id.

        Raises:
            NotFound: If no distributor has this id
        """
        pass

"""
Directory provider interfaces.

Users, companies and customers are owned by other services; the workflow
core only reads them.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from fibretrack.domain.entities.directory import Company, Customer, User

T = TypeVar("T")


class DirectoryProviderInterface(ABC, Generic[T]):
    """Read-only lookup of externally owned records."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    async def get(self, entity_id: int) -> Optional[T]:
        """Get a record by ID, or None when it does not exist."""
        pass

    @abstractmethod
    async def list(self) -> List[T]:
        """List all records."""
        pass


class UserProviderInterface(DirectoryProviderInterface[User]):
    """User directory."""

    @abstractmethod
    async def list_installers_for_supervisor(self, supervisor_id: int) -> List[User]:
        """List installers reporting to a supervisor."""
        pass


class CompanyProviderInterface(DirectoryProviderInterface[Company]):
    """Company directory."""


class CustomerProviderInterface(DirectoryProviderInterface[Customer]):
    """Customer directory."""

"""
In-memory directory providers for users, companies and customers.
"""

import asyncio
from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from fibretrack.application.interfaces.providers import (
    CompanyProviderInterface,
    CustomerProviderInterface,
    UserProviderInterface,
)
from fibretrack.config.logging import get_logger
from fibretrack.domain.entities.directory import Company, Customer, User

logger = get_logger(__name__)

T = TypeVar("T")


class _InMemoryDirectory(Generic[T]):
    provider_name = "in_memory"

    def __init__(self, records: Iterable[T] = (), latency_ms: int = 0):
        self._records: Dict[int, T] = {record.id: record for record in records}
        self.latency_ms = latency_ms

    @property
    def name(self) -> str:
        return self.provider_name

    async def _pause(self) -> None:
        await asyncio.sleep(self.latency_ms / 1000 if self.latency_ms else 0)

    async def get(self, entity_id: int) -> Optional[T]:
        await self._pause()
        record = self._records.get(entity_id)
        if record is None:
            logger.debug("Directory lookup missed", provider=self.name, id=entity_id)
        return record

    async def list(self) -> List[T]:
        await self._pause()
        return [*self._records.values()]


class InMemoryUserProvider(_InMemoryDirectory[User], UserProviderInterface):
    """User directory held in memory."""

    provider_name = "in_memory_users"

    async def list_installers_for_supervisor(self, supervisor_id: int) -> List[User]:
        users = await self.list()
        return [
            user
            for user in users
            if user.is_installer and user.supervisor_id == supervisor_id
        ]


class InMemoryCompanyProvider(_InMemoryDirectory[Company], CompanyProviderInterface):
    """Company directory held in memory."""

    provider_name = "in_memory_companies"


class InMemoryCustomerProvider(_InMemoryDirectory[Customer], CustomerProviderInterface):
    """Customer directory held in memory."""

    provider_name = "in_memory_customers"

"""In-memory repository implementations."""

import asyncio
import copy
import itertools
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from fibretrack.application.interfaces.repositories import (
    InstallationRepositoryInterface,
    JobRepositoryInterface,
)
from fibretrack.config.logging import get_logger
from fibretrack.domain.entities.installation import Installation
from fibretrack.domain.entities.job import Job
from fibretrack.domain.exceptions.repository_error import (
    DuplicateInstallationError,
    EntityIdentityError,
)

logger = get_logger(__name__)

E = TypeVar("E")


class IdAllocator:
    """Hands out increasing integer IDs, skipping any already taken."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._taken: set = set()

    def reserve(self, entity_id: int) -> None:
        self._taken.add(entity_id)

    def allocate(self) -> int:
        for candidate in self._counter:
            if candidate not in self._taken:
                self._taken.add(candidate)
                return candidate


class InMemoryStore(Generic[E]):
    """Keyed collection shared by the in-memory repositories.

    Records are replaced whole on every write and each write bumps a
    per-record version, so observers can diff by identity or by version.
    The store keeps its own copies: entities passed in or handed out are
    detached from stored state, so only an upsert can change a record.
    """

    def __init__(self, entity_type: str, latency_ms: int = 0):
        self.entity_type = entity_type
        self.latency_ms = latency_ms
        self._records: Dict[int, E] = {}
        self._versions: Dict[int, int] = {}
        self._ids = IdAllocator()

    async def pause(self) -> None:
        """Suspend like a network round trip would."""
        await asyncio.sleep(self.latency_ms / 1000 if self.latency_ms else 0)

    def get(self, entity_id: int) -> Optional[E]:
        record = self._records.get(entity_id)
        return copy.deepcopy(record) if record is not None else None

    def put(self, entity_id: Optional[int], entity: E) -> E:
        if entity_id is None:
            raise EntityIdentityError(self.entity_type)
        self._records[entity_id] = copy.deepcopy(entity)
        self._versions[entity_id] = self._versions.get(entity_id, 0) + 1
        self._ids.reserve(entity_id)
        return entity

    def values(self) -> List[E]:
        return [copy.deepcopy(record) for record in self._records.values()]

    def version(self, entity_id: int) -> int:
        return self._versions.get(entity_id, 0)

    def allocate_id(self) -> int:
        return self._ids.allocate()

    def clear(self) -> None:
        self._records.clear()
        self._versions.clear()
        self._ids = IdAllocator()


class InMemoryJobRepository(JobRepositoryInterface):
    """Job repository backed by a keyed in-memory store."""

    def __init__(self, jobs: Iterable[Job] = (), latency_ms: int = 0):
        self.store: InMemoryStore[Job] = InMemoryStore("Job", latency_ms)
        for job in jobs:
            self.store.put(job.id, job)

    async def find_by_id(self, job_id: int) -> Optional[Job]:
        await self.store.pause()
        return self.store.get(job_id)

    async def upsert(self, job: Job) -> Job:
        await self.store.pause()
        self.store.put(job.id, job)
        logger.debug(
            "Job stored",
            job_id=job.id,
            status=job.status.value,
            version=self.store.version(job.id),
        )
        return job

    async def list(self, predicate: Optional[Callable[[Job], bool]] = None) -> List[Job]:
        await self.store.pause()
        jobs = self.store.values()
        if predicate is None:
            return jobs
        return [job for job in jobs if predicate(job)]

    async def next_id(self) -> int:
        return self.store.allocate_id()

    def version(self, job_id: int) -> int:
        return self.store.version(job_id)


class InMemoryInstallationRepository(InstallationRepositoryInterface):
    """Installation repository with a job-id index for the 1:1 lookup."""

    def __init__(self, installations: Iterable[Installation] = (), latency_ms: int = 0):
        self.store: InMemoryStore[Installation] = InMemoryStore(
            "Installation", latency_ms
        )
        self._by_job: Dict[int, int] = {}
        for installation in installations:
            self._put(installation)

    def _put(self, installation: Installation) -> Installation:
        existing_id = self._by_job.get(installation.job_id)
        if existing_id is not None and existing_id != installation.id:
            raise DuplicateInstallationError(installation.job_id, existing_id)
        self.store.put(installation.id, installation)
        self._by_job[installation.job_id] = installation.id
        return installation

    async def find_by_id(self, installation_id: int) -> Optional[Installation]:
        await self.store.pause()
        return self.store.get(installation_id)

    async def find_by_job_id(self, job_id: int) -> Optional[Installation]:
        await self.store.pause()
        installation_id = self._by_job.get(job_id)
        if installation_id is None:
            return None
        return self.store.get(installation_id)

    async def upsert(self, installation: Installation) -> Installation:
        await self.store.pause()
        self._put(installation)
        logger.debug(
            "Installation stored",
            installation_id=installation.id,
            job_id=installation.job_id,
            version=self.store.version(installation.id),
        )
        return installation

    async def list(
        self, predicate: Optional[Callable[[Installation], bool]] = None
    ) -> List[Installation]:
        await self.store.pause()
        installations = self.store.values()
        if predicate is None:
            return installations
        return [item for item in installations if predicate(item)]

    async def next_id(self) -> int:
        return self.store.allocate_id()

    def version(self, installation_id: int) -> int:
        return self.store.version(installation_id)

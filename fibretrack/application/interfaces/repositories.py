"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from fibretrack.domain.entities.installation import Installation
from fibretrack.domain.entities.job import Job


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def find_by_id(self, job_id: int) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def upsert(self, job: Job) -> Job:
        """Store a job, replacing any record with the same ID."""
        pass

    @abstractmethod
    async def list(self, predicate: Optional[Callable[[Job], bool]] = None) -> List[Job]:
        """List jobs, optionally filtered."""
        pass

    @abstractmethod
    async def next_id(self) -> int:
        """Allocate an unused job ID."""
        pass


class InstallationRepositoryInterface(ABC):
    """Installation repository interface."""

    @abstractmethod
    async def find_by_id(self, installation_id: int) -> Optional[Installation]:
        """Get installation by ID."""
        pass

    @abstractmethod
    async def find_by_job_id(self, job_id: int) -> Optional[Installation]:
        """Get the installation belonging to a job, if started."""
        pass

    @abstractmethod
    async def upsert(self, installation: Installation) -> Installation:
        """Store an installation, replacing any record with the same ID."""
        pass

    @abstractmethod
    async def list(
        self, predicate: Optional[Callable[[Installation], bool]] = None
    ) -> List[Installation]:
        """List installations, optionally filtered."""
        pass

    @abstractmethod
    async def next_id(self) -> int:
        """Allocate an unused installation ID."""
        pass

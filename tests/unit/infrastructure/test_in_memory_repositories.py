"""
Unit tests for the in-memory repositories and directory providers.
"""

from dataclasses import replace

import pytest

from fibretrack.domain.entities.installation import Installation
from fibretrack.domain.entities.job import Job
from fibretrack.domain.exceptions import DuplicateInstallationError, EntityIdentityError
from fibretrack.domain.value_objects.job_status import JobStatus
from fibretrack.infrastructure.providers.in_memory import (
    InMemoryCompanyProvider,
    InMemoryUserProvider,
)
from fibretrack.infrastructure.repositories.in_memory import (
    IdAllocator,
    InMemoryInstallationRepository,
    InMemoryJobRepository,
)
from fibretrack.infrastructure.seed import seed_companies, seed_jobs, seed_users


class TestIdAllocator:
    """Test cases for IdAllocator."""

    def test_allocates_in_order(self):
        ids = IdAllocator()

        assert [ids.allocate() for _ in range(3)] == [1, 2, 3]

    def test_skips_reserved(self):
        ids = IdAllocator()
        ids.reserve(1)
        ids.reserve(3)

        assert [ids.allocate() for _ in range(3)] == [2, 4, 5]


class TestInMemoryJobRepository:
    """Test cases for InMemoryJobRepository."""

    @pytest.mark.asyncio
    async def test_find_by_id(self, job_repo, sample_job):
        assert await job_repo.find_by_id(sample_job.id) == sample_job
        assert await job_repo.find_by_id(999) is None

    @pytest.mark.asyncio
    async def test_upsert_replaces_record(self, job_repo, sample_job):
        updated = replace(sample_job, status=JobStatus.HOLD_OVER)

        await job_repo.upsert(updated)

        stored = await job_repo.find_by_id(sample_job.id)
        assert stored == updated
        assert stored is not sample_job
        assert sample_job.status == JobStatus.SCHEDULED

    @pytest.mark.asyncio
    async def test_version_bumps_on_write(self, job_repo, sample_job):
        assert job_repo.version(sample_job.id) == 1

        await job_repo.upsert(replace(sample_job, notes="x"))

        assert job_repo.version(sample_job.id) == 2
        assert job_repo.version(999) == 0

    @pytest.mark.asyncio
    async def test_upsert_requires_id(self, job_repo):
        with pytest.raises(EntityIdentityError):
            await job_repo.upsert(Job(id=None, company_id=1, customer_id=1))

    @pytest.mark.asyncio
    async def test_next_id_skips_existing(self):
        repo = InMemoryJobRepository(seed_jobs())

        assert await repo.next_id() == 8
        assert await repo.next_id() == 9

    @pytest.mark.asyncio
    async def test_list_with_predicate(self):
        repo = InMemoryJobRepository(seed_jobs())

        everything = await repo.list()
        held = await repo.list(lambda job: job.status == JobStatus.HOLD_OVER)

        assert len(everything) == 7
        assert [job.id for job in held] == [7]

    @pytest.mark.asyncio
    async def test_latency_is_applied(self, sample_job):
        repo = InMemoryJobRepository([sample_job], latency_ms=5)

        assert await repo.find_by_id(sample_job.id) == sample_job


class TestInMemoryInstallationRepository:
    """Test cases for InMemoryInstallationRepository."""

    @pytest.mark.asyncio
    async def test_find_by_job_id(self, installation_repo, sample_installation):
        await installation_repo.upsert(sample_installation)

        assert (
            await installation_repo.find_by_job_id(sample_installation.job_id)
            == sample_installation
        )
        assert await installation_repo.find_by_job_id(999) is None

    @pytest.mark.asyncio
    async def test_second_installation_for_job_rejected(
        self, installation_repo, sample_installation
    ):
        await installation_repo.upsert(sample_installation)
        other = replace(sample_installation, id=2)

        with pytest.raises(DuplicateInstallationError) as exc_info:
            await installation_repo.upsert(other)

        assert exc_info.value.existing_id == sample_installation.id
        assert await installation_repo.find_by_id(2) is None

    @pytest.mark.asyncio
    async def test_same_installation_can_be_rewritten(
        self, installation_repo, sample_installation
    ):
        await installation_repo.upsert(sample_installation)
        activated = replace(sample_installation, activation_complete=True)

        await installation_repo.upsert(activated)

        assert await installation_repo.find_by_id(1) == activated
        assert installation_repo.version(1) == 2

    @pytest.mark.asyncio
    async def test_list_with_predicate(self, installation_repo, sample_installation):
        await installation_repo.upsert(sample_installation)
        await installation_repo.upsert(
            Installation(id=2, job_id=9, installer_id=5, started_at=None)
        )

        mine = await installation_repo.list(lambda item: item.installer_id == 5)

        assert [item.id for item in mine] == [2]
        assert len(await installation_repo.list()) == 2


class TestInMemoryProviders:
    """Test cases for the directory providers."""

    @pytest.mark.asyncio
    async def test_get_and_list(self):
        provider = InMemoryCompanyProvider(seed_companies())

        company = await provider.get(2)

        assert company.name == "Senwes"
        assert await provider.get(42) is None
        assert len(await provider.list()) == 3
        assert provider.name == "in_memory_companies"

    @pytest.mark.asyncio
    async def test_installers_for_supervisor(self):
        provider = InMemoryUserProvider(seed_users())

        installers = await provider.list_installers_for_supervisor(3)

        assert [user.name for user in installers] == ["Ken", "Fred"]


class TestStoredRecordIsolation:
    """Test that callers cannot change stored records behind an upsert."""

    @pytest.mark.asyncio
    async def test_changing_a_fetched_job_leaves_store_alone(self, job_repo, sample_job):
        fetched = await job_repo.find_by_id(sample_job.id)
        fetched.status = JobStatus.COMPLETED
        fetched.comments.append("injected")

        stored = await job_repo.find_by_id(sample_job.id)
        assert stored.status == JobStatus.SCHEDULED
        assert stored.comments == []
        assert job_repo.version(sample_job.id) == 1

    @pytest.mark.asyncio
    async def test_changing_an_upserted_job_leaves_store_alone(self, job_repo, sample_job):
        updated = replace(sample_job, notes="gate code 4411")
        await job_repo.upsert(updated)

        updated.notes = "changed afterwards"
        sample_job.comments.append("shared list")

        stored = await job_repo.find_by_id(sample_job.id)
        assert stored.notes == "gate code 4411"
        assert stored.comments == []

    @pytest.mark.asyncio
    async def test_listed_jobs_are_copies(self, job_repo, sample_job):
        (listed,) = await job_repo.list()
        listed.assigned_installer_id = None

        assert (await job_repo.find_by_id(sample_job.id)).assigned_installer_id == 4

    @pytest.mark.asyncio
    async def test_changing_a_fetched_device_leaves_store_alone(
        self, installation_repo, sample_installation
    ):
        await installation_repo.upsert(sample_installation)

        fetched = await installation_repo.find_by_job_id(sample_installation.job_id)
        fetched.devices[0].serial_complete = True
        fetched.devices[0].serial_photos.append("serial.jpg")

        device = (await installation_repo.find_by_id(sample_installation.id)).get_device(1)
        assert device.serial_complete is False
        assert device.serial_photos == []
        assert installation_repo.version(sample_installation.id) == 1

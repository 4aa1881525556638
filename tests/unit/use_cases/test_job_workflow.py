"""
Unit tests for JobWorkflow.
"""

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from fibretrack.application.schemas.common import GENERIC_ERROR_MESSAGE
from fibretrack.application.use_cases.job_workflow import JobWorkflow
from fibretrack.domain.value_objects.failure_kind import FailureKind
from fibretrack.domain.value_objects.job_status import JobStatus
from fibretrack.infrastructure.monitoring import metrics
from fibretrack.infrastructure.providers.in_memory import (
    InMemoryCompanyProvider,
    InMemoryCustomerProvider,
)
from fibretrack.infrastructure.repositories.in_memory import InMemoryJobRepository
from fibretrack.infrastructure.seed import seed_companies, seed_customers, seed_jobs


def _sample(name, labels):
    return metrics.get_registry().get_sample_value(name, labels) or 0


class TestJobLifecycle:
    """Test cases for the job-level happy path and guards."""

    @pytest.mark.asyncio
    async def test_create_assign_schedule(self, job_workflow):
        created = await job_workflow.create_job(
            company_id=1, customer_id=2, device_count=2, customer_otp="5678"
        )

        assert created.success is True
        job = created.data
        assert job.id == 2
        assert job.status == JobStatus.NEW

        assigned = await job_workflow.assign_job(job.id, installer_id=5, supervisor_id=2)
        assert assigned.success is True
        assert assigned.data.status == JobStatus.ASSIGNED

        date = datetime(2025, 2, 1, tzinfo=timezone.utc)
        scheduled = await job_workflow.schedule_job(job.id, date)
        assert scheduled.data.status == JobStatus.SCHEDULED
        assert scheduled.data.scheduled_date == date

        stored = await job_workflow.get_job(job.id)
        assert stored.data == scheduled.data

    @pytest.mark.asyncio
    async def test_create_job_invalid_input(self, job_workflow):
        result = await job_workflow.create_job(company_id=1, customer_id=1, device_count=0)

        assert result.success is False
        assert result.error_type == FailureKind.INVALID_INPUT
        assert result.message == "Device count must be at least 1"

    @pytest.mark.parametrize("device_count", [0, 2.0, "3"])
    @pytest.mark.asyncio
    async def test_rejected_create_keeps_next_id(self, job_workflow, job_repo, device_count):
        rejected = await job_workflow.create_job(
            company_id=1, customer_id=1, device_count=device_count
        )
        created = await job_workflow.create_job(company_id=1, customer_id=1, device_count=2)

        assert rejected.success is False
        assert rejected.error_type == FailureKind.INVALID_INPUT
        assert created.data.id == 2
        assert len(await job_repo.list()) == 2

    @pytest.mark.asyncio
    async def test_hold_over_from_new_job(self, job_workflow):
        created = await job_workflow.create_job(company_id=1, customer_id=1)

        held = await job_workflow.set_hold_over(created.data.id, "Waiting on permit")

        assert held.success is True
        assert held.data.status == JobStatus.HOLD_OVER

    @pytest.mark.asyncio
    async def test_enroute_then_otp(self, job_workflow, sample_job):
        enroute = await job_workflow.mark_enroute(sample_job.id)
        assert enroute.success is True
        assert enroute.data.enroute_at is not None
        assert enroute.data.status == JobStatus.SCHEDULED

        wrong = await job_workflow.verify_otp(sample_job.id, "0000")
        assert wrong.success is False
        assert wrong.message == "Invalid OTP. Please try again."
        assert wrong.error_type == FailureKind.PRECONDITION_FAILED

        right = await job_workflow.verify_otp(sample_job.id, "1234")
        assert right.success is True
        assert right.data.otp_verified is True

        again = await job_workflow.verify_otp(sample_job.id, "9999")
        assert again.success is True
        assert again.data.otp_verified_at == right.data.otp_verified_at

    @pytest.mark.asyncio
    async def test_enroute_requires_schedule(self, job_workflow, job_repo):
        created = await job_workflow.create_job(company_id=1, customer_id=1)

        result = await job_workflow.mark_enroute(created.data.id)

        assert result.success is False
        assert result.message == "Job must be scheduled before marking enroute"
        stored = await job_repo.find_by_id(created.data.id)
        assert stored.enroute_at is None

    @pytest.mark.asyncio
    async def test_hold_over_round_trip(self, job_workflow, sample_job):
        held = await job_workflow.set_hold_over(sample_job.id, "Customer not home")

        assert held.data.status == JobStatus.HOLD_OVER
        assert held.data.notes == "Customer not home"

        resolved = await job_workflow.resolve_hold_over(sample_job.id)
        assert resolved.data.status == JobStatus.ASSIGNED
        assert resolved.data.assigned_installer_id == 4
        assert resolved.data.supervisor_id == 2

        again = await job_workflow.resolve_hold_over(sample_job.id)
        assert again.success is False
        assert again.message == "Job is not in Hold-Over status"

    @pytest.mark.asyncio
    async def test_complete_job(self, job_workflow, job_repo, sample_job):
        await job_repo.upsert(replace(sample_job, status=JobStatus.PENDING_ACTIVATION))

        result = await job_workflow.complete_job(sample_job.id)

        assert result.success is True
        assert result.data.status == JobStatus.COMPLETED
        assert (await job_repo.find_by_id(sample_job.id)).completed_date is not None

    @pytest.mark.asyncio
    async def test_add_comment(self, job_workflow, sample_job):
        result = await job_workflow.add_comment(sample_job.id, 2, "Stan Wesson", "Gate is locked")

        assert result.success is True
        assert result.data.comments[0].text == "Gate is locked"

        empty = await job_workflow.add_comment(sample_job.id, 2, "Stan Wesson", " ")
        assert empty.success is False
        assert empty.message == "Comment cannot be empty"


class TestJobQueries:
    """Test cases for list and get operations."""

    @pytest.fixture
    def seeded_workflow(self, engine, installation_repo, locks):
        return JobWorkflow(
            engine=engine,
            job_repo=InMemoryJobRepository(seed_jobs()),
            installation_repo=installation_repo,
            locks=locks,
        )

    @pytest.mark.asyncio
    async def test_list_filters(self, seeded_workflow):
        by_status = await seeded_workflow.list_jobs(status=JobStatus.SCHEDULED)
        by_installer = await seeded_workflow.list_jobs(installer_id=4)
        everything = await seeded_workflow.list_jobs()

        assert [job.id for job in by_status.data] == [3]
        assert all(job.assigned_installer_id == 4 for job in by_installer.data)
        assert [job.id for job in everything.data] == list(range(1, 8))

    @pytest.mark.asyncio
    async def test_list_in_date_range(self, seeded_workflow):
        result = await seeded_workflow.list_jobs_in_date_range(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 1, 9, tzinfo=timezone.utc),
        )

        assert [job.id for job in result.data] == [1, 2, 5]

    @pytest.mark.asyncio
    async def test_get_missing_job(self, seeded_workflow):
        result = await seeded_workflow.get_job(404)

        assert result.success is False
        assert result.message == "Job not found"
        assert result.error_type == FailureKind.NOT_FOUND


class TestReferenceChecks:
    """Test cases for directory lookups."""

    @pytest.mark.parametrize(
        "operation,args",
        [
            ("mark_enroute", ()),
            ("verify_otp", ("1234",)),
            ("set_hold_over", ("x",)),
            ("resolve_hold_over", ()),
            ("complete_job", ()),
            ("schedule_job", (datetime(2025, 2, 1, tzinfo=timezone.utc),)),
            ("assign_job", (4, 2)),
        ],
    )
    @pytest.mark.asyncio
    async def test_unknown_job(self, job_workflow, operation, args):
        result = await getattr(job_workflow, operation)(999, *args)

        assert result.success is False
        assert result.message == "Job not found"
        assert result.error_type == FailureKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_installer(self, job_workflow, job_repo, sample_job):
        result = await job_workflow.assign_job(sample_job.id, installer_id=99, supervisor_id=2)

        assert result.success is False
        assert result.message == "Installer not found"
        assert (await job_repo.find_by_id(sample_job.id)).assigned_installer_id == 4

    @pytest.mark.asyncio
    async def test_unknown_supervisor(self, job_workflow, sample_job):
        result = await job_workflow.assign_job(sample_job.id, installer_id=5, supervisor_id=99)

        assert result.message == "Supervisor not found"
        assert result.error_type == FailureKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_company_and_customer(
        self, engine, job_repo, installation_repo, locks
    ):
        workflow = JobWorkflow(
            engine=engine,
            job_repo=job_repo,
            installation_repo=installation_repo,
            locks=locks,
            company_provider=InMemoryCompanyProvider(seed_companies()),
            customer_provider=InMemoryCustomerProvider(seed_customers()),
        )

        no_company = await workflow.create_job(company_id=42, customer_id=1)
        no_customer = await workflow.create_job(company_id=1, customer_id=42)

        assert no_company.message == "Company not found"
        assert no_customer.message == "Customer not found"
        assert len(await job_repo.list()) == 1


class TestFaultHandling:
    """Test cases for unexpected storage faults."""

    @pytest.mark.asyncio
    async def test_read_fault_is_normalised(self, job_workflow):
        job_workflow.job_repo.find_by_id = AsyncMock(side_effect=ConnectionError("down"))

        result = await job_workflow.get_job(1)

        assert result.success is False
        assert result.message == GENERIC_ERROR_MESSAGE
        assert result.error_type == FailureKind.TRANSPORT_FAULT
        assert result.error_type.is_retryable() is True

    @pytest.mark.asyncio
    async def test_write_fault_leaves_lock_free(self, job_workflow, locks, sample_job):
        original_upsert = job_workflow.job_repo.upsert
        job_workflow.job_repo.upsert = AsyncMock(side_effect=RuntimeError("disk full"))
        before = _sample(
            "errors_total", {"error_type": "RuntimeError", "component": "job_workflow"}
        )

        result = await job_workflow.set_hold_over(sample_job.id, "x")

        assert result.error_type == FailureKind.TRANSPORT_FAULT
        assert locks.is_locked(("job", sample_job.id)) is False
        assert (
            _sample(
                "errors_total",
                {"error_type": "RuntimeError", "component": "job_workflow"},
            )
            == before + 1
        )

        job_workflow.job_repo.upsert = original_upsert
        retried = await job_workflow.set_hold_over(sample_job.id, "x")
        assert retried.success is True

    @pytest.mark.asyncio
    async def test_transition_metric(self, job_workflow, sample_job):
        labels = {"from_status": "Scheduled", "to_status": "Hold-Over"}
        before = _sample("job_status_transitions_total", labels)

        await job_workflow.set_hold_over(sample_job.id, "x")

        assert _sample("job_status_transitions_total", labels) == before + 1

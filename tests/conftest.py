"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest

from fibretrack.application.services.activation_policy import FixedActivationPolicy
from fibretrack.application.services.entity_locks import EntityLockRegistry
from fibretrack.application.services.lifecycle_engine import LifecycleEngine
from fibretrack.application.use_cases.installation_workflow import (
    InstallationWorkflow,
)
from fibretrack.application.use_cases.job_workflow import JobWorkflow
from fibretrack.config.settings import Settings
from fibretrack.domain.entities.installation import Device, Installation
from fibretrack.domain.entities.job import Job
from fibretrack.domain.value_objects.job_status import JobStatus
from fibretrack.infrastructure.providers.in_memory import InMemoryUserProvider
from fibretrack.infrastructure.repositories.in_memory import (
    InMemoryInstallationRepository,
    InMemoryJobRepository,
)
from fibretrack.infrastructure.seed import seed_users


class FakeClock:
    """Deterministic clock that moves one minute per reading."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture
def test_settings():
    """Test settings configuration."""
    return Settings(
        ENVIRONMENT="test",
        LOG_LEVEL="DEBUG",
        SIMULATED_LATENCY_MS=0,
        ACTIVATION_FAILURE_RATE=0.1,
        ACTIVATION_RANDOM_SEED=42,
        ENABLE_METRICS=True,
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def activation_policy():
    """Policy that lets every activation through unless a test flips it."""
    return FixedActivationPolicy(fail=False)


@pytest.fixture
def engine(activation_policy, clock):
    return LifecycleEngine(activation_policy=activation_policy, clock=clock)


@pytest.fixture
def sample_job():
    """A scheduled job with an OTP and two devices."""
    return Job(
        id=1,
        company_id=1,
        customer_id=1,
        status=JobStatus.SCHEDULED,
        device_count=2,
        assigned_installer_id=4,
        supervisor_id=2,
        scheduled_date=datetime(2025, 1, 20, tzinfo=timezone.utc),
        customer_otp="1234",
        created_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_installation(sample_job):
    """Installation for sample_job with no device work done yet."""
    return Installation(
        id=1,
        job_id=sample_job.id,
        installer_id=4,
        started_at=datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc),
        devices=[Device(device_number=1), Device(device_number=2)],
    )


@pytest.fixture
def finished_installation(sample_installation):
    """Installation whose devices have both steps complete."""
    done = datetime(2025, 1, 15, 11, 0, tzinfo=timezone.utc)
    return Installation(
        id=sample_installation.id,
        job_id=sample_installation.job_id,
        installer_id=sample_installation.installer_id,
        started_at=sample_installation.started_at,
        devices=[
            Device(
                device_number=n,
                installation_complete=True,
                installation_photos=[f"install_{n}.jpg"],
                installation_completed_at=done,
                serial_complete=True,
                serial_photos=[f"serial_{n}.jpg"],
                serial_completed_at=done,
            )
            for n in (1, 2)
        ],
    )


@pytest.fixture
def job_repo(sample_job):
    return InMemoryJobRepository([sample_job])


@pytest.fixture
def installation_repo():
    return InMemoryInstallationRepository()


@pytest.fixture
def user_provider():
    return InMemoryUserProvider(seed_users())


@pytest.fixture
def locks():
    return EntityLockRegistry()


@pytest.fixture
def job_workflow(engine, job_repo, installation_repo, locks, user_provider):
    return JobWorkflow(
        engine=engine,
        job_repo=job_repo,
        installation_repo=installation_repo,
        locks=locks,
        user_provider=user_provider,
    )


@pytest.fixture
def installation_workflow(engine, job_repo, installation_repo, locks, user_provider):
    return InstallationWorkflow(
        engine=engine,
        job_repo=job_repo,
        installation_repo=installation_repo,
        locks=locks,
        user_provider=user_provider,
    )

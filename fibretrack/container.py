"""
Wiring for the workflow core.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from fibretrack.application.services.activation_policy import (
    ActivationPolicy,
    RandomActivationPolicy,
)
from fibretrack.application.services.entity_locks import EntityLockRegistry
from fibretrack.application.services.lifecycle_engine import LifecycleEngine
from fibretrack.application.use_cases.installation_workflow import (
    InstallationWorkflow,
)
from fibretrack.application.use_cases.job_workflow import JobWorkflow
from fibretrack.config.logging import get_logger
from fibretrack.config.settings import Settings, settings
from fibretrack.infrastructure import seed
from fibretrack.infrastructure.providers.in_memory import (
    InMemoryCompanyProvider,
    InMemoryCustomerProvider,
    InMemoryUserProvider,
)
from fibretrack.infrastructure.repositories.in_memory import (
    InMemoryInstallationRepository,
    InMemoryJobRepository,
)

logger = get_logger(__name__)


@dataclass
class WorkflowContainer:
    """Everything a caller needs to drive jobs through their lifecycle."""

    jobs: JobWorkflow
    installations: InstallationWorkflow
    engine: LifecycleEngine
    job_repo: InMemoryJobRepository
    installation_repo: InMemoryInstallationRepository
    users: InMemoryUserProvider
    companies: InMemoryCompanyProvider
    customers: InMemoryCustomerProvider


def build_container(
    app_settings: Optional[Settings] = None,
    activation_policy: Optional[ActivationPolicy] = None,
    clock: Optional[Callable[[], datetime]] = None,
    with_seed_data: bool = False,
    validate_references: Optional[bool] = None,
) -> WorkflowContainer:
    """Build a container backed by in-memory stores.

    Without an explicit policy, activation outcomes come from a
    ``RandomActivationPolicy`` configured from settings. Directory lookups
    for referenced users, companies and customers default to on only when
    the directories are seeded.
    """
    if validate_references is None:
        validate_references = with_seed_data
    app_settings = app_settings or settings
    latency = app_settings.SIMULATED_LATENCY_MS

    policy = activation_policy or RandomActivationPolicy(
        failure_rate=app_settings.ACTIVATION_FAILURE_RATE,
        seed=app_settings.ACTIVATION_RANDOM_SEED,
    )
    engine = LifecycleEngine(
        activation_policy=policy,
        max_photos=app_settings.MAX_PHOTOS_PER_STEP,
        otp_length=app_settings.OTP_LENGTH,
        clock=clock,
    )

    job_repo = InMemoryJobRepository(
        seed.seed_jobs() if with_seed_data else (), latency_ms=latency
    )
    installation_repo = InMemoryInstallationRepository(
        seed.seed_installations() if with_seed_data else (), latency_ms=latency
    )
    users = InMemoryUserProvider(
        seed.seed_users() if with_seed_data else (), latency_ms=latency
    )
    companies = InMemoryCompanyProvider(
        seed.seed_companies() if with_seed_data else (), latency_ms=latency
    )
    customers = InMemoryCustomerProvider(
        seed.seed_customers() if with_seed_data else (), latency_ms=latency
    )

    locks = EntityLockRegistry()
    shared = dict(
        engine=engine,
        job_repo=job_repo,
        installation_repo=installation_repo,
        locks=locks,
        user_provider=users if validate_references else None,
        metrics_enabled=app_settings.ENABLE_METRICS,
    )

    logger.info(
        "Workflow container built",
        seeded=with_seed_data,
        latency_ms=latency,
        policy=type(policy).__name__,
    )

    return WorkflowContainer(
        jobs=JobWorkflow(
            company_provider=companies if validate_references else None,
            customer_provider=customers if validate_references else None,
            **shared,
        ),
        installations=InstallationWorkflow(**shared),
        engine=engine,
        job_repo=job_repo,
        installation_repo=installation_repo,
        users=users,
        companies=companies,
        customers=customers,
    )

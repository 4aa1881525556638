"""Job workflow use cases."""

from datetime import date, datetime
from typing import Awaitable, Callable, Optional, Union

from fibretrack.application.interfaces.providers import (
    CompanyProviderInterface,
    CustomerProviderInterface,
)
from fibretrack.application.schemas.common import OperationResult
from fibretrack.application.services.lifecycle_engine import Transition
from fibretrack.application.use_cases.base import JOB, WorkflowUseCase
from fibretrack.config.logging import get_logger
from fibretrack.domain.entities.job import Job
from fibretrack.domain.value_objects.job_status import JobStatus

logger = get_logger(__name__)


class JobWorkflow(WorkflowUseCase):
    """Operation surface for job-level transitions."""

    component = "job_workflow"

    def __init__(
        self,
        *args,
        company_provider: Optional[CompanyProviderInterface] = None,
        customer_provider: Optional[CustomerProviderInterface] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.company_provider = company_provider
        self.customer_provider = customer_provider

    async def _apply(
        self,
        operation: str,
        job_id: int,
        decide: Callable[[Job], Transition[Job]],
        precheck: Optional[Callable[[], Awaitable[Optional[OperationResult]]]] = None,
        **context,
    ) -> OperationResult:
        """Load a job under its lock, run one transition and store the result."""

        async def body() -> OperationResult:
            async with self.locks.hold((JOB, job_id)):
                job = await self.job_repo.find_by_id(job_id)
                if job is None:
                    return self._not_found(operation, "Job", job_id=job_id)

                if precheck is not None:
                    failed = await precheck()
                    if failed is not None:
                        return failed

                transition = decide(job)
                if not transition.ok:
                    return self._rejected(operation, transition, job_id=job_id)

                updated = transition.value
                if transition.changed:
                    updated = await self._save_job(job, updated, operation)

                logger.info(
                    "Job transition applied",
                    operation=operation,
                    job_id=job_id,
                    status=updated.status.value,
                    changed=transition.changed,
                    **context,
                )
                return OperationResult.ok(updated, message=transition.message)

        return await self._run(operation, body, job_id=job_id)

    async def create_job(
        self,
        company_id: int,
        customer_id: int,
        device_count: int = 1,
        customer_otp: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> OperationResult:
        """Create a job in New status with no installation."""

        async def body() -> OperationResult:
            rejected = self.engine.check_new_job(device_count, customer_otp)
            if rejected is not None:
                return self._rejected("create_job", rejected, company_id=company_id)

            if self.company_provider is not None:
                if await self.company_provider.get(company_id) is None:
                    return self._not_found(
                        "create_job", "Company", company_id=company_id
                    )
            if self.customer_provider is not None:
                if await self.customer_provider.get(customer_id) is None:
                    return self._not_found(
                        "create_job", "Customer", customer_id=customer_id
                    )

            job_id = await self.job_repo.next_id()
            transition = self.engine.create_job(
                job_id=job_id,
                company_id=company_id,
                customer_id=customer_id,
                device_count=device_count,
                customer_otp=customer_otp,
                notes=notes,
            )
            if not transition.ok:
                return self._rejected("create_job", transition, company_id=company_id)

            job = await self.job_repo.upsert(transition.value)
            logger.info(
                "Job created",
                job_id=job.id,
                company_id=company_id,
                customer_id=customer_id,
                device_count=device_count,
            )
            return OperationResult.ok(job)

        return await self._run("create_job", body, company_id=company_id)

    async def get_job(self, job_id: int) -> OperationResult:
        async def body() -> OperationResult:
            job = await self.job_repo.find_by_id(job_id)
            if job is None:
                return self._not_found("get_job", "Job", job_id=job_id)
            return OperationResult.ok(job)

        return await self._run("get_job", body, job_id=job_id)

    async def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        company_id: Optional[int] = None,
        installer_id: Optional[int] = None,
    ) -> OperationResult:
        """List jobs matching every filter given."""

        def matches(job: Job) -> bool:
            return (
                (status is None or job.status == status)
                and (company_id is None or job.company_id == company_id)
                and (installer_id is None or job.assigned_installer_id == installer_id)
            )

        async def body() -> OperationResult:
            jobs = await self.job_repo.list(matches)
            return OperationResult.ok(sorted(jobs, key=lambda j: j.id))

        return await self._run("list_jobs", body)

    async def list_jobs_in_date_range(
        self, start: datetime, end: datetime
    ) -> OperationResult:
        """List jobs created within [start, end]."""

        async def body() -> OperationResult:
            jobs = await self.job_repo.list(lambda job: start <= job.created_at <= end)
            return OperationResult.ok(sorted(jobs, key=lambda j: j.created_at))

        return await self._run("list_jobs_in_date_range", body)

    async def assign_job(
        self, job_id: int, installer_id: int, supervisor_id: int
    ) -> OperationResult:
        async def users_exist() -> Optional[OperationResult]:
            return await self._check_user(
                installer_id, "Installer"
            ) or await self._check_user(supervisor_id, "Supervisor")

        return await self._apply(
            "assign_job",
            job_id,
            lambda job: self.engine.assign(job, installer_id, supervisor_id),
            precheck=users_exist,
            installer_id=installer_id,
            supervisor_id=supervisor_id,
        )

    async def schedule_job(
        self, job_id: int, scheduled_date: Union[date, datetime]
    ) -> OperationResult:
        return await self._apply(
            "schedule_job",
            job_id,
            lambda job: self.engine.schedule(job, scheduled_date),
            scheduled_date=str(scheduled_date),
        )

    async def mark_enroute(self, job_id: int) -> OperationResult:
        return await self._apply(
            "mark_enroute", job_id, lambda job: self.engine.mark_enroute(job)
        )

    async def verify_otp(self, job_id: int, code: Optional[str]) -> OperationResult:
        return await self._apply(
            "verify_otp", job_id, lambda job: self.engine.verify_otp(job, code)
        )

    async def set_hold_over(self, job_id: int, notes: Optional[str]) -> OperationResult:
        def decide(job: Job) -> Transition[Job]:
            if not job.status.can_be_held_over():
                logger.warning(
                    "Hold-over set from an unusual status",
                    job_id=job_id,
                    status=job.status.value,
                )
            return self.engine.set_hold_over(job, notes)

        return await self._apply(
            "set_hold_over",
            job_id,
            decide,
            notes=notes,
        )

    async def resolve_hold_over(self, job_id: int) -> OperationResult:
        return await self._apply(
            "resolve_hold_over", job_id, lambda job: self.engine.resolve_hold_over(job)
        )

    async def complete_job(self, job_id: int) -> OperationResult:
        return await self._apply(
            "complete_job", job_id, lambda job: self.engine.complete_job(job)
        )

    async def add_comment(
        self, job_id: int, user_id: int, user_name: str, text: Optional[str]
    ) -> OperationResult:
        return await self._apply(
            "add_comment",
            job_id,
            lambda job: self.engine.add_comment(job, user_id, user_name, text),
            user_id=user_id,
        )

"""Shared plumbing for workflow use cases."""

from typing import Any, Awaitable, Callable, Optional

from fibretrack.application.interfaces.providers import UserProviderInterface
from fibretrack.application.interfaces.repositories import (
    InstallationRepositoryInterface,
    JobRepositoryInterface,
)
from fibretrack.application.schemas.common import OperationResult
from fibretrack.application.services.entity_locks import EntityLockRegistry
from fibretrack.application.services.lifecycle_engine import (
    LifecycleEngine,
    Transition,
)
from fibretrack.config.logging import get_logger
from fibretrack.domain.entities.job import Job
from fibretrack.domain.value_objects.failure_kind import FailureKind
from fibretrack.infrastructure.monitoring import metrics

logger = get_logger(__name__)

JOB = "job"
INSTALLATION = "installation"


class WorkflowUseCase:
    """Base for the workflow façades.

    Every public operation runs through ``_run``, which turns unexpected
    exceptions into a transport-fault envelope so callers only ever see
    ``OperationResult`` values.
    """

    component = "workflow"

    def __init__(
        self,
        engine: LifecycleEngine,
        job_repo: JobRepositoryInterface,
        installation_repo: InstallationRepositoryInterface,
        locks: Optional[EntityLockRegistry] = None,
        user_provider: Optional[UserProviderInterface] = None,
        metrics_enabled: bool = True,
    ):
        self.engine = engine
        self.job_repo = job_repo
        self.installation_repo = installation_repo
        self.locks = locks or EntityLockRegistry()
        self.user_provider = user_provider
        self.metrics_enabled = metrics_enabled

    async def _run(
        self,
        operation: str,
        body: Callable[[], Awaitable[OperationResult]],
        **context: Any,
    ) -> OperationResult:
        try:
            result = await body()
        except Exception as e:
            logger.error(
                "Workflow operation failed unexpectedly",
                operation=operation,
                component=self.component,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
                **context,
            )
            if self.metrics_enabled:
                metrics.record_error(type(e).__name__, self.component)
            result = OperationResult.fault()

        if self.metrics_enabled:
            metrics.record_operation(operation, result.success)
            if not result.success and result.error_type is not None:
                metrics.record_rejection(operation, result.error_type.value)
        return result

    def _not_found(self, operation: str, entity: str, **context: Any) -> OperationResult:
        logger.warning(f"{entity} not found", operation=operation, **context)
        return OperationResult.not_found(entity)

    def _rejected(
        self, operation: str, transition: Transition, **context: Any
    ) -> OperationResult:
        logger.warning(
            "Workflow transition rejected",
            operation=operation,
            reason=transition.message,
            failure_kind=transition.failure.value if transition.failure else None,
            retryable=bool(transition.failure and transition.failure.is_retryable()),
            **context,
        )
        return OperationResult.fail(
            transition.message, transition.failure or FailureKind.PRECONDITION_FAILED
        )

    async def _save_job(self, previous: Job, updated: Job, operation: str) -> Job:
        stored = await self.job_repo.upsert(updated)
        if previous.status != updated.status:
            logger.info(
                "Job status changed",
                operation=operation,
                job_id=updated.id,
                from_status=previous.status.value,
                to_status=updated.status.value,
            )
            if self.metrics_enabled:
                metrics.record_transition(previous.status.value, updated.status.value)
        return stored

    async def _check_user(
        self, user_id: Optional[int], label: str
    ) -> Optional[OperationResult]:
        """Return a not-found result when a referenced user is unknown."""
        if self.user_provider is None or user_id is None:
            return None
        user = await self.user_provider.get(user_id)
        if user is None:
            logger.warning(f"{label} not found", user_id=user_id)
            return OperationResult.not_found(label)
        return None

"""Installation workflow use cases."""

from typing import Callable, Optional

from fibretrack.application.schemas.common import OperationResult
from fibretrack.application.services.lifecycle_engine import Transition
from fibretrack.application.use_cases.base import INSTALLATION, JOB, WorkflowUseCase
from fibretrack.config.logging import get_logger
from fibretrack.domain.entities.installation import Installation
from fibretrack.infrastructure.monitoring import metrics

logger = get_logger(__name__)


class InstallationWorkflow(WorkflowUseCase):
    """Operation surface for installations, their devices and activation."""

    component = "installation_workflow"

    async def _apply(
        self,
        operation: str,
        installation_id: int,
        decide: Callable[[Installation], Transition[Installation]],
        **context,
    ) -> OperationResult:
        """Load an installation under its lock, run one device transition, store it."""

        async def body() -> OperationResult:
            async with self.locks.hold((INSTALLATION, installation_id)):
                installation = await self.installation_repo.find_by_id(installation_id)
                if installation is None:
                    return self._not_found(
                        operation, "Installation", installation_id=installation_id
                    )

                transition = decide(installation)
                if not transition.ok:
                    return self._rejected(
                        operation,
                        transition,
                        installation_id=installation_id,
                        **context,
                    )

                updated = transition.value
                if transition.changed:
                    updated = await self.installation_repo.upsert(updated)

                logger.info(
                    "Installation transition applied",
                    operation=operation,
                    installation_id=installation_id,
                    changed=transition.changed,
                    **context,
                )
                return OperationResult.ok(updated, message=transition.message)

        return await self._run(operation, body, installation_id=installation_id)

    async def start_installation(
        self, job_id: int, installer_id: Optional[int] = None
    ) -> OperationResult:
        """Create the job's installation, or return the one already started."""

        async def body() -> OperationResult:
            async with self.locks.hold((JOB, job_id)):
                job = await self.job_repo.find_by_id(job_id)
                if job is None:
                    return self._not_found("start_installation", "Job", job_id=job_id)

                failed = await self._check_user(installer_id, "Installer")
                if failed is not None:
                    return failed

                existing = await self.installation_repo.find_by_job_id(job_id)
                installation_id = (
                    existing.id
                    if existing is not None
                    else await self.installation_repo.next_id()
                )
                transition = self.engine.start_installation(
                    job, existing, installation_id, installer_id
                )
                if not transition.ok:
                    return self._rejected("start_installation", transition, job_id=job_id)

                updated_job, installation = transition.value
                if transition.changed:
                    installation = await self.installation_repo.upsert(installation)
                    await self._save_job(job, updated_job, "start_installation")
                    logger.info(
                        "Installation started",
                        job_id=job_id,
                        installation_id=installation.id,
                        device_count=len(installation.devices),
                        installer_id=installation.installer_id,
                    )
                else:
                    logger.info(
                        "Installation already started",
                        job_id=job_id,
                        installation_id=installation.id,
                    )
                return OperationResult.ok(installation)

        return await self._run("start_installation", body, job_id=job_id)

    async def get_installation(self, installation_id: int) -> OperationResult:
        async def body() -> OperationResult:
            installation = await self.installation_repo.find_by_id(installation_id)
            if installation is None:
                return self._not_found(
                    "get_installation", "Installation", installation_id=installation_id
                )
            return OperationResult.ok(installation)

        return await self._run(
            "get_installation", body, installation_id=installation_id
        )

    async def get_installation_by_job(self, job_id: int) -> OperationResult:
        """Return the job's installation, or a successful empty result."""

        async def body() -> OperationResult:
            return OperationResult.ok(
                await self.installation_repo.find_by_job_id(job_id)
            )

        return await self._run("get_installation_by_job", body, job_id=job_id)

    async def list_installations(
        self, installer_id: Optional[int] = None
    ) -> OperationResult:
        async def body() -> OperationResult:
            installations = await self.installation_repo.list(
                None
                if installer_id is None
                else lambda item: item.installer_id == installer_id
            )
            return OperationResult.ok(sorted(installations, key=lambda i: i.id))

        return await self._run("list_installations", body)

    async def add_installation_photo(
        self, installation_id: int, device_number: int, photo_url: str
    ) -> OperationResult:
        return await self._apply(
            "add_installation_photo",
            installation_id,
            lambda inst: self.engine.add_installation_photo(
                inst, device_number, photo_url
            ),
            device_number=device_number,
        )

    async def complete_device_installation(
        self, installation_id: int, device_number: int
    ) -> OperationResult:
        return await self._apply(
            "complete_device_installation",
            installation_id,
            lambda inst: self.engine.complete_device_installation(inst, device_number),
            device_number=device_number,
        )

    async def add_serial_photo(
        self, installation_id: int, device_number: int, photo_url: str
    ) -> OperationResult:
        return await self._apply(
            "add_serial_photo",
            installation_id,
            lambda inst: self.engine.add_serial_photo(inst, device_number, photo_url),
            device_number=device_number,
        )

    async def complete_device_serial(
        self, installation_id: int, device_number: int
    ) -> OperationResult:
        return await self._apply(
            "complete_device_serial",
            installation_id,
            lambda inst: self.engine.complete_device_serial(inst, device_number),
            device_number=device_number,
        )

    async def add_inventory_item(
        self,
        installation_id: int,
        device_number: int,
        serial_number: str,
        device_type: str,
        installer_id: Optional[int] = None,
        model: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> OperationResult:
        return await self._apply(
            "add_inventory_item",
            installation_id,
            lambda inst: self.engine.add_inventory_item(
                inst,
                device_number,
                serial_number=serial_number,
                device_type=device_type,
                installer_id=(
                    installer_id if installer_id is not None else inst.installer_id
                ),
                job_id=inst.job_id,
                model=model,
                notes=notes,
            ),
            device_number=device_number,
        )

    async def activate_installation(self, installation_id: int) -> OperationResult:
        """Activate an installation whose devices are all done.

        The outcome is not deterministic: the activation policy may fail the
        attempt, in which case the job is moved to Hold-Over and the caller
        must resolve it before trying again.
        """

        async def body() -> OperationResult:
            async with self.locks.hold((INSTALLATION, installation_id)):
                installation = await self.installation_repo.find_by_id(installation_id)
                if installation is None:
                    return self._not_found(
                        "activate_installation",
                        "Installation",
                        installation_id=installation_id,
                    )

                async with self.locks.hold((JOB, installation.job_id)):
                    job = await self.job_repo.find_by_id(installation.job_id)
                    if job is None:
                        return self._not_found(
                            "activate_installation", "Job", job_id=installation.job_id
                        )

                    transition = self.engine.activate_installation(installation, job)
                    if not transition.ok:
                        return await self._activation_rejected(
                            installation, job, transition
                        )

                    activated, updated_job = transition.value
                    if transition.changed:
                        activated = await self.installation_repo.upsert(activated)
                        await self._save_job(job, updated_job, "activate_installation")
                        self._record_activation("succeeded")
                        logger.info(
                            "Installation activated",
                            installation_id=installation_id,
                            job_id=job.id,
                        )
                    return OperationResult.ok(activated, message=transition.message)

        return await self._run(
            "activate_installation", body, installation_id=installation_id
        )

    async def _activation_rejected(self, installation, job, transition) -> OperationResult:
        if transition.failure is not None and transition.failure.has_side_effect():
            await self._save_job(job, transition.side_effect, "activate_installation")
            self._record_activation("queue_failure")
            logger.warning(
                "Activation failed in queue, job moved to Hold-Over",
                installation_id=installation.id,
                job_id=job.id,
            )
        else:
            self._record_activation("rejected")
        return self._rejected(
            "activate_installation",
            transition,
            installation_id=installation.id,
            job_id=job.id,
        )

    def _record_activation(self, outcome: str) -> None:
        if self.metrics_enabled:
            metrics.record_activation(outcome)

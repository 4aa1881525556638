"""
Job and installation lifecycle engine.

Every transition takes the current entities and returns a ``Transition``.
Inputs are never mutated: an accepted transition carries freshly built
entities, a rejected one carries the reason. Nothing here touches storage.
"""

import re
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar, Union

from fibretrack.application.services.activation_policy import ActivationPolicy
from fibretrack.domain.entities.installation import Device, Installation, InventoryItem
from fibretrack.domain.entities.job import Job, JobComment
from fibretrack.domain.value_objects.failure_kind import FailureKind
from fibretrack.domain.value_objects.job_status import JobStatus

T = TypeVar("T")

# Rejection messages
JOB_NOT_FOUND = "Job not found"
INSTALLATION_NOT_FOUND = "Installation not found"
DEVICE_NOT_FOUND = "Device not found"
ASSIGNMENT_INCOMPLETE = "Installer and supervisor are both required"
SCHEDULE_DATE_REQUIRED = "Scheduled date is required"
NOT_SCHEDULED = "Job must be scheduled before marking enroute"
OTP_REQUIRED = "OTP code is required"
OTP_NOT_SET = "No OTP has been set for this job"
OTP_INVALID = "Invalid OTP. Please try again."
OTP_ALREADY_VERIFIED = "OTP already verified"
NOT_ON_HOLD_OVER = "Job is not in Hold-Over status"
NOT_PENDING_ACTIVATION = "Job must be pending activation before completion"
COMMENT_EMPTY = "Comment cannot be empty"
INVALID_DEVICE_COUNT = "Device count must be at least 1"
INVALID_OTP_FORMAT = "OTP must be a {length}-digit code"
PHOTO_URL_REQUIRED = "Photo URL is required"
PHOTO_LIMIT = "Maximum {limit} photos allowed per device"
INSTALL_PHOTO_REQUIRED = "At least one installation photo is required"
SERIAL_PHOTO_REQUIRED = "At least one serial photo is required"
SERIAL_BEFORE_INSTALL = "Must complete installation before serial"
INVENTORY_BEFORE_INSTALL = "Device installation must be complete before adding inventory"
INVENTORY_FIELDS_REQUIRED = "Serial number and device type are required"
DEVICES_INCOMPLETE = "All devices must be installed and scanned before activation"
ACTIVATION_ON_HOLD = "Job is on Hold-Over; resolve it before activating"
ACTIVATION_FAILED = "Activation failed - job moved to Hold-Over status"
ACTIVATION_HOLD_OVER_NOTES = "Activation queue failure - automatic hold-over"
ALREADY_ACTIVATED = "Installation already activated"


@dataclass(frozen=True)
class Transition(Generic[T]):
    """Outcome of a lifecycle transition.

    ``changed`` is False for idempotent acceptances that hand back the
    existing entity. ``side_effect`` holds entities that must be stored even
    though the transition itself was rejected.
    """

    ok: bool
    value: Optional[T] = None
    message: Optional[str] = None
    failure: Optional[FailureKind] = None
    changed: bool = True
    side_effect: Optional[Any] = None

    @classmethod
    def accept(
        cls, value: T, message: Optional[str] = None, changed: bool = True
    ) -> "Transition[T]":
        return cls(ok=True, value=value, message=message, changed=changed)

    @classmethod
    def reject(
        cls,
        message: str,
        failure: FailureKind = FailureKind.PRECONDITION_FAILED,
        side_effect: Optional[Any] = None,
    ) -> "Transition[T]":
        return cls(
            ok=False,
            message=message,
            failure=failure,
            changed=False,
            side_effect=side_effect,
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LifecycleEngine:
    """Guards and applies every job, installation and device transition."""

    def __init__(
        self,
        activation_policy: ActivationPolicy,
        max_photos: int = 10,
        otp_length: int = 4,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.activation_policy = activation_policy
        self.max_photos = max_photos
        self.otp_length = otp_length
        self._clock = clock or _utcnow
        self._otp_pattern = re.compile(rf"[0-9]{{{otp_length}}}")

    def now(self) -> datetime:
        return self._clock()

    # Job transitions

    def check_new_job(
        self, device_count: Any, customer_otp: Optional[str] = None
    ) -> Optional[Transition[Job]]:
        """Return the rejection for invalid new-job input, or None."""
        if (
            not isinstance(device_count, int)
            or isinstance(device_count, bool)
            or device_count < 1
        ):
            return Transition.reject(INVALID_DEVICE_COUNT, FailureKind.INVALID_INPUT)
        if customer_otp is not None and not (
            isinstance(customer_otp, str) and self._otp_pattern.fullmatch(customer_otp)
        ):
            return Transition.reject(
                INVALID_OTP_FORMAT.format(length=self.otp_length),
                FailureKind.INVALID_INPUT,
            )
        return None

    def create_job(
        self,
        job_id: int,
        company_id: int,
        customer_id: int,
        device_count: int = 1,
        customer_otp: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Transition[Job]:
        rejected = self.check_new_job(device_count, customer_otp)
        if rejected is not None:
            return rejected

        job = Job(
            id=job_id,
            company_id=company_id,
            customer_id=customer_id,
            status=JobStatus.NEW,
            device_count=device_count,
            customer_otp=customer_otp,
            notes=notes,
            created_at=self.now(),
        )
        return Transition.accept(job)

    def assign(
        self, job: Job, installer_id: Optional[int], supervisor_id: Optional[int]
    ) -> Transition[Job]:
        # Both ids travel together so the pairing can never be half set.
        if installer_id is None or supervisor_id is None:
            return Transition.reject(ASSIGNMENT_INCOMPLETE, FailureKind.INVALID_INPUT)

        return Transition.accept(
            replace(
                job,
                assigned_installer_id=installer_id,
                supervisor_id=supervisor_id,
                status=JobStatus.ASSIGNED,
            )
        )

    def schedule(
        self, job: Job, scheduled_date: Optional[Union[date, datetime]]
    ) -> Transition[Job]:
        if scheduled_date is None:
            return Transition.reject(SCHEDULE_DATE_REQUIRED, FailureKind.INVALID_INPUT)

        return Transition.accept(
            replace(job, scheduled_date=scheduled_date, status=JobStatus.SCHEDULED)
        )

    def mark_enroute(self, job: Job) -> Transition[Job]:
        if job.status != JobStatus.SCHEDULED:
            return Transition.reject(NOT_SCHEDULED)

        return Transition.accept(replace(job, enroute_at=self.now()))

    def verify_otp(self, job: Job, code: Optional[str]) -> Transition[Job]:
        """Latch OTP verification.

        Once verified, any further call succeeds and leaves the job untouched.
        """
        if job.otp_verified:
            return Transition.accept(job, message=OTP_ALREADY_VERIFIED, changed=False)
        if not job.customer_otp:
            return Transition.reject(OTP_NOT_SET)
        if code is None or not code.strip():
            return Transition.reject(OTP_REQUIRED, FailureKind.INVALID_INPUT)
        if code.strip() != job.customer_otp:
            return Transition.reject(OTP_INVALID)

        return Transition.accept(
            replace(job, otp_verified=True, otp_verified_at=self.now())
        )

    def set_hold_over(self, job: Job, notes: Optional[str]) -> Transition[Job]:
        return Transition.accept(replace(job, status=JobStatus.HOLD_OVER, notes=notes))

    def resolve_hold_over(self, job: Job) -> Transition[Job]:
        if job.status != JobStatus.HOLD_OVER:
            return Transition.reject(NOT_ON_HOLD_OVER)

        # Installer and supervisor stay as they were before the hold-over.
        return Transition.accept(replace(job, status=JobStatus.ASSIGNED))

    def complete_job(self, job: Job) -> Transition[Job]:
        if job.status != JobStatus.PENDING_ACTIVATION:
            return Transition.reject(NOT_PENDING_ACTIVATION)

        return Transition.accept(
            replace(job, status=JobStatus.COMPLETED, completed_date=self.now())
        )

    def add_comment(
        self, job: Job, user_id: int, user_name: str, text: Optional[str]
    ) -> Transition[Job]:
        if text is None or not text.strip():
            return Transition.reject(COMMENT_EMPTY, FailureKind.INVALID_INPUT)

        comment = JobComment(
            id=job.next_comment_id(),
            user_id=user_id,
            user_name=user_name,
            text=text.strip(),
            created_at=self.now(),
        )
        return Transition.accept(replace(job, comments=[*job.comments, comment]))

    # Installation transitions

    def start_installation(
        self,
        job: Job,
        existing: Optional[Installation],
        installation_id: int,
        installer_id: Optional[int] = None,
    ) -> Transition[Tuple[Job, Installation]]:
        """Create the installation for a job, or hand back the one it has."""
        if existing is not None:
            return Transition.accept((job, existing), changed=False)

        started_at = self.now()
        installation = Installation(
            id=installation_id,
            job_id=job.id,
            installer_id=(
                installer_id if installer_id is not None else job.assigned_installer_id
            ),
            started_at=started_at,
            devices=[Device(device_number=n) for n in range(1, job.device_count + 1)],
        )
        updated_job = replace(job, status=JobStatus.INSTALLATION_IN_PROGRESS)
        return Transition.accept((updated_job, installation))

    def activate_installation(
        self, installation: Installation, job: Job
    ) -> Transition[Tuple[Installation, Job]]:
        """Activate once every device is done.

        The activation policy can fail an otherwise valid attempt. That
        rejection carries the job moved to Hold-Over as its side effect.
        """
        if installation.activation_complete:
            return Transition.accept(
                (installation, job), message=ALREADY_ACTIVATED, changed=False
            )
        if not installation.all_devices_complete():
            return Transition.reject(DEVICES_INCOMPLETE)
        if job.status == JobStatus.HOLD_OVER:
            return Transition.reject(ACTIVATION_ON_HOLD)

        if self.activation_policy.should_fail():
            held_job = replace(
                job, status=JobStatus.HOLD_OVER, notes=ACTIVATION_HOLD_OVER_NOTES
            )
            return Transition.reject(
                ACTIVATION_FAILED,
                FailureKind.STOCHASTIC_FAILURE,
                side_effect=held_job,
            )

        activated_at = self.now()
        activated = replace(
            installation,
            activation_complete=True,
            activation_completed_at=activated_at,
            completed_at=activated_at,
        )
        return Transition.accept(
            (activated, replace(job, status=JobStatus.PENDING_ACTIVATION))
        )

    # Device transitions

    def add_installation_photo(
        self, installation: Installation, device_number: int, photo_url: Optional[str]
    ) -> Transition[Installation]:
        return self._add_photo(
            installation, device_number, photo_url, "installation_photos"
        )

    def add_serial_photo(
        self, installation: Installation, device_number: int, photo_url: Optional[str]
    ) -> Transition[Installation]:
        return self._add_photo(installation, device_number, photo_url, "serial_photos")

    def complete_device_installation(
        self, installation: Installation, device_number: int
    ) -> Transition[Installation]:
        device = installation.get_device(device_number)
        if device is None:
            return Transition.reject(DEVICE_NOT_FOUND, FailureKind.NOT_FOUND)
        if device.installation_complete:
            return Transition.accept(installation, changed=False)
        if not device.installation_photos:
            return Transition.reject(INSTALL_PHOTO_REQUIRED)

        updated = replace(
            device, installation_complete=True, installation_completed_at=self.now()
        )
        return Transition.accept(self._with_device(installation, updated))

    def complete_device_serial(
        self, installation: Installation, device_number: int
    ) -> Transition[Installation]:
        device = installation.get_device(device_number)
        if device is None:
            return Transition.reject(DEVICE_NOT_FOUND, FailureKind.NOT_FOUND)
        if device.serial_complete:
            return Transition.accept(installation, changed=False)
        if not device.installation_complete:
            return Transition.reject(SERIAL_BEFORE_INSTALL)
        if not device.serial_photos:
            return Transition.reject(SERIAL_PHOTO_REQUIRED)

        updated = replace(device, serial_complete=True, serial_completed_at=self.now())
        return Transition.accept(self._with_device(installation, updated))

    def add_inventory_item(
        self,
        installation: Installation,
        device_number: int,
        serial_number: Optional[str],
        device_type: Optional[str],
        installer_id: int,
        job_id: int,
        model: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Transition[Installation]:
        device = installation.get_device(device_number)
        if device is None:
            return Transition.reject(DEVICE_NOT_FOUND, FailureKind.NOT_FOUND)
        if not device.installation_complete:
            return Transition.reject(INVENTORY_BEFORE_INSTALL)
        if not (serial_number and serial_number.strip()) or not (
            device_type and device_type.strip()
        ):
            return Transition.reject(INVENTORY_FIELDS_REQUIRED, FailureKind.INVALID_INPUT)

        item = InventoryItem(
            id=installation.next_inventory_item_id(),
            device_number=device_number,
            serial_number=serial_number.strip(),
            device_type=device_type.strip(),
            installer_id=installer_id,
            job_id=job_id,
            model=model,
            notes=notes,
            created_at=self.now(),
        )
        updated = replace(device, inventory_items=[*device.inventory_items, item])
        return Transition.accept(self._with_device(installation, updated))

    def _add_photo(
        self,
        installation: Installation,
        device_number: int,
        photo_url: Optional[str],
        attribute: str,
    ) -> Transition[Installation]:
        device = installation.get_device(device_number)
        if device is None:
            return Transition.reject(DEVICE_NOT_FOUND, FailureKind.NOT_FOUND)
        if not photo_url or not photo_url.strip():
            return Transition.reject(PHOTO_URL_REQUIRED, FailureKind.INVALID_INPUT)

        photos = getattr(device, attribute)
        if len(photos) >= self.max_photos:
            return Transition.reject(PHOTO_LIMIT.format(limit=self.max_photos))

        updated = replace(device, **{attribute: [*photos, photo_url]})
        return Transition.accept(self._with_device(installation, updated))

    @staticmethod
    def _with_device(installation: Installation, device: Device) -> Installation:
        devices = [
            device if existing.device_number == device.device_number else existing
            for existing in installation.devices
        ]
        return replace(installation, devices=devices)

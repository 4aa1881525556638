"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, Union

from fibretrack.domain.value_objects.job_status import JobStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class JobComment:
    """A single note left on a job by a user."""

    id: int
    user_id: int
    user_name: str
    text: str
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class Job:
    """Job domain entity.

    Field combinations such as the installer/supervisor pairing are guarded
    by the lifecycle engine; the entity only normalises its status.
    """

    id: int
    company_id: int
    customer_id: int
    status: JobStatus = JobStatus.NEW
    device_count: int = 1
    assigned_installer_id: Optional[int] = None
    supervisor_id: Optional[int] = None
    scheduled_date: Optional[Union[date, datetime]] = None
    customer_otp: Optional[str] = None
    otp_verified: bool = False
    otp_verified_at: Optional[datetime] = None
    enroute_at: Optional[datetime] = None
    notes: Optional[str] = None
    comments: list[JobComment] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    completed_date: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.status, JobStatus):
            self.status = JobStatus(self.status)

    @property
    def is_assigned(self) -> bool:
        """Check if an installer and supervisor are attached."""
        return (
            self.assigned_installer_id is not None and self.supervisor_id is not None
        )

    @property
    def is_enroute(self) -> bool:
        return self.enroute_at is not None

    @property
    def requires_otp(self) -> bool:
        """Check if the customer still has to confirm with their OTP."""
        return bool(self.customer_otp) and not self.otp_verified

    def next_comment_id(self) -> int:
        return max((comment.id for comment in self.comments), default=0) + 1

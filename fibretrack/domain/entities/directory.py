"""Directory entities owned by external collaborators."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class User:
    """A person who can be referenced as installer or supervisor."""

    id: int
    username: str
    name: str
    role: str
    email: Optional[str] = None
    supervisor_id: Optional[int] = None
    company_id: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_installer(self) -> bool:
        return self.role == "Installer"

    @property
    def is_supervisor(self) -> bool:
        return self.role == "Supervisor"


@dataclass(frozen=True)
class Company:
    """Company the job is carried out for."""

    id: int
    name: str
    address: Optional[str] = None
    contact_person: Optional[str] = None
    contact_phone: Optional[str] = None


@dataclass(frozen=True)
class Customer:
    """Customer receiving the fibre service."""

    id: int
    name: str
    address: str
    phone: str
    email: Optional[str] = None

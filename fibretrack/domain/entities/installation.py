"""Installation domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class InventoryItem:
    """Equipment captured against a device during installation."""

    id: int
    device_number: int
    serial_number: str
    device_type: str
    installer_id: int
    job_id: int
    model: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Device:
    """One physical unit installed and serial-captured within an installation."""

    device_number: int
    installation_complete: bool = False
    installation_photos: list[str] = field(default_factory=list)
    installation_completed_at: Optional[datetime] = None
    serial_complete: bool = False
    serial_photos: list[str] = field(default_factory=list)
    serial_completed_at: Optional[datetime] = None
    inventory_items: list[InventoryItem] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """Check if both device steps are done."""
        return self.installation_complete and self.serial_complete


@dataclass
class Installation:
    """Installation domain entity.

    Tracks on-site work for exactly one job. The device list is sized from the
    job's device count when the installation is created and never resized.
    """

    id: int
    job_id: int
    installer_id: Optional[int]
    started_at: datetime
    devices: list[Device] = field(default_factory=list)
    completed_at: Optional[datetime] = None
    activation_complete: bool = False
    activation_completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    def get_device(self, device_number: int) -> Optional[Device]:
        """Find a device by its 1-based number."""
        for device in self.devices:
            if device.device_number == device_number:
                return device
        return None

    def all_devices_complete(self) -> bool:
        """Check if every device has finished installation and serial capture."""
        return bool(self.devices) and all(device.is_complete for device in self.devices)

    @property
    def progress(self) -> tuple[int, int]:
        """Return (completed devices, total devices)."""
        done = sum(1 for device in self.devices if device.is_complete)
        return done, len(self.devices)

    def next_inventory_item_id(self) -> int:
        return (
            max(
                (item.id for device in self.devices for item in device.inventory_items),
                default=0,
            )
            + 1
        )

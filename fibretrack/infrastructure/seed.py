"""
Sample directory records and jobs for development and demos.
"""

from datetime import datetime, timezone
from typing import List

from fibretrack.domain.entities.directory import Company, Customer, User
from fibretrack.domain.entities.installation import Device, Installation
from fibretrack.domain.entities.job import Job
from fibretrack.domain.value_objects.job_status import JobStatus


def _at(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def seed_users() -> List[User]:
    return [
        User(1, "admin", "Faizal", "Admin", "admin@fibreinstall.com", created_at=_at(2024, 1, 1)),
        User(2, "super1", "Stan Wesson", "Supervisor", "stanley@company.com", company_id=1, created_at=_at(2024, 1, 15)),
        User(3, "super2", "Priska Coetzee", "Supervisor", "priska@company.com", company_id=2, created_at=_at(2024, 1, 20)),
        User(4, "install1", "Ben", "Installer", "ben@installer.com", supervisor_id=2, created_at=_at(2024, 2, 1)),
        User(5, "install2", "Bert", "Installer", "bert@installer.com", supervisor_id=2, created_at=_at(2024, 2, 5)),
        User(6, "install3", "Ken", "Installer", "ken@installer.com", supervisor_id=3, created_at=_at(2024, 2, 10)),
        User(7, "install4", "Fred", "Installer", "fred@installer.com", supervisor_id=3, created_at=_at(2024, 2, 15)),
    ]


def seed_companies() -> List[Company]:
    return [
        Company(1, "Metrofibre", "123 Main St, Tech City, TC 12345", "Jan Jan", "555-0101"),
        Company(2, "Senwes", "456 Network Ave, Digital Town, DT 67890", "Alf", "555-0202"),
        Company(3, "Vodacom", "789 Internet Blvd, Web City, WC 11111", "Deon", "555-0303"),
    ]


def seed_customers() -> List[Customer]:
    return [
        Customer(1, "Alice Cooper", "10 Oak Street, Residential Area", "555-1001", "alice.cooper@email.com"),
        Customer(2, "Bob Martinez", "25 Pine Avenue, Suburb Heights", "555-1002", "bob.martinez@email.com"),
        Customer(3, "Carol Lee", "42 Maple Drive, Downtown District", "555-1003", "carol.lee@email.com"),
        Customer(4, "David Kim", "88 Elm Street, Business Park", "555-1004", "david.kim@email.com"),
        Customer(5, "Eva Rodriguez", "15 Birch Lane, Garden District", "555-1005", "eva.rodriguez@email.com"),
        Customer(6, "Frank Wilson", "77 Cedar Court, Hillside", "555-1006", "frank.wilson@email.com"),
        Customer(7, "Grace Chen", "33 Willow Way, Lakeside", "555-1007", "grace.chen@email.com"),
    ]


def seed_jobs() -> List[Job]:
    return [
        Job(1, company_id=1, customer_id=1, status=JobStatus.NEW, device_count=2,
            customer_otp="1234", created_at=_at(2025, 1, 5)),
        Job(2, company_id=1, customer_id=2, status=JobStatus.ASSIGNED,
            assigned_installer_id=4, supervisor_id=2, created_at=_at(2025, 1, 8)),
        Job(3, company_id=1, customer_id=3, status=JobStatus.SCHEDULED,
            assigned_installer_id=4, supervisor_id=2, scheduled_date=_at(2025, 1, 20),
            customer_otp="4821", created_at=_at(2025, 1, 10)),
        Job(4, company_id=1, customer_id=4, status=JobStatus.INSTALLATION_IN_PROGRESS,
            assigned_installer_id=5, supervisor_id=2, scheduled_date=_at(2025, 1, 15),
            device_count=2, created_at=_at(2025, 1, 12)),
        Job(5, company_id=2, customer_id=5, status=JobStatus.PENDING_ACTIVATION,
            assigned_installer_id=6, supervisor_id=3, scheduled_date=_at(2025, 1, 14),
            created_at=_at(2025, 1, 8)),
        Job(6, company_id=2, customer_id=6, status=JobStatus.COMPLETED,
            assigned_installer_id=6, supervisor_id=3, scheduled_date=_at(2024, 12, 20),
            completed_date=_at(2024, 12, 21), created_at=_at(2024, 12, 15)),
        Job(7, company_id=2, customer_id=7, status=JobStatus.HOLD_OVER,
            assigned_installer_id=7, supervisor_id=3, scheduled_date=_at(2025, 1, 16),
            notes="Customer unavailable at scheduled time", created_at=_at(2025, 1, 10)),
    ]


def seed_installations() -> List[Installation]:
    return [
        Installation(
            id=1,
            job_id=4,
            installer_id=5,
            started_at=_at(2025, 1, 15, 9),
            devices=[
                Device(
                    device_number=1,
                    installation_complete=True,
                    installation_photos=["photo_job4_dev1_install_1.jpg"],
                    installation_completed_at=_at(2025, 1, 15, 10, 30),
                ),
                Device(device_number=2),
            ],
        ),
        Installation(
            id=2,
            job_id=5,
            installer_id=6,
            started_at=_at(2025, 1, 14, 8),
            completed_at=_at(2025, 1, 14, 11, 45),
            activation_complete=True,
            activation_completed_at=_at(2025, 1, 14, 11, 45),
            devices=[
                Device(
                    device_number=1,
                    installation_complete=True,
                    installation_photos=["photo_job5_dev1_install_1.jpg"],
                    installation_completed_at=_at(2025, 1, 14, 9, 30),
                    serial_complete=True,
                    serial_photos=["photo_job5_dev1_serial_1.jpg"],
                    serial_completed_at=_at(2025, 1, 14, 11),
                ),
            ],
        ),
    ]

"""
Storage-related domain exceptions.
"""


class RepositoryError(Exception):
    """Base exception for persistence boundary faults."""

    pass


class EntityIdentityError(RepositoryError):
    """Raised when an entity is stored without a usable id."""

    def __init__(self, entity_type: str):
        self.entity_type = entity_type
        super().__init__(f"{entity_type} must have an id before it can be stored")


class DuplicateInstallationError(RepositoryError):
    """Raised when a second installation is stored for the same job."""

    def __init__(self, job_id: int, existing_id: int):
        self.job_id = job_id
        self.existing_id = existing_id
        super().__init__(
            f"Job {job_id} already has installation {existing_id}"
        )

"""
Domain exceptions package.

Only unexpected faults are modelled as exceptions. Expected lifecycle
rejections travel as values, see ``fibretrack.application.services``.
"""

from .repository_error import (
    DuplicateInstallationError,
    EntityIdentityError,
    RepositoryError,
)

__all__ = [
    "DuplicateInstallationError",
    "EntityIdentityError",
    "RepositoryError",
]

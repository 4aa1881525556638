"""
Application interfaces package.
"""

from .providers import (
    CompanyProviderInterface,
    CustomerProviderInterface,
    DirectoryProviderInterface,
    UserProviderInterface,
)
from .repositories import (
    InstallationRepositoryInterface,
    JobRepositoryInterface,
)

__all__ = [
    "CompanyProviderInterface",
    "CustomerProviderInterface",
    "DirectoryProviderInterface",
    "InstallationRepositoryInterface",
    "JobRepositoryInterface",
    "UserProviderInterface",
]

"""
Application layer package.

This package contains the lifecycle engine, the workflow use cases and the
interfaces they depend on.
"""

from .interfaces.providers import (
    CompanyProviderInterface,
    CustomerProviderInterface,
    UserProviderInterface,
)
from .interfaces.repositories import (
    InstallationRepositoryInterface,
    JobRepositoryInterface,
)
from .schemas.common import OperationResult
from .services.activation_policy import (
    ActivationPolicy,
    FixedActivationPolicy,
    RandomActivationPolicy,
)
from .services.lifecycle_engine import LifecycleEngine, Transition
from .use_cases.installation_workflow import InstallationWorkflow
from .use_cases.job_workflow import JobWorkflow

__all__ = [
    # Interfaces
    "CompanyProviderInterface",
    "CustomerProviderInterface",
    "InstallationRepositoryInterface",
    "JobRepositoryInterface",
    "UserProviderInterface",
    # Schemas
    "OperationResult",
    # Services
    "ActivationPolicy",
    "FixedActivationPolicy",
    "LifecycleEngine",
    "RandomActivationPolicy",
    "Transition",
    # Use Cases
    "InstallationWorkflow",
    "JobWorkflow",
]

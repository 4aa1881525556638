"""
Workflow use cases package.
"""

from .installation_workflow import InstallationWorkflow
from .job_workflow import JobWorkflow

__all__ = [
    "InstallationWorkflow",
    "JobWorkflow",
]

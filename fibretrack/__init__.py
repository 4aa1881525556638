"""
FibreTrack Workflow Core.

Lifecycle engine and workflow operations for fibre-installation jobs.
"""

__version__ = "0.1.0"
__description__ = "FibreTrack Workflow Core"

from .config import settings
from .container import WorkflowContainer, build_container

__all__ = [
    "WorkflowContainer",
    "build_container",
    "settings",
]

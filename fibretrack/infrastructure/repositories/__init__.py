"""
Repository implementations package.
"""

from .in_memory import (
    IdAllocator,
    InMemoryInstallationRepository,
    InMemoryJobRepository,
    InMemoryStore,
)

__all__ = [
    "IdAllocator",
    "InMemoryInstallationRepository",
    "InMemoryJobRepository",
    "InMemoryStore",
]

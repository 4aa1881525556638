"""
Directory providers package.
"""

from .in_memory import (
    InMemoryCompanyProvider,
    InMemoryCustomerProvider,
    InMemoryUserProvider,
)

__all__ = [
    "InMemoryCompanyProvider",
    "InMemoryCustomerProvider",
    "InMemoryUserProvider",
]

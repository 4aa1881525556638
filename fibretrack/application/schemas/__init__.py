"""
Result schemas package.
"""

from .common import GENERIC_ERROR_MESSAGE, OperationResult

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "OperationResult",
]

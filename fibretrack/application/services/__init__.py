"""
Application services package.
"""

from .activation_policy import (
    ActivationPolicy,
    FixedActivationPolicy,
    RandomActivationPolicy,
    ScriptedActivationPolicy,
)
from .entity_locks import EntityLockRegistry
from .lifecycle_engine import LifecycleEngine, Transition

__all__ = [
    "ActivationPolicy",
    "EntityLockRegistry",
    "FixedActivationPolicy",
    "LifecycleEngine",
    "RandomActivationPolicy",
    "ScriptedActivationPolicy",
    "Transition",
]

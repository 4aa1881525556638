"""
Activation outcome policies.

Activation goes through an external provisioning queue that occasionally
rejects work. The decision is made by an injected policy so the lifecycle
engine stays deterministic under test.
"""

import random
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from fibretrack.config.logging import get_logger

logger = get_logger(__name__)


class ActivationPolicy(ABC):
    """Decides whether an activation attempt fails in the queue."""

    @abstractmethod
    def should_fail(self) -> bool:
        """Return True when this attempt must fail."""
        pass


class RandomActivationPolicy(ActivationPolicy):
    """Fails a fixed share of attempts using a private random source."""

    def __init__(self, failure_rate: float = 0.1, seed: Optional[int] = None):
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("Failure rate must be between 0 and 1")
        self.failure_rate = failure_rate
        self._random = random.Random(seed)

    def should_fail(self) -> bool:
        roll = self._random.random()
        failed = roll < self.failure_rate
        logger.debug(
            "Activation outcome rolled",
            roll=round(roll, 4),
            failure_rate=self.failure_rate,
            failed=failed,
        )
        return failed


class FixedActivationPolicy(ActivationPolicy):
    """Always returns the same outcome."""

    def __init__(self, fail: bool = False):
        self.fail = fail

    def should_fail(self) -> bool:
        return self.fail


class ScriptedActivationPolicy(ActivationPolicy):
    """Replays a sequence of outcomes, then keeps succeeding."""

    def __init__(self, outcomes: Iterable[bool]):
        self._outcomes = list(outcomes)

    def should_fail(self) -> bool:
        if self._outcomes:
            return self._outcomes.pop(0)
        return False

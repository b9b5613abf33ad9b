"""
Retry policies for rate limiting and transient transport failures.

Provides bounded backoff strategies with optional jitter. The request engine
asks a policy whether another attempt is allowed and how long to wait before
it; a server-suggested delay (``Retry-After``) takes precedence over the
computed backoff.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional


class RetryPolicy(ABC):
    """
    Abstract base class for retry policies.

    Defines the interface for retry strategies with configurable
    backoff algorithms.
    """

    def __init__(
        self,
        max_attempts: int = 4,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        jitter: bool = False,
        jitter_factor: float = 0.1,
    ):
        """
        Initialize retry policy.

        Args:
            max_attempts: Maximum number of attempts, the first one included
            base_delay: Base delay between retries in seconds
            max_delay: Maximum delay between retries in seconds
            jitter: Whether to add jitter to delays
            jitter_factor: Jitter factor (0.0 to 1.0)
        """
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter = jitter
        self.jitter_factor = jitter_factor

    @abstractmethod
    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for given attempt number.

        Args:
            attempt: Number of the attempt that just failed (1-based)

        Returns:
            Delay in seconds
        """

    def can_retry(self, attempt: int) -> bool:
        """True while another attempt fits in the budget."""
        return attempt < self.max_attempts

    def add_jitter(self, delay: float) -> float:
        """
        Add jitter to delay if enabled.

        Args:
            delay: Base delay

        Returns:
            Delay with jitter applied
        """
        if not self.jitter:
            return delay

        jitter_amount = delay * self.jitter_factor * (random.random() - 0.5)
        return max(0, delay + jitter_amount)

    def delay_for(self, attempt: int, retry_after: Optional[float] = None) -> float:
        """
        Delay before the next attempt.

        Args:
            attempt: Number of the attempt that just failed (1-based)
            retry_after: Server-suggested delay in seconds, if any

        Returns:
            Delay in seconds, never above ``max_delay``
        """
        if retry_after is not None and retry_after >= 0:
            return min(retry_after, self.max_delay)
        delay = min(self.calculate_delay(attempt), self.max_delay)
        return self.add_jitter(delay)


class ExponentialBackoff(RetryPolicy):
    """
    Exponential backoff retry policy.

    Delay increases exponentially with each attempt: base_delay * (factor ^ (attempt - 1))
    """

    def __init__(
        self,
        max_attempts: int = 4,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        factor: float = 2.0,
        jitter: bool = False,
        jitter_factor: float = 0.1,
    ):
        super().__init__(max_attempts, base_delay, max_delay, jitter, jitter_factor)
        self.factor = factor

    def calculate_delay(self, attempt: int) -> float:
        """Calculate exponential backoff delay."""
        delay = self.base_delay * (self.factor ** (attempt - 1))
        return min(delay, self.max_delay)


class FixedBackoff(RetryPolicy):
    """
    Fixed delay retry policy.

    Uses constant delay between all retry attempts.
    """

    def __init__(
        self,
        max_attempts: int = 4,
        delay: float = 1.0,
        jitter: bool = False,
        jitter_factor: float = 0.1
    ):
        super().__init__(max_attempts, delay, delay, jitter, jitter_factor)

    def calculate_delay(self, attempt: int) -> float:
        """Calculate fixed delay."""
        return self.base_delay


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """
    Parse a ``Retry-After`` header given in seconds (``"2.0"``).

    HTTP-date values are not used by the Admin API and yield None.
    """
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None

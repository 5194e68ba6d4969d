"""Failed-login lockout, keyed by username."""
import logging
import math
import time
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class LoginThrottle:
    """Locks a username out after repeated failed logins."""

    def __init__(
        self,
        lockout_after: int = 5,
        lockout_seconds: int = 300,
        failure_window: int = 300,
        clock: Callable[[], float] = time.time,
    ):
        self.lockout_after = lockout_after
        self.lockout_seconds = lockout_seconds
        self.failure_window = failure_window
        self._clock = clock
        self._failures: Dict[str, List[float]] = defaultdict(list)
        self._lockouts: Dict[str, float] = {}  # username -> locked until

    @classmethod
    def from_settings(cls, settings, clock: Callable[[], float] = time.time) -> "LoginThrottle":
        return cls(
            lockout_after=settings.lockout_after,
            lockout_seconds=settings.lockout_seconds,
            failure_window=settings.failure_window,
            clock=clock,
        )

    def check(self, username: str) -> Tuple[bool, Optional[str]]:
        """
        Check whether a login attempt for `username` may proceed.

        Returns:
            (allowed, error_message)
        """
        now = self._clock()
        self._prune(now)

        if username in self._lockouts:
            remaining = math.ceil(self._lockouts[username] - now)
            return False, f"Too many failed attempts. Try again in {remaining} seconds."

        return True, None

    def record(self, username: str, success: bool) -> None:
        """Record the outcome of a login attempt."""
        now = self._clock()

        if success:
            self._failures.pop(username, None)
            self._lockouts.pop(username, None)
            return

        self._prune(now)
        failures = self._failures[username]
        failures.append(now)

        if len(failures) >= self.lockout_after:
            self._lockouts[username] = now + self.lockout_seconds
            logger.warning("Locked out '%s' for %d seconds after %d failed logins",
                           username, self.lockout_seconds, len(failures))

    def _prune(self, now: float) -> None:
        """Forget expired lockouts and failures older than the window, for every username."""
        for username in [u for u, until in self._lockouts.items() if now >= until]:
            del self._lockouts[username]
            self._failures.pop(username, None)

        for username in list(self._failures):
            recent = [t for t in self._failures[username] if now - t < self.failure_window]
            if recent:
                self._failures[username] = recent
            else:
                del self._failures[username]

    def is_locked(self, username: str) -> bool:
        allowed, _ = self.check(username)
        return not allowed

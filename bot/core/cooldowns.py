"""Per-user, per-command cooldown tracking."""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

CooldownKey = tuple[int, str]


class CooldownGate:
    """Rate limiter shared by every command dispatch path.

    Each ``(user_id, command_name)`` pair stores the time of its last permitted
    invocation. A call is allowed once ``window`` seconds have elapsed since
    then; denied calls leave the stored time untouched, so retrying does not
    extend the cooldown.

    The check and the record happen without yielding to the event loop, which
    makes :meth:`check_and_record` atomic for concurrent handler tasks.
    """

    def __init__(
        self,
        window: float = 3.0,
        max_entries: int | None = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if window < 0:
            raise ValueError("Cooldown window cannot be negative")
        self.window = window
        self.max_entries = max_entries
        self._clock = clock
        self._last_invoked: dict[CooldownKey, float] = {}

    def __len__(self) -> int:
        return len(self._last_invoked)

    def check_and_record(self, user_id: int, command_name: str, now: float | None = None) -> bool:
        """Return ``True`` and record ``now`` if the user may run the command."""
        now = self._clock() if now is None else now
        key = (user_id, command_name.lower())

        last = self._last_invoked.get(key)
        if last is not None and now - last < self.window:
            logger.debug(f"Cooldown active for {command_name} (user {user_id})")
            return False

        self._last_invoked[key] = now
        if self.max_entries is not None and len(self._last_invoked) > self.max_entries:
            self.prune(now)
        return True

    def remaining(self, user_id: int, command_name: str, now: float | None = None) -> float:
        """Seconds until the command becomes available again, ``0.0`` if it already is."""
        now = self._clock() if now is None else now
        last = self._last_invoked.get((user_id, command_name.lower()))
        if last is None:
            return 0.0
        return max(0.0, self.window - (now - last))

    def prune(self, now: float | None = None) -> int:
        """Drop entries whose window has elapsed. Returns the number removed."""
        now = self._clock() if now is None else now
        expired = [key for key, last in self._last_invoked.items() if now - last >= self.window]
        for key in expired:
            del self._last_invoked[key]

        if expired:
            logger.debug(f"Pruned {len(expired)} expired cooldown entries")
        return len(expired)

    def reset(self, user_id: int | None = None, command_name: str | None = None) -> None:
        """Clear cooldowns, optionally only for one user and/or command."""
        if user_id is None and command_name is None:
            self._last_invoked.clear()
            return

        name = command_name.lower() if command_name else None
        for key in list(self._last_invoked):
            if user_id is not None and key[0] != user_id:
                continue
            if name is not None and key[1] != name:
                continue
            del self._last_invoked[key]

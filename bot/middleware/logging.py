import logging
import time
from typing import Any

logger = logging.getLogger(__name__)


class LoggingMiddleware:
    def __init__(self, clock=time.perf_counter) -> None:
        self._clock = clock
        self.start_times: dict[int, float] = {}

    async def __call__(self, event_context: dict[str, Any], phase: str) -> None:
        event_name = event_context.get("event_name")
        # Keyed by context so overlapping emits of one event don't clash
        key = id(event_context)

        if phase == "pre":
            self.start_times[key] = self._clock()
            logger.debug(f"Event started: {event_name}")
        elif phase == "post":
            start_time = self.start_times.pop(key, None)
            if start_time is None:
                logger.debug(f"Event completed: {event_name}")
            else:
                logger.debug(f"Event completed: {event_name} (took {self._clock() - start_time:.3f}s)")


# Global instance
logging_middleware = LoggingMiddleware()

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Reports listener failures recorded by the event system."""

    def __init__(self) -> None:
        self.error_counts: dict[str, int] = {}

    async def __call__(self, event_context: dict[str, Any], phase: str) -> None:
        if phase != "post":
            return

        error = event_context.get("error")
        if not error:
            return

        event_name = event_context.get("event_name", "unknown")
        self.error_counts[event_name] = self.error_counts.get(event_name, 0) + 1
        logger.error(f"Error in event {event_name}: {error}", exc_info=error)


# Global instance
error_handler_middleware = ErrorHandlerMiddleware()

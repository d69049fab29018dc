import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


def _callable_name(func: Any) -> str:
    # Middleware may be callable instances rather than functions
    return getattr(func, "__name__", type(func).__name__)


class EventSystem:
    """In-process pub/sub for bot events such as ``member_join`` or ``bot_ready``.

    Middleware are called as ``middleware(event_context, phase)`` before
    (``"pre"``) and after (``"post"``) the listeners run. Returning ``False``
    or setting ``event_context["stopped"]`` in the pre phase cancels the
    event. Listener failures never propagate; the first one is stored in
    ``event_context["error"]`` for the post phase.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable]] = {}
        self._middleware: list[Callable] = []

    def add_middleware(self, middleware: Callable) -> None:
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {_callable_name(middleware)}")

    def remove_middleware(self, middleware: Callable) -> None:
        if middleware in self._middleware:
            self._middleware.remove(middleware)
            logger.debug(f"Removed middleware: {_callable_name(middleware)}")

    def listen(self, event_name: str) -> Callable:
        def decorator(func: Callable) -> Callable:
            self.add_listener(event_name, func)
            return func

        return decorator

    def add_listener(self, event_name: str, callback: Callable) -> None:
        self._listeners.setdefault(event_name, []).append(callback)
        logger.debug(f"Added listener for {event_name}: {_callable_name(callback)}")

    def remove_listener(self, event_name: str, callback: Callable) -> None:
        listeners = self._listeners.get(event_name)
        if listeners is None:
            return
        try:
            listeners.remove(callback)
            logger.debug(f"Removed listener for {event_name}: {_callable_name(callback)}")
        except ValueError:
            logger.warning(f"Listener {_callable_name(callback)} not found for {event_name}")

    async def emit(self, event_name: str, *args: Any, **kwargs: Any) -> dict[str, Any] | None:
        """Run the listeners for ``event_name``; returns the event context, or ``None`` if nobody listens."""
        listeners = list(self._listeners.get(event_name, []))
        if not listeners:
            return None

        event_context: dict[str, Any] = {
            "event_name": event_name,
            "args": args,
            "kwargs": kwargs,
            "stopped": False,
            "error": None,
        }

        for middleware in self._middleware:
            try:
                result = await self._call_maybe_async(middleware, event_context, "pre")
            except Exception as e:
                logger.error(f"Error in middleware {_callable_name(middleware)}: {e}")
                continue
            if result is False or event_context.get("stopped"):
                logger.debug(f"Event {event_name} stopped by middleware")
                event_context["stopped"] = True
                return event_context

        results = await asyncio.gather(
            *(self._call_maybe_async(listener, *args, **kwargs) for listener in listeners),
            return_exceptions=True,
        )
        for listener, result in zip(listeners, results):
            if isinstance(result, Exception):
                logger.error(f"Error in listener {_callable_name(listener)} for {event_name}: {result}")
                if event_context["error"] is None:
                    event_context["error"] = result

        for middleware in self._middleware:
            try:
                await self._call_maybe_async(middleware, event_context, "post")
            except Exception as e:
                logger.error(f"Error in middleware {_callable_name(middleware)} (post): {e}")

        return event_context

    async def _call_maybe_async(self, func: Callable, *args: Any, **kwargs: Any) -> Any:
        result = func(*args, **kwargs)
        if asyncio.iscoroutine(result):
            return await result
        return result

    def get_listeners(self, event_name: str) -> list[Callable]:
        return self._listeners.get(event_name, []).copy()

    def get_all_events(self) -> list[str]:
        return list(self._listeners.keys())


def event_listener(event_name: str) -> Callable:
    """Mark a plugin method as a listener; ``BasePlugin.on_load`` subscribes it."""

    def decorator(func: Callable) -> Callable:
        func._event_listener = event_name
        return func

    return decorator


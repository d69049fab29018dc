"""Command results and how they are reported back to users.

Commands may return a :class:`CommandResult` instead of replying themselves.
The dispatch paths hand it to :func:`send_result`, which picks the reply
prefix for the result's kind and logs backend failures for operators.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Something went wrong while running this command."


class ResultKind(str, Enum):
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    PERMISSION = "permission"
    RATE_LIMIT = "rate_limit"
    USER_INPUT = "user_input"
    API_ERROR = "api_error"
    DATABASE_ERROR = "database_error"
    WARNING = "warning"
    DEFAULT = "default"


BACKEND_ERRORS = frozenset({ResultKind.API_ERROR, ResultKind.DATABASE_ERROR})

_PREFIXES: dict[ResultKind, str] = {
    ResultKind.SUCCESS: "✅",
    ResultKind.PARTIAL_SUCCESS: "⚠️",
    ResultKind.WARNING: "⚠️",
    ResultKind.PERMISSION: "⛔",
    ResultKind.RATE_LIMIT: "⏰",
    ResultKind.USER_INPUT: "❌",
    ResultKind.API_ERROR: "🔧",
    ResultKind.DATABASE_ERROR: "🔧",
}


def _freeze(details: Mapping[str, Any] | None) -> Mapping[str, str]:
    return MappingProxyType({str(key): str(value) for key, value in (details or {}).items()})


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a command invocation."""

    kind: ResultKind
    reason: str = ""
    details: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    is_success: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.details, MappingProxyType):
            object.__setattr__(self, "details", _freeze(self.details))

    @property
    def is_partial_success(self) -> bool:
        return self.kind is ResultKind.PARTIAL_SUCCESS

    @classmethod
    def success(cls, reason: str = "") -> CommandResult:
        return cls(ResultKind.SUCCESS, reason, is_success=True)

    @classmethod
    def success_with_details(cls, reason: str, details: Mapping[str, Any]) -> CommandResult:
        return cls(ResultKind.SUCCESS, reason, _freeze(details), is_success=True)

    @classmethod
    def partial_success(cls, reason: str, details: Mapping[str, Any] | None = None) -> CommandResult:
        """Command worked, with caveats (e.g. only some messages could be deleted)."""
        return cls(ResultKind.PARTIAL_SUCCESS, reason, _freeze(details), is_success=True)

    @classmethod
    def warning(cls, reason: str, details: Mapping[str, Any] | None = None) -> CommandResult:
        return cls(ResultKind.WARNING, reason, _freeze(details), is_success=True)

    @classmethod
    def permission_error(cls, reason: str, details: Mapping[str, Any] | None = None) -> CommandResult:
        return cls(ResultKind.PERMISSION, reason, _freeze(details))

    @classmethod
    def rate_limit(cls, reason: str, details: Mapping[str, Any] | None = None) -> CommandResult:
        return cls(ResultKind.RATE_LIMIT, reason, _freeze(details))

    @classmethod
    def user_error(cls, reason: str, details: Mapping[str, Any] | None = None) -> CommandResult:
        return cls(ResultKind.USER_INPUT, reason, _freeze(details))

    @classmethod
    def api_error(cls, reason: str, details: Mapping[str, Any] | None = None) -> CommandResult:
        return cls(ResultKind.API_ERROR, reason, _freeze(details))

    @classmethod
    def database_error(cls, reason: str, details: Mapping[str, Any] | None = None) -> CommandResult:
        return cls(ResultKind.DATABASE_ERROR, reason, _freeze(details))

    @classmethod
    def default(cls, reason: str, success: bool = False) -> CommandResult:
        return cls(ResultKind.DEFAULT, reason, is_success=success)


@dataclass(frozen=True, slots=True)
class ResultResponse:
    message: str
    log: bool = False


def classify(result: CommandResult) -> ResultResponse:
    """Map a result to the reply users see and whether operators need a log line."""
    if result.kind is ResultKind.DEFAULT:
        prefix = "✅" if result.is_success else "❌"
    else:
        prefix = _PREFIXES[result.kind]

    message = f"{prefix} {result.reason}".rstrip()
    return ResultResponse(message=message, log=result.kind in BACKEND_ERRORS)


def render_result(result: CommandResult) -> str:
    """Classify ``result`` and log it if it represents a backend failure."""
    response = classify(result)
    if response.log:
        details = dict(result.details)
        logger.error(
            "Command error: %s Details: %s",
            result.reason,
            details,
            extra={"details": details, "result_kind": result.kind.value},
        )
    return response.message


def failure_result(command_name: str, error: Exception) -> CommandResult:
    """The result both dispatch paths report when a command callback raises."""
    return CommandResult.api_error(
        FAILURE_MESSAGE,
        {"command": command_name, "error": f"{type(error).__name__}: {error}"},
    )


async def send_result(ctx: Any, result: CommandResult) -> None:
    """Reply to the invoking context with the rendered result."""
    await ctx.respond(render_result(result))

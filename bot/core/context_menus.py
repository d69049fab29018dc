"""Right-click (context menu) commands.

Handlers are registered explicitly, usually from a plugin's list of command
classes, and stored in two name-keyed tables. Discord only sends the display
name of the invoked entry, so dispatch is a lookup by that name.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

import hikari
import lightbulb

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "This command isn't set up yet!"
FAILURE_MESSAGE = "Something went wrong while handling that command."


class ContextCommand(ABC):
    """Base for context menu handlers. ``name`` is what users see in the menu."""

    name: str = ""

    @abstractmethod
    async def handle(self, ctx: lightbulb.Context, target: Any) -> None: ...


class UserContextCommand(ContextCommand):
    """Shown when right-clicking a user."""

    @abstractmethod
    async def handle(self, ctx: lightbulb.Context, target: hikari.User) -> None: ...


class MessageContextCommand(ContextCommand):
    """Shown when right-clicking a message."""

    @abstractmethod
    async def handle(self, ctx: lightbulb.Context, target: hikari.Message) -> None: ...


class ContextMenuRegistry:
    def __init__(self) -> None:
        self._user_commands: dict[str, UserContextCommand] = {}
        self._message_commands: dict[str, MessageContextCommand] = {}

    @property
    def user_commands(self) -> dict[str, UserContextCommand]:
        return dict(self._user_commands)

    @property
    def message_commands(self) -> dict[str, MessageContextCommand]:
        return dict(self._message_commands)

    def __contains__(self, name: str) -> bool:
        return name in self._user_commands or name in self._message_commands

    def __len__(self) -> int:
        return len(self._user_commands) + len(self._message_commands)

    def register(self, command_cls: type[ContextCommand]) -> ContextCommand:
        """Instantiate ``command_cls`` and file it under its display name."""
        command = command_cls()
        if not command.name:
            raise ValueError(f"{command_cls.__name__} does not define a name")
        if command.name in self:
            raise ValueError(f"A context menu command named '{command.name}' is already registered")

        if isinstance(command, UserContextCommand):
            self._user_commands[command.name] = command
            logger.info(f"Loaded user context command: {command.name}")
        elif isinstance(command, MessageContextCommand):
            self._message_commands[command.name] = command
            logger.info(f"Loaded message context command: {command.name}")
        else:
            raise TypeError(f"{command_cls.__name__} is neither a user nor a message context command")

        return command

    def register_all(self, command_classes: Iterable[type[ContextCommand]]) -> list[ContextCommand]:
        """Register every class or, if any of them is rejected, none of them."""
        registered: list[ContextCommand] = []
        try:
            for command_cls in command_classes:
                registered.append(self.register(command_cls))
        except (TypeError, ValueError):
            for command in registered:
                self.unregister(command.name)
            raise
        return registered

    def unregister(self, name: str) -> None:
        self._user_commands.pop(name, None)
        self._message_commands.pop(name, None)

    def get_user_command(self, name: str) -> UserContextCommand | None:
        return self._user_commands.get(name)

    def get_message_command(self, name: str) -> MessageContextCommand | None:
        return self._message_commands.get(name)

    async def dispatch_user(self, ctx: lightbulb.Context, target: hikari.User) -> bool:
        name = ctx.interaction.command_name
        return await self._dispatch(ctx, target, self.get_user_command(name), name, "user")

    async def dispatch_message(self, ctx: lightbulb.Context, target: hikari.Message) -> bool:
        name = ctx.interaction.command_name
        return await self._dispatch(ctx, target, self.get_message_command(name), name, "message")

    async def _dispatch(
        self,
        ctx: lightbulb.Context,
        target: Any,
        handler: ContextCommand | None,
        name: str,
        kind: str,
    ) -> bool:
        if handler is None:
            logger.warning(f"Unknown {kind} command: {name}")
            await ctx.respond(NOT_CONFIGURED_MESSAGE, flags=hikari.MessageFlag.EPHEMERAL)
            return False

        try:
            await handler.handle(ctx, target)
            return True
        except Exception as e:
            logger.error(f"Error handling {kind} command {name}: {e}", exc_info=True)
            try:
                await ctx.respond(FAILURE_MESSAGE, flags=hikari.MessageFlag.EPHEMERAL)
            except hikari.HikariError as respond_error:
                logger.debug(f"Could not report failure of {name}: {respond_error}")
            return False

    def build_commands(self) -> list[type[lightbulb.CommandBase]]:
        """Create one lightbulb command class per registered handler."""
        command_classes: list[type[lightbulb.CommandBase]] = []

        for name in self._user_commands:
            command_classes.append(
                type(
                    _class_name(name),
                    (lightbulb.UserCommand,),
                    {"invoke": lightbulb.invoke(_make_invoke(self.dispatch_user))},
                    name=name,
                )
            )

        for name in self._message_commands:
            command_classes.append(
                type(
                    _class_name(name),
                    (lightbulb.MessageCommand,),
                    {"invoke": lightbulb.invoke(_make_invoke(self.dispatch_message))},
                    name=name,
                )
            )

        return command_classes


def _make_invoke(dispatch: Any) -> Any:
    async def invoke_wrapper(cmd_instance: Any, ctx: lightbulb.Context) -> None:
        await dispatch(ctx, cmd_instance.target)

    return invoke_wrapper


def _class_name(display_name: str) -> str:
    cleaned = "".join(ch for ch in display_name.title() if ch.isalnum())
    return f"{cleaned or 'Context'}ContextCommand"

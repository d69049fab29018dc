from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import hikari
import lightbulb

if TYPE_CHECKING:
    from ..core.bot import DiscordBot

SUCCESS_COLOR = hikari.Color(0x57F287)
ERROR_COLOR = hikari.Color(0xED4245)
DEFAULT_COLOR = hikari.Color(0x7289DA)

logger = logging.getLogger(__name__)


class BasePlugin:
    def __init__(self, bot: DiscordBot) -> None:
        self.bot = bot
        self.name = self.__class__.__name__.lower().replace("plugin", "")
        self.logger = logging.getLogger(f"plugin.{self.name}")
        self._event_listeners: list[Any] = []
        # Import CommandRegistry here to avoid circular import
        from .commands import CommandRegistry

        self._command_registry: CommandRegistry = CommandRegistry(self)
        self.events = bot.event_system
        self.command_client = bot.command_client
        self.miru = bot.miru_client
        self.gateway = bot.gateway
        self.rest = bot.rest
        self.cache = bot.cache

    async def on_load(self) -> None:
        await self._command_registry.register_commands()
        await self._register_event_listeners()
        self.logger.info(f"Plugin {self.name} loaded successfully")

    async def on_unload(self) -> None:
        await self._command_registry.unregister_commands()
        await self._unregister_event_listeners()
        self.logger.info(f"Plugin {self.name} unloaded successfully")

    async def _register_event_listeners(self) -> None:
        for attr_name in dir(self):
            attr = getattr(self, attr_name)
            if callable(attr) and isinstance(getattr(attr, "_event_listener", None), str):
                event_name = attr._event_listener
                self.events.add_listener(event_name, attr)
                self._event_listeners.append((event_name, attr))
                self.logger.debug(f"Registered event listener: {attr_name} -> {event_name}")

    async def _unregister_event_listeners(self) -> None:
        for event_name, listener in self._event_listeners:
            self.events.remove_listener(event_name, listener)

        self._event_listeners.clear()

    # Utility methods for plugins
    def create_embed(
        self,
        title: str | None = None,
        description: str | None = None,
        color: hikari.Color = DEFAULT_COLOR,
    ) -> hikari.Embed:
        return hikari.Embed(title=title, description=description, color=color)

    async def smart_respond(
        self,
        ctx: lightbulb.Context,
        content: str | None = None,
        *,
        embed: hikari.Embed | None = None,
        ephemeral: bool = False,
        **kwargs,
    ) -> Any:
        """Respond to slash and prefix contexts alike.

        Prefix contexts have no ``interaction`` and cannot send ephemeral
        messages, so the flag is only passed for interactions.
        """
        if hasattr(ctx, "interaction") and ephemeral:
            kwargs["flags"] = hikari.MessageFlag.EPHEMERAL
        if content:
            kwargs["content"] = content
        if embed:
            kwargs["embed"] = embed

        return await ctx.respond(**kwargs)

    async def respond_success(
        self,
        ctx: lightbulb.Context,
        message: str | None = None,
        *,
        title: str | None = None,
        embed: hikari.Embed | None = None,
        ephemeral: bool = False,
        color: hikari.Color = SUCCESS_COLOR,
        **kwargs: Any,
    ) -> Any:
        """Respond with a success-styled embed."""
        response_embed = embed or self.create_embed(title=title, description=message, color=color)
        return await self.smart_respond(ctx, embed=response_embed, ephemeral=ephemeral, **kwargs)

    async def respond_error(
        self,
        ctx: lightbulb.Context,
        message: str,
        *,
        title: str | None = "❌ Error",
        embed: hikari.Embed | None = None,
        ephemeral: bool = True,
        color: hikari.Color = ERROR_COLOR,
        **kwargs: Any,
    ) -> Any:
        response_embed = embed or self.create_embed(title=title, description=message, color=color)
        return await self.smart_respond(ctx, embed=response_embed, ephemeral=ephemeral, **kwargs)

    async def emit_event(self, event_name: str, *args: Any, **kwargs: Any) -> None:
        """Convenience wrapper for :class:`EventSystem.emit`."""
        await self.events.emit(event_name, *args, **kwargs)

    async def fetch_user(self, user_id: int) -> hikari.User:
        return await self.rest.fetch_user(user_id)

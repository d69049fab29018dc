from __future__ import annotations

import logging
from typing import Any

from bot.plugins.base import BasePlugin

from .commands import CONTEXT_COMMANDS

logger = logging.getLogger(__name__)


class ContextMenusPlugin(BasePlugin):
    """Files the right-click handlers with the bot's registry and exposes them to Discord."""

    def __init__(self, bot: Any) -> None:
        super().__init__(bot)
        self._registered: list[str] = []

    async def on_load(self) -> None:
        registry = self.bot.context_menus
        self._registered.extend(command.name for command in registry.register_all(CONTEXT_COMMANDS))

        for command_class in registry.build_commands():
            self.command_client.register(command_class)

        self.logger.info(f"Registered {len(self._registered)} context menu commands")
        await super().on_load()

    async def on_unload(self) -> None:
        for name in self._registered:
            self.bot.context_menus.unregister(name)
        self._registered.clear()
        await super().on_unload()

from __future__ import annotations

import logging
from typing import Any

from bot.plugins.base import BasePlugin

from .commands import setup_help_commands, setup_info_commands

logger = logging.getLogger(__name__)


class GeneralPlugin(BasePlugin):
    def __init__(self, bot: Any) -> None:
        super().__init__(bot)
        self._register_commands()

    def _register_commands(self) -> None:
        for command_func in setup_info_commands(self) + setup_help_commands(self):
            setattr(self, command_func.__name__, command_func)

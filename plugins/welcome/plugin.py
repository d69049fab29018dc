from __future__ import annotations

import logging
from typing import Any

import hikari

from bot.core.event_system import event_listener
from bot.plugins.base import BasePlugin
from config.settings import settings

logger = logging.getLogger(__name__)


class WelcomePlugin(BasePlugin):
    def __init__(self, bot: Any, message: str | None = None) -> None:
        super().__init__(bot)
        self.message = message or settings.welcome_message

    @event_listener("member_join")
    async def on_member_join(self, member: hikari.Member) -> None:
        if member.is_bot:
            return

        try:
            await member.send(self.message)
        except (hikari.ForbiddenError, hikari.BadRequestError) as e:
            # Members with closed DMs can't be greeted
            logger.warning(f"Could not send welcome DM to {member.username} ({member.id}): {e}")
            return

        logger.info(f"Sent welcome DM to {member.username} in guild {member.guild_id}")

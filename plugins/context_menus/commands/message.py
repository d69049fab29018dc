from __future__ import annotations

import datetime
import logging
import random

import hikari
import lightbulb

from bot.core.context_menus import MessageContextCommand

from ..config import REMINDER_COLOR, UWU_COLOR
from ..utils import preview, uwuify

logger = logging.getLogger(__name__)


class RemindCommand(MessageContextCommand):
    """Demo reminder: acknowledges the request without scheduling anything."""

    name = "Remind Me Later"

    async def handle(self, ctx: lightbulb.Context, target: hikari.Message) -> None:
        embed = hikari.Embed(
            title="📬 Reminder Set!",
            description="I'll remind you about this message in 1 hour:",
            color=REMINDER_COLOR,
            timestamp=datetime.datetime.now(tz=datetime.timezone.utc),
        )
        embed.add_field("Message Preview", preview(target.content) or "*No text content*")
        embed.set_footer(f"Message ID: {target.id}")
        await ctx.respond(embed=embed, flags=hikari.MessageFlag.EPHEMERAL)


class UwuifyCommand(MessageContextCommand):
    name = "Uwuify Message"

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    async def handle(self, ctx: lightbulb.Context, target: hikari.Message) -> None:
        embed = hikari.Embed(
            title="UwU-ified Message! 🌸",
            description=uwuify(target.content or "", self.rng) or "*nothing to uwuify*",
            color=UWU_COLOR,
            timestamp=datetime.datetime.now(tz=datetime.timezone.utc),
        )
        embed.set_footer(f"Transformed by {ctx.user.username}")
        await ctx.respond(embed=embed)

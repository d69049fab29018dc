from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import hikari
import lightbulb

from bot.core.results import CommandResult
from bot.plugins.commands import CommandArgument, command

from ..config import admin_settings

if TYPE_CHECKING:
    from ..plugin import AdminPlugin

logger = logging.getLogger(__name__)

PURGE_FAILED = "Failed to delete messages. They might be too old."
SAY_FAILED = "Failed to send the message. Check my permissions."


async def delete_later(ctx: lightbulb.Context, response: Any, delay: float) -> None:
    """Remove a confirmation message after ``delay`` seconds.

    Prefix contexts hand back the created message; interaction contexts hand
    back a response id that only the context can delete.
    """
    await asyncio.sleep(delay)
    try:
        if isinstance(response, hikari.Message):
            await response.delete()
        else:
            await ctx.delete_response(response)
    except hikari.HikariError as e:
        # Someone else may have removed it already
        logger.debug(f"Could not delete purge confirmation: {e}")


def setup_channel_commands(plugin: AdminPlugin) -> list[Callable[..., Any]]:
    @command(
        name="purge",
        description="Deletes a specified number of messages from the channel.",
        permissions=hikari.Permissions.ADMINISTRATOR,
        hidden=True,
        arguments=[
            CommandArgument(
                "count",
                hikari.OptionType.INTEGER,
                f"The number of messages to delete (1-{admin_settings.purge_max})",
                required=False,
                default=admin_settings.purge_default,
            )
        ],
    )
    async def purge(ctx: lightbulb.Context, count: int | None = admin_settings.purge_default) -> CommandResult | None:
        if count is None or not 1 <= count <= admin_settings.purge_max:
            return CommandResult.user_error(f"Please provide a number between 1 and {admin_settings.purge_max}.")

        try:
            messages = [message async for message in plugin.rest.fetch_messages(ctx.channel_id).limit(count)]
            await plugin.rest.delete_messages(ctx.channel_id, messages)
        except hikari.HikariError as e:
            return CommandResult.api_error(
                PURGE_FAILED,
                {"channel": ctx.channel_id, "count": count, "error": f"{type(e).__name__}: {e}"},
            )

        logger.info(f"{ctx.user.username} purged {len(messages)} messages in {ctx.channel_id}/{ctx.guild_id}")

        response = await ctx.respond(f"✅ Deleted {len(messages)} messages.")
        await delete_later(ctx, response, admin_settings.confirmation_delay)
        return None

    @command(
        name="say",
        description="Makes the bot say something in a specified channel.",
        permissions=hikari.Permissions.ADMINISTRATOR,
        hidden=True,
        arguments=[
            CommandArgument("channel", hikari.OptionType.CHANNEL, "The channel to send the message in"),
            CommandArgument("message", hikari.OptionType.STRING, "The message to send"),
        ],
    )
    async def say(
        ctx: lightbulb.Context,
        channel: hikari.PartialChannel | None = None,
        message: str | None = None,
    ) -> CommandResult:
        if channel is None:
            return CommandResult.user_error("Please mention the channel to send the message in.")
        if not message or not message.strip():
            return CommandResult.user_error("Please provide a message to send.")

        try:
            await plugin.rest.create_message(channel.id, message)
        except hikari.HikariError as e:
            return CommandResult.api_error(
                SAY_FAILED,
                {"channel": channel.id, "error": f"{type(e).__name__}: {e}"},
            )

        logger.info(f"{ctx.user.username} used say command in {channel.id}/{ctx.guild_id}")
        return CommandResult.success("Message sent!")

    return [purge, say]

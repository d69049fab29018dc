from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import hikari
import lightbulb

from bot.core.utils import format_date, format_latency
from bot.plugins.commands import CommandArgument, command

from ..config import DATE_FORMAT, INFO_COLOR
from ..views import PingView

if TYPE_CHECKING:
    from ..plugin import GeneralPlugin

logger = logging.getLogger(__name__)


async def resolve_member(plugin: GeneralPlugin, guild_id: int | None, user_id: int) -> hikari.Member | None:
    """Cached member first, REST second; ``None`` outside guilds or for non-members."""
    if not guild_id:
        return None

    member = plugin.cache.get_member(guild_id, user_id)
    if member:
        return member

    try:
        return await plugin.rest.fetch_member(guild_id, user_id)
    except hikari.NotFoundError:
        return None


def setup_info_commands(plugin: GeneralPlugin) -> list[Callable[..., Any]]:
    """Register latency and user information commands."""

    @command(name="ping", description="Check the bot's latency.")
    async def ping(ctx: lightbulb.Context) -> None:
        latency = format_latency(plugin.gateway.heartbeat_latency)
        view = PingView(ctx.user.id)

        await ctx.respond(f"🏓 Pong! Latency: {latency}ms", components=view)
        plugin.miru.start_view(view)
        logger.debug(f"{ctx.user.username} checked latency: {latency}ms")

    @command(
        name="userinfo",
        description="Get information about a user.",
        aliases=["user", "whois"],
        arguments=[
            CommandArgument(
                "user",
                hikari.OptionType.USER,
                "The user to get info about",
                required=False,
            )
        ],
    )
    async def userinfo(ctx: lightbulb.Context, user: hikari.User | None = None) -> None:
        target = user or ctx.user

        embed = plugin.create_embed(title=f"User Info - {target.username}", color=INFO_COLOR)
        embed.set_thumbnail(target.display_avatar_url)
        embed.add_field("User ID", str(target.id), inline=True)
        embed.add_field("Created At", format_date(target.created_at, DATE_FORMAT), inline=True)

        member = await resolve_member(plugin, ctx.guild_id, target.id)
        if member:
            embed.add_field("Joined Server", format_date(member.joined_at, DATE_FORMAT), inline=True)
            embed.add_field("Roles", str(len(member.role_ids)), inline=True)

        await ctx.respond(embed=embed)
        logger.debug(f"{ctx.user.username} requested info about {target.username}")

    return [ping, userinfo]

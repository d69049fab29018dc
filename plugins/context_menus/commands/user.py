from __future__ import annotations

import datetime
import logging

import hikari
import lightbulb

from bot.core.context_menus import UserContextCommand
from bot.core.utils import format_date, top_role

from ..config import BOOP_COLOR, PROFILE_COLOR, PROFILE_DATE_FORMAT

logger = logging.getLogger(__name__)


def resolved_member(ctx: lightbulb.Context, user: hikari.User) -> hikari.InteractionMember | None:
    """The guild member Discord resolved for the right-clicked user, if any."""
    resolved = ctx.interaction.resolved
    if resolved is None:
        return None
    return resolved.members.get(user.id)


class BoopCommand(UserContextCommand):
    name = "Boop!"

    async def handle(self, ctx: lightbulb.Context, target: hikari.User) -> None:
        embed = hikari.Embed(
            title="Boop! 👉👃",
            description=f"{ctx.user.mention} booped {target.mention}!",
            color=BOOP_COLOR,
            timestamp=datetime.datetime.now(tz=datetime.timezone.utc),
        )
        await ctx.respond(embed=embed)


class ProfileCommand(UserContextCommand):
    name = "View Profile Card"

    async def handle(self, ctx: lightbulb.Context, target: hikari.User) -> None:
        embed = hikari.Embed(
            title=f"Profile Card - {target.username}",
            color=PROFILE_COLOR,
            timestamp=datetime.datetime.now(tz=datetime.timezone.utc),
        )
        embed.set_thumbnail(target.display_avatar_url)
        embed.add_field("User ID", str(target.id), inline=True)
        embed.add_field("Created Account", format_date(target.created_at, PROFILE_DATE_FORMAT), inline=True)
        embed.add_field("Bot Account", "Yes" if target.is_bot else "No", inline=True)

        member = resolved_member(ctx, target)
        if member is not None:
            role = top_role(member, ctx.interaction.get_guild())
            embed.add_field("Joined Server", format_date(member.joined_at, PROFILE_DATE_FORMAT), inline=True)
            embed.add_field("Nickname", member.nickname or "None", inline=True)
            embed.add_field("Top Role", role.name if role else "No Roles", inline=True)

        embed.set_footer(f"Requested by {ctx.user.username}")
        await ctx.respond(embed=embed)

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import hikari
import lightbulb

from bot.core.results import CommandResult
from bot.plugins.commands import CommandArgument, command

from ..config import HELP_COLOR, INFO_COLOR, NO_DESCRIPTION

if TYPE_CHECKING:
    from ..plugin import GeneralPlugin

logger = logging.getLogger(__name__)


def setup_help_commands(plugin: GeneralPlugin) -> list[Callable[..., Any]]:
    @command(
        name="help",
        description="Shows a list of available commands or info about a specific command.",
        arguments=[
            CommandArgument(
                "command",
                hikari.OptionType.STRING,
                "The command to get help for",
                required=False,
            )
        ],
    )
    async def help_command(ctx: lightbulb.Context, command: str = "") -> CommandResult | None:
        handler = plugin.bot.message_handler
        prefix = handler.prefix
        command = (command or "").strip()

        if not command:
            lines = [
                f"`{prefix}{cmd.name}` - {cmd.description or NO_DESCRIPTION}" for cmd in handler.get_commands()
            ]
            embed = plugin.create_embed(
                title="Available Commands",
                description="Here are all the commands you can use:\n\n" + "\n".join(lines),
                color=HELP_COLOR,
            )
            await ctx.respond(embed=embed)
            logger.debug(f"{ctx.user.username} requested help for all commands")
            return None

        found = handler.get_command(command)
        # Hidden commands are not advertised, even by name
        if found is None or found.hidden:
            return CommandResult.user_error(f"Command '{command}' not found.")

        embed = plugin.create_embed(title=f"Help - {found.name}", color=INFO_COLOR)
        embed.add_field("Description", found.description or NO_DESCRIPTION)
        embed.add_field("Usage", f"{prefix}{found.usage}")
        embed.add_field("Aliases", ", ".join(found.aliases) if found.aliases else "None")

        await ctx.respond(embed=embed)
        logger.debug(f"{ctx.user.username} requested help for {found.name}")
        return None

    return [help_command]

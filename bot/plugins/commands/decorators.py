"""Command decorators for unified command creation."""

import hikari

from .argument_types import CommandArgument


def command(
    name: str,
    description: str = "",
    aliases: list[str] | None = None,
    permissions: hikari.Permissions | None = None,
    guild_only: bool = False,
    slash_only: bool = False,
    prefix_only: bool = False,
    hidden: bool = False,
    cooldown: bool = True,
    arguments: list[CommandArgument] | None = None,
    **lightbulb_kwargs,
):
    """
    Unified command decorator that creates both slash and prefix commands.

    This creates command metadata that will be processed during plugin loading.
    ``permissions`` are Discord permissions the invoking member must hold,
    ``hidden`` keeps the command out of the help listing and ``cooldown``
    toggles the per-user cooldown gate.
    """

    def decorator(func):
        # Store command metadata on the function
        func._unified_command = {
            "name": name,
            "description": description,
            "permissions": permissions,
            "guild_only": guild_only or permissions is not None,
            "slash_only": slash_only,
            "prefix_only": prefix_only,
            "cooldown": cooldown,
            "arguments": arguments or [],
            "lightbulb_kwargs": lightbulb_kwargs,
        }

        # Create prefix command version (unless slash_only)
        if not slash_only:
            func._prefix_command = {
                "name": name,
                "description": description,
                "aliases": aliases or [],
                "permissions": permissions,
                "guild_only": guild_only or permissions is not None,
                "hidden": hidden,
                "cooldown": cooldown,
                "arguments": arguments or [],
            }

        return func

    return decorator

import functools
import logging
from collections.abc import Callable
from typing import Any

import hikari
import lightbulb

from ..core.results import CommandResult
from ..core.utils import calculate_member_permissions, format_permissions

logger = logging.getLogger(__name__)

GUILD_ONLY_MESSAGE = "This command can only be used in servers."


def member_permissions(ctx: lightbulb.Context) -> hikari.Permissions:
    """Resolve the invoking member's effective permissions in the current channel."""
    member = ctx.member
    if member is None:
        return hikari.Permissions.NONE

    # Interaction payloads carry the resolved permissions already
    if isinstance(member, hikari.InteractionMember):
        return member.permissions

    guild = ctx.get_guild()
    if guild is None:
        return hikari.Permissions.NONE
    return calculate_member_permissions(member, guild, ctx.get_channel())


def requires_guild(error_message: str | None = None) -> Callable:
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(ctx: lightbulb.Context, *args, **kwargs) -> Any:
            if not ctx.guild_id:
                return CommandResult.user_error(error_message or GUILD_ONLY_MESSAGE)
            return await func(ctx, *args, **kwargs)

        wrapper._guild_only = True
        return wrapper

    return decorator


def requires_permissions(permissions: hikari.Permissions, error_message: str | None = None) -> Callable:
    """Only run the command if the invoking member holds every permission in ``permissions``."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(ctx: lightbulb.Context, *args, **kwargs) -> Any:
            if not ctx.guild_id or ctx.member is None:
                return CommandResult.user_error(GUILD_ONLY_MESSAGE)

            granted = member_permissions(ctx)
            missing = permissions & ~granted
            logger.debug(f"Permission check: {ctx.author.username} has {granted!r}, needs {permissions!r}")

            if missing:
                missing_names = ", ".join(format_permissions(missing)) or str(missing)
                logger.warning(f"Permission denied: {ctx.author.username} lacks {missing_names}")
                return CommandResult.permission_error(
                    error_message or f"You need the {missing_names} permission to use this command.",
                    {"required": missing_names, "user": str(ctx.author.id)},
                )

            return await func(ctx, *args, **kwargs)

        # Store metadata for introspection
        wrapper._required_permissions = permissions
        return wrapper

    return decorator


def requires_role(role_ids: int | list[int], error_message: str | None = None) -> Callable:
    if isinstance(role_ids, int):
        role_ids = [role_ids]

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(ctx: lightbulb.Context, *args, **kwargs) -> Any:
            if not isinstance(ctx.member, hikari.Member):
                return CommandResult.user_error(GUILD_ONLY_MESSAGE)

            # Check if user has any of the required roles
            user_roles = ctx.member.role_ids
            if not any(role_id in user_roles for role_id in role_ids):
                return CommandResult.permission_error(
                    error_message or "You don't have the required role to use this command."
                )

            return await func(ctx, *args, **kwargs)

        # Store metadata for introspection
        wrapper._required_roles = role_ids
        return wrapper

    return decorator


def requires_guild_owner(error_message: str | None = None) -> Callable:
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(ctx: lightbulb.Context, *args, **kwargs) -> Any:
            if not ctx.guild_id:
                return CommandResult.user_error(GUILD_ONLY_MESSAGE)

            guild = ctx.get_guild()
            if not guild or ctx.author.id != guild.owner_id:
                return CommandResult.permission_error(error_message or "Only the server owner can use this command.")

            return await func(ctx, *args, **kwargs)

        # Store metadata for introspection
        wrapper._requires_guild_owner = True
        return wrapper

    return decorator

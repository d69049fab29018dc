"""Utility functions shared by the core and the plugins."""

import datetime
import math

import hikari

# Names that differ from the flag's own name
_PERMISSION_LABELS = {
    hikari.Permissions.MANAGE_GUILD: "Manage Server",
    hikari.Permissions.MODERATE_MEMBERS: "Timeout Members",
    hikari.Permissions.VIEW_GUILD_INSIGHTS: "View Server Insights",
    hikari.Permissions.STREAM: "Video",
}


def calculate_member_permissions(
    member: hikari.Member, guild: hikari.Guild, channel: hikari.GuildChannel | None = None
) -> hikari.Permissions:
    """
    Calculate the effective permissions for a member in a guild or channel.

    Args:
        member: The guild member to calculate permissions for
        guild: The guild the member belongs to
        channel: Optional channel to include channel overwrites

    Returns:
        The calculated permissions for the member
    """
    # The owner bypasses every permission check
    if member.id == guild.owner_id:
        return hikari.Permissions.all_permissions()

    # Start with @everyone permissions
    everyone_role = guild.get_role(guild.id)  # @everyone role has same ID as guild
    permissions = everyone_role.permissions if everyone_role else hikari.Permissions.NONE

    # Add permissions from all member roles
    for role_id in member.role_ids:
        role = guild.get_role(role_id)
        if role:
            permissions |= role.permissions

    if permissions & hikari.Permissions.ADMINISTRATOR:
        return hikari.Permissions.all_permissions()

    # Apply channel overwrites: @everyone, then roles, then the member itself
    overwrites = getattr(channel, "permission_overwrites", None) or {}
    for target_id in (guild.id, *member.role_ids, member.id):
        overwrite = overwrites.get(target_id)
        if overwrite:
            permissions &= ~overwrite.deny
            permissions |= overwrite.allow

    return permissions


def has_permissions(
    member: hikari.Member,
    guild: hikari.Guild,
    required_permissions: hikari.Permissions,
    channel: hikari.GuildChannel | None = None,
) -> bool:
    """Check if a member has all of ``required_permissions`` in a guild or channel."""
    member_permissions = calculate_member_permissions(member, guild, channel)
    return (member_permissions & required_permissions) == required_permissions


def format_permissions(permissions: hikari.Permissions) -> list[str]:
    """Human-readable names for each flag set in ``permissions``."""
    names = []
    for flag in hikari.Permissions:
        if not flag.value or not (permissions & flag) == flag:
            continue
        label = _PERMISSION_LABELS.get(flag)
        if label is None:
            label = (flag.name or "").replace("_", " ").title()
        names.append(label)
    return names


def format_latency(seconds: float) -> int:
    """Gateway heartbeat latency in whole milliseconds (0 before the first heartbeat)."""
    if seconds is None or math.isnan(seconds) or math.isinf(seconds):
        return 0
    return round(seconds * 1000)


def format_date(value: datetime.datetime | None, fmt: str = "%m/%d/%Y") -> str:
    if value is None:
        return "Unknown"
    return value.strftime(fmt)


def top_role(member: hikari.Member, guild: hikari.Guild | None) -> hikari.Role | None:
    """The member's highest positioned role, ignoring @everyone."""
    if guild is None:
        return None

    roles = [guild.get_role(role_id) for role_id in member.role_ids if role_id != guild.id]
    roles = [role for role in roles if role is not None]
    if not roles:
        return None
    return max(roles, key=lambda role: role.position)

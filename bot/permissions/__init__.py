from .decorators import (
    member_permissions,
    requires_guild,
    requires_guild_owner,
    requires_permissions,
    requires_role,
)

__all__ = [
    "member_permissions",
    "requires_guild",
    "requires_permissions",
    "requires_role",
    "requires_guild_owner",
]

"""Argument parsers for prefix commands, one strategy per option type."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

import hikari

from .argument_types import CommandArgument

logger = logging.getLogger(__name__)

_USER_MENTION = re.compile(r"^<@!?(\d+)>$")
_CHANNEL_MENTION = re.compile(r"^<#(\d+)>$")
_ROLE_MENTION = re.compile(r"^<@&(\d+)>$")


class ArgumentParseError(ValueError):
    """A supplied prefix argument could not be converted to its option type."""

    def __init__(self, definition: CommandArgument, value: str, message: str):
        super().__init__(message)
        self.argument = definition.name
        self.value = value


def parse_snowflake(arg: str, pattern: re.Pattern[str]) -> int | None:
    """Extract an ID from a mention matching ``pattern`` or from a bare number."""
    match = pattern.match(arg)
    if match:
        return int(match.group(1))
    if arg.isdigit():
        return int(arg)
    return None


class ArgumentParser(ABC):
    """Base class for argument parsers."""

    @abstractmethod
    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        """Parse a string argument according to the definition."""


class StringArgumentParser(ArgumentParser):
    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        return arg


class IntegerArgumentParser(ArgumentParser):
    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        try:
            return int(arg)
        except ValueError:
            message = f"`{arg}` is not a whole number for `{definition.name}`."
            raise ArgumentParseError(definition, arg, message) from None


class BooleanArgumentParser(ArgumentParser):
    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        return arg.lower() in ("true", "1", "yes", "on", "y")


class UserArgumentParser(ArgumentParser):
    """Resolve a mention, an ID or a member name to a user."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        user_id = parse_snowflake(arg, _USER_MENTION)
        if user_id is not None:
            cached = bot.hikari_bot.cache.get_user(user_id)
            if cached:
                return cached
            try:
                return await bot.hikari_bot.rest.fetch_user(user_id)
            except hikari.NotFoundError:
                return definition.default

        lowered = arg.lower()
        for member in bot.hikari_bot.cache.get_members_view_for_guild(guild_id).values():
            if lowered in (member.username.lower(), member.display_name.lower()):
                return member.user
        return definition.default


class ChannelArgumentParser(ArgumentParser):
    """Resolve a channel mention, ID or name."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        channel_id = parse_snowflake(arg, _CHANNEL_MENTION)
        if channel_id is not None:
            channel = bot.hikari_bot.cache.get_guild_channel(channel_id)
            if channel:
                return channel
            try:
                return await bot.hikari_bot.rest.fetch_channel(channel_id)
            except hikari.NotFoundError:
                return definition.default

        name = arg.lstrip("#").lower()
        for channel in bot.hikari_bot.cache.get_guild_channels_view_for_guild(guild_id).values():
            if (channel.name or "").lower() == name:
                return channel
        return definition.default


class RoleArgumentParser(ArgumentParser):
    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        role_id = parse_snowflake(arg, _ROLE_MENTION)
        roles = bot.hikari_bot.cache.get_roles_view_for_guild(guild_id).values()
        for role in roles:
            if role.id == role_id or (role_id is None and role.name.lower() == arg.lower()):
                return role
        return definition.default


class MentionableArgumentParser(ArgumentParser):
    """Users first, then roles."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int) -> Any:
        if _ROLE_MENTION.match(arg):
            return await RoleArgumentParser().parse(arg, definition, bot, guild_id)
        if _USER_MENTION.match(arg):
            return await UserArgumentParser().parse(arg, definition, bot, guild_id)
        return definition.default


class ArgumentParserFactory:
    """Factory for creating argument parsers."""

    _parsers = {
        hikari.OptionType.STRING: StringArgumentParser(),
        hikari.OptionType.INTEGER: IntegerArgumentParser(),
        hikari.OptionType.BOOLEAN: BooleanArgumentParser(),
        hikari.OptionType.USER: UserArgumentParser(),
        hikari.OptionType.CHANNEL: ChannelArgumentParser(),
        hikari.OptionType.ROLE: RoleArgumentParser(),
        hikari.OptionType.MENTIONABLE: MentionableArgumentParser(),
    }

    @classmethod
    def get_parser(cls, option_type: hikari.OptionType) -> ArgumentParser:
        return cls._parsers.get(option_type, StringArgumentParser())

    @classmethod
    async def parse_arguments(
        cls,
        args: list[str],
        command_args: list[CommandArgument],
        bot: Any,
        guild_id: int,
    ) -> dict[str, Any]:
        """Parse prefix command arguments based on command definitions.

        A trailing string argument swallows the rest of the message. Missing
        arguments fall back to their default (``None`` if required); a supplied
        value that cannot be converted raises ``ArgumentParseError``.
        """
        parsed: dict[str, Any] = {}
        last_index = len(command_args) - 1

        for i, arg_def in enumerate(command_args):
            fallback = arg_def.default if not arg_def.required else None
            if i >= len(args):
                parsed[arg_def.name] = fallback
                continue

            if arg_def.arg_type == hikari.OptionType.STRING and i == last_index:
                parsed[arg_def.name] = " ".join(args[i:])
                continue

            try:
                parsed[arg_def.name] = await cls.get_parser(arg_def.arg_type).parse(args[i], arg_def, bot, guild_id)
            except hikari.HikariError as e:
                logger.warning(f"Error parsing argument {arg_def.name}: {e}")
                parsed[arg_def.name] = fallback

        return parsed

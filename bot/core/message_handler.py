import logging
from typing import Any, Dict, List, Optional

import hikari

from config.settings import settings

from .results import CommandResult, failure_result, send_result

logger = logging.getLogger(__name__)

COOLDOWN_MESSAGE = "You are on cooldown for this command."


class PrefixCommand:
    def __init__(
        self,
        name: str,
        callback: Any,
        description: str = "",
        aliases: Optional[List[str]] = None,
        plugin_name: Optional[str] = None,
        arguments: Optional[List[Any]] = None,
        hidden: bool = False,
        cooldown: bool = True,
    ):
        self.name = name.lower()
        self.callback = callback
        self.description = description
        self.aliases = [alias.lower() for alias in aliases or []]
        self.plugin_name = plugin_name
        self.arguments = arguments or []
        self.hidden = hidden
        self.cooldown = cooldown

    @property
    def usage(self) -> str:
        params = " ".join(f"<{arg.name}>" for arg in self.arguments)
        return f"{self.name} {params}".strip()


class MessageCommandHandler:
    def __init__(self, bot: Any):
        self.bot = bot
        self.commands: Dict[str, PrefixCommand] = {}
        self.prefix = settings.bot_prefix

    def add_command(self, command: PrefixCommand) -> None:
        self.commands[command.name] = command

        # Add aliases
        for alias in command.aliases:
            self.commands[alias] = command

        logger.debug(f"Added prefix command: {command.name} (aliases: {command.aliases})")

    def remove_command(self, name: str) -> None:
        command = self.commands.get(name.lower())
        if command is None:
            return

        # Remove main command and aliases
        self.commands.pop(command.name, None)
        for alias in command.aliases:
            self.commands.pop(alias, None)

        logger.debug(f"Removed prefix command: {name}")

    def get_command(self, name: str) -> Optional[PrefixCommand]:
        return self.commands.get(name.lower())

    def get_commands(self, include_hidden: bool = False) -> List[PrefixCommand]:
        """Unique registered commands in registration order."""
        unique: Dict[str, PrefixCommand] = {}
        for command in self.commands.values():
            if command.hidden and not include_hidden:
                continue
            unique.setdefault(command.name, command)
        return list(unique.values())

    async def handle_message(self, event: hikari.MessageCreateEvent) -> bool:
        # Ignore bot messages
        if event.author.is_bot:
            return False

        # Check if message starts with prefix
        if not event.content or not event.content.startswith(self.prefix):
            return False

        # Parse command and arguments
        content = event.content[len(self.prefix):].strip()
        if not content:
            return False

        parts = content.split()
        command_name = parts[0].lower()
        args = parts[1:]

        # Unknown commands are ignored silently
        command = self.commands.get(command_name)
        if command is None:
            return False

        logger.info(f"Prefix command called: {self.prefix}{command_name} by {event.author.username}")

        ctx = PrefixContext(event, self.bot, args, command=command)

        cooldowns = getattr(self.bot, "cooldowns", None)
        if command.cooldown and cooldowns is not None:
            if not cooldowns.check_and_record(event.author.id, command.name):
                remaining = cooldowns.remaining(event.author.id, command.name)
                await send_result(
                    ctx,
                    CommandResult.rate_limit(
                        f"{COOLDOWN_MESSAGE} Try again in {remaining:.1f}s.",
                        {"command": command.name, "remaining": f"{remaining:.1f}"},
                    ),
                )
                return True

        try:
            result = await command.callback(ctx)
            if isinstance(result, CommandResult):
                await send_result(ctx, result)
            return True

        except Exception as e:
            logger.error(f"Error executing prefix command {command_name}: {e}", exc_info=True)
            try:
                await send_result(ctx, failure_result(command.name, e))
            except hikari.HikariError as respond_error:
                logger.debug(f"Could not report failure of {command_name}: {respond_error}")
            return True


class PrefixContext:
    def __init__(
        self,
        event: hikari.MessageCreateEvent,
        bot: Any,
        args: List[str],
        command: Optional[PrefixCommand] = None,
    ):
        self.event = event
        self.bot = bot
        self.args = args
        self.command = command

        # Mirror lightbulb context properties
        self.author = event.author
        self.user = event.author
        self.member = getattr(event, "member", None)
        self.guild_id = getattr(event, "guild_id", None)
        self.channel_id = event.channel_id

    def get_guild(self) -> Optional[hikari.Guild]:
        if self.guild_id:
            return self.bot.hikari_bot.cache.get_guild(self.guild_id)
        return None

    def get_channel(self) -> Optional[hikari.GuildChannel]:
        if isinstance(self.event, hikari.GuildMessageCreateEvent):
            return self.event.get_channel()
        return None

    async def defer(self, *args: Any, **kwargs: Any) -> None:
        await self.bot.hikari_bot.rest.trigger_typing(self.channel_id)

    async def respond(
        self,
        content: Optional[str] = None,
        *,
        embed: Optional[hikari.Embed] = None,
        components: Any = None,
        flags: Any = None,
    ) -> hikari.Message:
        # Channel messages cannot be ephemeral, so ``flags`` is accepted and dropped
        return await self.bot.hikari_bot.rest.create_message(
            self.channel_id,
            content=content if content is not None else hikari.UNDEFINED,
            embed=embed if embed is not None else hikari.UNDEFINED,
            components=components if components is not None else hikari.UNDEFINED,
        )

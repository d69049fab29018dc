"""Command registration system."""

import logging
from typing import Any

import hikari
import lightbulb

from ...core.results import CommandResult, failure_result, send_result
from ...permissions import requires_guild, requires_permissions
from .argument_types import CommandArgument
from .parsers import ArgumentParseError, ArgumentParserFactory

logger = logging.getLogger(__name__)

COOLDOWN_MESSAGE = "You are on cooldown for this command."


class OptionDescriptorFactory:
    """Factory for creating lightbulb option descriptors."""

    _mapping = {
        hikari.OptionType.STRING: lightbulb.string,
        hikari.OptionType.INTEGER: lightbulb.integer,
        hikari.OptionType.BOOLEAN: lightbulb.boolean,
        hikari.OptionType.USER: lightbulb.user,
        hikari.OptionType.CHANNEL: lightbulb.channel,
        hikari.OptionType.ROLE: lightbulb.role,
        hikari.OptionType.MENTIONABLE: lightbulb.mentionable,
        hikari.OptionType.ATTACHMENT: lightbulb.attachment,
    }

    # Only these option types accept choices or autocomplete
    _choice_types = {hikari.OptionType.STRING, hikari.OptionType.INTEGER}

    @classmethod
    def create(cls, arg_def: CommandArgument) -> Any:
        """Create the appropriate lightbulb option descriptor for an argument."""
        kwargs: dict[str, Any] = {}
        if not arg_def.required:
            # lightbulb treats an UNDEFINED default as a required option
            kwargs["default"] = arg_def.default

        if arg_def.arg_type in cls._choice_types:
            if arg_def.autocomplete is not None:
                kwargs["autocomplete"] = arg_def.autocomplete
            elif arg_def.choices is not None:
                kwargs["choices"] = arg_def.choices

        descriptor_func = cls._mapping.get(arg_def.arg_type, lightbulb.string)
        return descriptor_func(arg_def.name, arg_def.description, **kwargs)


def guard_callback(callback: Any, meta: dict[str, Any]) -> Any:
    """Wrap a command callback in the guild and permission checks its metadata asks for."""
    permissions = meta.get("permissions")
    if permissions:
        return requires_permissions(permissions)(callback)
    if meta.get("guild_only"):
        return requires_guild()(callback)
    return callback


class CommandRegistry:
    """Handles command registration for plugins."""

    def __init__(self, plugin: Any):
        self.plugin = plugin
        self.bot = plugin.bot
        self.logger = logging.getLogger(f"registry.{plugin.name}")
        self._commands: list[Any] = []
        self._slash_classes: list[type] = []

    @property
    def slash_commands(self) -> list[type]:
        return list(self._slash_classes)

    async def register_commands(self) -> None:
        """Register all commands found in the plugin."""
        await self._register_slash_commands()
        await self._register_prefix_commands()

    async def unregister_commands(self) -> None:
        """Remove the plugin's prefix commands and forget its slash command classes."""
        for command in self._commands:
            if hasattr(command, "_prefix_command"):
                self.bot.message_handler.remove_command(command._prefix_command["name"])
                self.logger.debug(f"Removed prefix command: {command._prefix_command['name']}")

        # Slash classes stay with lightbulb until the next sync
        self._slash_classes.clear()
        self._commands.clear()

    def _plugin_commands(self, marker: str) -> list[Any]:
        found = []
        for attr_name in dir(self.plugin):
            attr = getattr(self.plugin, attr_name, None)
            if callable(attr) and isinstance(getattr(attr, marker, None), dict):
                found.append(attr)
        return found

    async def _register_slash_commands(self) -> None:
        """Register slash commands with lightbulb."""
        for attr in self._plugin_commands("_unified_command"):
            cmd_meta = attr._unified_command
            if cmd_meta.get("prefix_only", False):
                continue

            try:
                cmd_class = self.build_slash_command(attr, cmd_meta)
                self.bot.command_client.register(cmd_class)
            except Exception as e:
                self.logger.error(f"Failed to register slash command {cmd_meta['name']}: {e}")
                continue

            self._slash_classes.append(cmd_class)
            self._commands.append(attr)
            self.logger.info(f"Registered slash command: {cmd_meta['name']} from plugin {self.plugin.name}")

    def build_invoker(self, callback: Any, cmd_meta: dict[str, Any]):
        """Build the coroutine lightbulb calls with the command instance and context."""
        name = cmd_meta["name"]
        command_args: list[CommandArgument] = cmd_meta.get("arguments", [])
        invoke_method = guard_callback(callback, cmd_meta)
        use_cooldown = cmd_meta.get("cooldown", True)
        bot = self.bot

        async def invoke_wrapper(cmd_instance, ctx):
            cooldowns = getattr(bot, "cooldowns", None)
            if use_cooldown and cooldowns is not None:
                if not cooldowns.check_and_record(ctx.user.id, name):
                    remaining = cooldowns.remaining(ctx.user.id, name)
                    await send_result(
                        ctx,
                        CommandResult.rate_limit(
                            f"{COOLDOWN_MESSAGE} Try again in {remaining:.1f}s.",
                            {"command": name, "remaining": f"{remaining:.1f}"},
                        ),
                    )
                    return

            # Option values live on the command instance
            kwargs = {arg_def.name: getattr(cmd_instance, arg_def.name, arg_def.default) for arg_def in command_args}

            try:
                result = await invoke_method(ctx, **kwargs)
            except Exception as e:
                logger.error(f"Error executing slash command {name}: {e}", exc_info=True)
                result = failure_result(name, e)

            if isinstance(result, CommandResult):
                try:
                    await send_result(ctx, result)
                except hikari.HikariError as e:
                    logger.warning(f"Could not send result of /{name}: {e}")

        return invoke_wrapper

    def build_slash_command(self, callback: Any, cmd_meta: dict[str, Any]) -> type:
        """Create the lightbulb ``SlashCommand`` subclass for a decorated plugin method."""
        name = cmd_meta["name"]
        command_args: list[CommandArgument] = cmd_meta.get("arguments", [])
        class_attrs = {
            "invoke": lightbulb.invoke(self.build_invoker(callback, cmd_meta)),
            **{arg_def.name: OptionDescriptorFactory.create(arg_def) for arg_def in command_args},
        }

        cmd_class_name = f"{name.title().replace('-', '').replace('_', '')}Command"
        return type(
            cmd_class_name,
            (lightbulb.SlashCommand,),
            class_attrs,
            name=name,
            description=cmd_meta["description"] or name,
            **cmd_meta.get("lightbulb_kwargs", {}),
        )

    async def _register_prefix_commands(self) -> None:
        """Register prefix commands with the message handler."""
        from ...core.message_handler import PrefixCommand

        for attr in self._plugin_commands("_prefix_command"):
            prefix_meta = attr._prefix_command
            command_args = prefix_meta.get("arguments", [])

            prefix_cmd = PrefixCommand(
                name=prefix_meta["name"],
                callback=self._create_prefix_wrapper(attr, prefix_meta, command_args),
                description=prefix_meta.get("description", ""),
                aliases=prefix_meta.get("aliases", []),
                plugin_name=self.plugin.name,
                arguments=command_args,
                hidden=prefix_meta.get("hidden", False),
                cooldown=prefix_meta.get("cooldown", True),
            )
            self.bot.message_handler.add_command(prefix_cmd)
            if attr not in self._commands:
                self._commands.append(attr)
            self.logger.info(f"Registered prefix command: {prefix_meta['name']} from plugin {self.plugin.name}")

    def _create_prefix_wrapper(self, callback: Any, meta: dict[str, Any], args: list[CommandArgument]):
        """Create a wrapper function for prefix command argument parsing."""
        bot = self.bot

        async def prefix_wrapper(ctx):
            if not args:
                return await callback(ctx)

            guild_id = getattr(ctx, "guild_id", 0) or 0
            try:
                parsed_args = await ArgumentParserFactory.parse_arguments(ctx.args, args, bot, guild_id)
            except ArgumentParseError as e:
                return CommandResult.user_error(str(e), {"argument": e.argument, "value": e.value})
            return await callback(ctx, **parsed_args)

        # Guards run before arguments are parsed
        return guard_callback(prefix_wrapper, meta)

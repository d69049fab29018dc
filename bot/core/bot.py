import logging

import hikari
import lightbulb
import miru

from config.settings import settings

from ..middleware import error_handler_middleware, logging_middleware
from .context_menus import ContextMenuRegistry
from .cooldowns import CooldownGate
from .event_system import EventSystem
from .message_handler import MessageCommandHandler
from .plugin_loader import PluginLoader

logger = logging.getLogger(__name__)

INTENTS = (
    hikari.Intents.ALL_UNPRIVILEGED
    | hikari.Intents.GUILD_MEMBERS
    | hikari.Intents.MESSAGE_CONTENT
)


class DiscordBot:
    def __init__(self) -> None:
        # Raises MissingTokenError before anything touches the network
        token = settings.require_token()

        self.hikari_bot = hikari.GatewayBot(token=token, intents=INTENTS)

        client_kwargs = {}
        if settings.default_guilds:
            client_kwargs["default_enabled_guilds"] = settings.default_guilds
        self._command_client = lightbulb.client_from_app(self.hikari_bot, **client_kwargs)

        self.miru_client = miru.Client(self.hikari_bot)

        self.cooldowns = CooldownGate(settings.cooldown_seconds, settings.cooldown_max_entries)
        self.context_menus = ContextMenuRegistry()
        self.event_system = EventSystem()
        self.event_system.add_middleware(logging_middleware)
        self.event_system.add_middleware(error_handler_middleware)
        self.message_handler = MessageCommandHandler(self)
        self.plugin_loader = PluginLoader(self)

        self.is_ready = False

        for directory in settings.plugin_directories:
            self.plugin_loader.add_plugin_directory(directory)

        self._setup_event_listeners()

    def _setup_event_listeners(self) -> None:
        self.hikari_bot.subscribe(hikari.StartingEvent, self.on_starting)
        self.hikari_bot.subscribe(hikari.ShardReadyEvent, self.on_ready)
        self.hikari_bot.subscribe(hikari.StoppingEvent, self.on_stopping)
        self.hikari_bot.subscribe(hikari.GuildMessageCreateEvent, self.on_message_create)
        self.hikari_bot.subscribe(hikari.MemberCreateEvent, self.on_member_join)

    @property
    def command_client(self) -> lightbulb.GatewayEnabledClient:
        """Return the Lightbulb command client."""
        return self._command_client

    @property
    def gateway(self) -> hikari.GatewayBot:
        return self.hikari_bot

    @property
    def rest(self) -> hikari.api.RESTClient:
        return self.hikari_bot.rest

    @property
    def cache(self) -> hikari.api.Cache:
        return self.hikari_bot.cache

    async def on_starting(self, event: hikari.StartingEvent) -> None:
        # Plugins register their commands before lightbulb syncs them
        logger.info("Bot is starting, loading plugins...")
        await self._load_plugins()
        await self._command_client.start()

    async def on_ready(self, event: hikari.ShardReadyEvent) -> None:
        if self.is_ready:
            return
        self.is_ready = True

        guild_count = len(self.cache.get_guilds_view())
        logger.info(
            f"Logged in as {event.my_user.username} ({event.my_user.id}); "
            f"{guild_count} guilds, {len(self.message_handler.get_commands(include_hidden=True))} prefix commands, "
            f"{len(self.context_menus)} context menu commands"
        )

        await self.hikari_bot.update_presence(
            activity=hikari.Activity(name=settings.status_text, type=hikari.ActivityType.LISTENING)
        )
        await self.event_system.emit("bot_ready", self)

    async def on_stopping(self, event: hikari.StoppingEvent) -> None:
        logger.info("Bot is stopping...")
        await self._cleanup()

    async def on_message_create(self, event: hikari.GuildMessageCreateEvent) -> None:
        handled = await self.message_handler.handle_message(event)
        if not handled:
            await self.event_system.emit("message_create", event)

    async def on_member_join(self, event: hikari.MemberCreateEvent) -> None:
        await self.event_system.emit("member_join", event.member)

    async def _load_plugins(self) -> None:
        discovered = self.plugin_loader.discover_plugins()
        plugins_to_load = [name for name in settings.enabled_plugins if name in discovered]

        unknown = sorted(set(settings.enabled_plugins) - set(discovered))
        if unknown:
            logger.warning(f"Enabled plugins not found: {unknown}")

        if not plugins_to_load:
            logger.warning("No valid plugins found to load")
            return

        logger.info(f"Loading plugins: {plugins_to_load}")
        await self.plugin_loader.load_all_plugins(plugins_to_load)

    async def _cleanup(self) -> None:
        await self.event_system.emit("bot_stopping", self)
        await self.plugin_loader.unload_all_plugins()
        logger.info("Cleanup completed")

    def run(self) -> None:
        try:
            logger.info("Starting Discord bot...")
            self.hikari_bot.run()
        except KeyboardInterrupt:
            logger.info("Bot stopped by user")

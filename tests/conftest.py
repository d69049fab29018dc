"""Pytest configuration and shared fixtures."""

import datetime
import logging
import os
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time; keep a token around so importing never fails
os.environ.setdefault("DISCORD_TOKEN", "test-token")

import hikari
import lightbulb
import pytest

from bot.core.context_menus import ContextMenuRegistry
from bot.core.cooldowns import CooldownGate

# Disable logging during tests
logging.disable(logging.CRITICAL)

CREATED_AT = datetime.datetime(2022, 1, 1, tzinfo=datetime.timezone.utc)
JOINED_AT = datetime.datetime(2022, 1, 2, tzinfo=datetime.timezone.utc)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_hikari_bot():
    """Mock Hikari bot instance."""
    bot = MagicMock(spec=hikari.GatewayBot)
    bot.cache = MagicMock()
    bot.rest = MagicMock()
    bot.rest.create_message = AsyncMock()
    bot.rest.trigger_typing = AsyncMock()
    bot.rest.fetch_member = AsyncMock()
    bot.rest.fetch_user = AsyncMock()
    bot.rest.fetch_channel = AsyncMock()
    bot.rest.delete_messages = AsyncMock()
    bot.update_presence = AsyncMock()
    bot.get_me = MagicMock(return_value=MagicMock(id=12345, username="TestBot"))
    bot.heartbeat_latency = 0.05

    bot.cache.get_guild = MagicMock(return_value=None)
    bot.cache.get_user = MagicMock(return_value=None)
    bot.cache.get_member = MagicMock(return_value=None)
    bot.cache.get_guild_channel = MagicMock(return_value=None)
    bot.cache.get_guilds_view = MagicMock(return_value={})
    bot.cache.get_members_view_for_guild = MagicMock(return_value={})
    bot.cache.get_guild_channels_view_for_guild = MagicMock(return_value={})
    bot.cache.get_roles_view_for_guild = MagicMock(return_value={})

    return bot


@pytest.fixture
def mock_lightbulb_client():
    """Mock Lightbulb client instance."""
    return MagicMock(spec=lightbulb.Client)


@pytest.fixture
def mock_plugin_loader():
    loader = MagicMock()
    loader.get_loaded_plugins = MagicMock(return_value=[])
    loader.get_plugin_info = MagicMock(return_value=None)
    loader.plugins = {}
    return loader


@pytest.fixture
def mock_event_system():
    return MagicMock()


@pytest.fixture
def mock_bot(mock_hikari_bot, mock_lightbulb_client, mock_plugin_loader, mock_event_system, clock):
    """Mock complete bot instance with real cooldown and context menu bookkeeping."""
    bot = MagicMock()
    bot.hikari_bot = mock_hikari_bot
    bot.gateway = mock_hikari_bot
    bot.rest = mock_hikari_bot.rest
    bot.cache = mock_hikari_bot.cache
    bot.command_client = mock_lightbulb_client
    bot.plugin_loader = mock_plugin_loader
    bot.event_system = mock_event_system
    bot.miru_client = MagicMock()
    bot.cooldowns = CooldownGate(3.0, clock=clock)
    bot.context_menus = ContextMenuRegistry()
    return bot


@pytest.fixture
def mock_guild():
    """Mock Discord guild."""
    guild = MagicMock(spec=hikari.Guild)
    guild.id = 123456789
    guild.name = "Test Guild"
    guild.owner_id = 987654321
    guild.member_count = 100
    guild.get_role = MagicMock(return_value=None)
    return guild


@pytest.fixture
def mock_user():
    """Mock Discord user."""
    user = MagicMock(spec=hikari.User)
    user.id = 111111111
    user.username = "testuser"
    user.display_name = "Test User"
    user.is_bot = False
    user.created_at = CREATED_AT
    user.display_avatar_url = "https://example.com/avatar.png"
    user.mention = "<@111111111>"
    return user


@pytest.fixture
def mock_member(mock_user):
    """Mock Discord member."""
    member = MagicMock(spec=hikari.Member)
    member.id = mock_user.id
    member.username = mock_user.username
    member.display_name = mock_user.display_name
    member.nickname = None
    member.is_bot = mock_user.is_bot
    member.user = mock_user
    member.mention = mock_user.mention
    member.guild_id = 123456789
    member.joined_at = JOINED_AT
    member.role_ids = [222222222, 333333333]
    member.send = AsyncMock()
    return member


@pytest.fixture
def mock_channel():
    """Mock Discord channel."""
    channel = MagicMock(spec=hikari.GuildTextChannel)
    channel.id = 444444444
    channel.name = "test-channel"
    channel.type = hikari.ChannelType.GUILD_TEXT
    channel.mention = "<#444444444>"
    channel.permission_overwrites = {}
    return channel


@pytest.fixture
def mock_message_event(mock_user, mock_guild, mock_channel, mock_member):
    """Mock message create event."""
    event = MagicMock(spec=hikari.GuildMessageCreateEvent)
    event.author = mock_user
    event.member = mock_member
    event.guild_id = mock_guild.id
    event.channel_id = mock_channel.id
    event.content = "!test command"
    event.message = MagicMock()
    event.get_channel = MagicMock(return_value=mock_channel)
    return event


@pytest.fixture
def mock_context(mock_user, mock_guild, mock_channel, mock_member, mock_bot):
    """Mock command context."""
    ctx = MagicMock()
    ctx.author = mock_user
    ctx.user = mock_user
    ctx.member = mock_member
    ctx.guild_id = mock_guild.id
    ctx.channel_id = mock_channel.id
    ctx.bot = mock_bot
    ctx.get_guild = MagicMock(return_value=mock_guild)
    ctx.get_channel = MagicMock(return_value=mock_channel)
    ctx.respond = AsyncMock()
    ctx.respond_with_modal = AsyncMock()
    ctx.defer = AsyncMock()
    ctx.delete_response = AsyncMock()
    return ctx


class AsyncIter:
    """Async iterator over a fixed list, standing in for hikari's lazy iterators."""

    def __init__(self, items):
        self._items = list(items)

    def limit(self, count):
        return AsyncIter(self._items[:count])

    def __aiter__(self):
        self._iter = iter(self._items)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


@pytest.fixture
def async_iter():
    return AsyncIter

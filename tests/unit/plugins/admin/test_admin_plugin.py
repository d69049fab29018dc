"""Tests for the admin plugin: purge and say."""

from unittest.mock import AsyncMock, MagicMock, patch

import hikari
import pytest

from bot.core.message_handler import MessageCommandHandler
from bot.core.results import ResultKind
from plugins.admin import AdminPlugin
from plugins.admin.commands.channel import PURGE_FAILED, SAY_FAILED, delete_later
from plugins.admin.config import AdminSettings


@pytest.fixture
def plugin(mock_bot):
    mock_bot.message_handler = MessageCommandHandler(mock_bot)
    return AdminPlugin(mock_bot)


@pytest.fixture
def no_sleep():
    with patch("plugins.admin.commands.channel.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        yield mock_sleep


class TestAdminSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ADMIN_PURGE_MAX", raising=False)

        settings = AdminSettings(_env_file=None)

        assert settings.purge_default == 10
        assert settings.purge_max == 100
        assert settings.confirmation_delay == 5.0

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ADMIN_PURGE_MAX", "50")

        assert AdminSettings(_env_file=None).purge_max == 50


class TestPurge:
    """Test bulk deletion."""

    @pytest.mark.asyncio
    async def test_deletes_requested_messages(self, plugin, mock_context, async_iter, no_sleep):
        messages = [MagicMock() for _ in range(10)]
        plugin.bot.rest.fetch_messages = MagicMock(return_value=async_iter(messages))

        result = await plugin.purge(mock_context, 5)

        assert result is None
        plugin.bot.rest.fetch_messages.assert_called_once_with(mock_context.channel_id)
        plugin.bot.rest.delete_messages.assert_awaited_once_with(mock_context.channel_id, messages[:5])
        mock_context.respond.assert_awaited_once_with("✅ Deleted 5 messages.")
        no_sleep.assert_awaited_once_with(5.0)
        mock_context.delete_response.assert_awaited_once_with(mock_context.respond.return_value)

    @pytest.mark.asyncio
    async def test_reports_actual_count(self, plugin, mock_context, async_iter, no_sleep):
        plugin.bot.rest.fetch_messages = MagicMock(return_value=async_iter([MagicMock(), MagicMock()]))

        await plugin.purge(mock_context, 50)

        mock_context.respond.assert_awaited_once_with("✅ Deleted 2 messages.")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, -3, 101, None])
    async def test_out_of_range(self, plugin, mock_context, count):
        result = await plugin.purge(mock_context, count)

        assert result.kind is ResultKind.USER_INPUT
        assert result.reason == "Please provide a number between 1 and 100."
        plugin.bot.rest.delete_messages.assert_not_called()

    @pytest.mark.asyncio
    async def test_api_failure(self, plugin, mock_context, async_iter):
        plugin.bot.rest.fetch_messages = MagicMock(return_value=async_iter([MagicMock()]))
        plugin.bot.rest.delete_messages.side_effect = hikari.HikariError("messages too old")

        result = await plugin.purge(mock_context, 1)

        assert result.kind is ResultKind.API_ERROR
        assert result.reason == PURGE_FAILED
        assert result.details["count"] == "1"
        mock_context.respond.assert_not_called()

    @pytest.mark.asyncio
    async def test_prefix_purge_requires_administrator(self, plugin, mock_message_event):
        await plugin.on_load()
        mock_message_event.content = "!purge 5"

        await plugin.bot.message_handler.handle_message(mock_message_event)

        content = plugin.bot.rest.create_message.call_args.kwargs["content"]
        assert content == "⛔ You need the Administrator permission to use this command."
        plugin.bot.rest.delete_messages.assert_not_called()

    @pytest.mark.asyncio
    async def test_prefix_purge_rejects_non_number(self, plugin, mock_message_event, mock_member, mock_guild):
        mock_member.id = mock_guild.owner_id
        plugin.bot.cache.get_guild.return_value = mock_guild
        await plugin.on_load()
        mock_message_event.content = "!purge abc"

        await plugin.bot.message_handler.handle_message(mock_message_event)

        content = plugin.bot.rest.create_message.call_args.kwargs["content"]
        assert content.startswith("❌")
        plugin.bot.rest.fetch_messages.assert_not_called()
        plugin.bot.rest.delete_messages.assert_not_called()

    @pytest.mark.asyncio
    async def test_purge_is_hidden(self, plugin):
        await plugin.on_load()

        assert plugin.bot.message_handler.get_commands() == []
        assert plugin.bot.message_handler.get_command("purge").hidden is True


class TestDeleteLater:
    """Test removing the confirmation message."""

    @pytest.mark.asyncio
    async def test_prefix_message_deleted_directly(self, mock_context, no_sleep):
        message = MagicMock(spec=hikari.Message)
        message.delete = AsyncMock()

        await delete_later(mock_context, message, 1.0)

        message.delete.assert_awaited_once()
        mock_context.delete_response.assert_not_called()

    @pytest.mark.asyncio
    async def test_already_deleted(self, mock_context, no_sleep):
        mock_context.delete_response.side_effect = hikari.HikariError("unknown message")

        await delete_later(mock_context, 1234, 1.0)

        mock_context.delete_response.assert_awaited_once_with(1234)


class TestSay:
    """Test speaking through the bot."""

    @pytest.mark.asyncio
    async def test_sends_message(self, plugin, mock_context, mock_channel):
        result = await plugin.say(mock_context, mock_channel, "Hello everyone")

        plugin.bot.rest.create_message.assert_awaited_once_with(mock_channel.id, "Hello everyone")
        assert result.is_success is True
        assert result.reason == "Message sent!"

    @pytest.mark.asyncio
    async def test_requires_channel(self, plugin, mock_context):
        result = await plugin.say(mock_context, None, "Hello")

        assert result.reason == "Please mention the channel to send the message in."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [None, "", "   "])
    async def test_requires_message(self, plugin, mock_context, mock_channel, message):
        result = await plugin.say(mock_context, mock_channel, message)

        assert result.reason == "Please provide a message to send."
        plugin.bot.rest.create_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_failure(self, plugin, mock_context, mock_channel):
        plugin.bot.rest.create_message.side_effect = hikari.ForbiddenError(
            url="https://discord.com/api", headers={}, raw_body=""
        )

        result = await plugin.say(mock_context, mock_channel, "Hello")

        assert result.kind is ResultKind.API_ERROR
        assert result.reason == SAY_FAILED
        assert result.details["channel"] == str(mock_channel.id)

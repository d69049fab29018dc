"""Tests for the welcome plugin."""

from unittest.mock import patch

import hikari
import pytest

from bot.core.event_system import EventSystem
from plugins.welcome import PLUGIN_METADATA, WelcomePlugin, setup


def forbidden():
    return hikari.ForbiddenError(url="https://discord.com/api", headers={}, raw_body="")


class TestWelcomePlugin:
    """Test greeting new members."""

    def test_metadata(self):
        assert PLUGIN_METADATA["name"] == "Welcome"

    def test_default_message_from_settings(self, mock_bot):
        assert setup(mock_bot).message == "Welcome to the server!"

    @pytest.mark.asyncio
    async def test_sends_dm(self, mock_bot, mock_member):
        plugin = WelcomePlugin(mock_bot, message="Hi there!")

        await plugin.on_member_join(mock_member)

        mock_member.send.assert_awaited_once_with("Hi there!")

    @pytest.mark.asyncio
    async def test_skips_bots(self, mock_bot, mock_member):
        mock_member.is_bot = True

        await WelcomePlugin(mock_bot).on_member_join(mock_member)

        mock_member.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_closed_dms_logged(self, mock_bot, mock_member):
        mock_member.send.side_effect = forbidden()

        with patch("plugins.welcome.plugin.logger") as mock_logger:
            await WelcomePlugin(mock_bot).on_member_join(mock_member)

        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_listens_for_member_join(self, mock_bot, mock_member):
        mock_bot.event_system = EventSystem()
        plugin = WelcomePlugin(mock_bot)
        await plugin.on_load()

        await mock_bot.event_system.emit("member_join", mock_member)

        mock_member.send.assert_awaited_once_with("Welcome to the server!")

    @pytest.mark.asyncio
    async def test_unload_stops_listening(self, mock_bot, mock_member):
        mock_bot.event_system = EventSystem()
        plugin = WelcomePlugin(mock_bot)
        await plugin.on_load()
        await plugin.on_unload()

        assert await mock_bot.event_system.emit("member_join", mock_member) is None
        mock_member.send.assert_not_called()

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import hikari
import lightbulb

from bot.core.results import CommandResult
from bot.plugins.commands import CommandArgument, command

from ..utils import suggest_options
from ..views import EchoModal, OptionSelectView

if TYPE_CHECKING:
    from ..plugin import InteractionsPlugin

logger = logging.getLogger(__name__)


async def autocomplete_test_option(ctx: lightbulb.AutocompleteContext[str]) -> None:
    await ctx.respond(suggest_options(ctx.focused.value))


def setup_demo_commands(plugin: InteractionsPlugin) -> list[Callable[..., Any]]:
    """Slash-only commands demonstrating modals, autocomplete and select menus."""

    @command(name="echo", description="Echoes the input.", slash_only=True)
    async def echo(ctx: lightbulb.Context) -> None:
        modal = EchoModal(ctx.user.id)
        await ctx.respond_with_modal(modal.title, modal.custom_id, components=modal)
        plugin.miru.start_modal(modal)

    @command(
        name="test",
        description="Test the Slash Command AutoComplete",
        slash_only=True,
        arguments=[
            CommandArgument(
                "test",
                hikari.OptionType.STRING,
                "Sends test to generate the AutoComplete",
                autocomplete=autocomplete_test_option,
            )
        ],
    )
    async def test(ctx: lightbulb.Context, test: str | None = None) -> CommandResult | None:
        if not test or not test.strip():
            return CommandResult.user_error("Please pick one of the suggested options.")

        await ctx.defer(ephemeral=True)
        logger.info("Testing autocomplete in slash commands...")

        view = OptionSelectView(ctx.user.id, test.strip())
        await ctx.respond("Select an option:", components=view, flags=hikari.MessageFlag.EPHEMERAL)
        plugin.miru.start_view(view)
        return None

    return [echo, test]

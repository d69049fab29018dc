"""Miru components for the interactions plugin."""

import logging

import hikari
import miru

from .config import ECHO_EMPTY_TEXT, ECHO_MODAL_TITLE, MAX_OPTION_LABEL, VIEW_TIMEOUT

logger = logging.getLogger(__name__)

NOT_ALLOWED_MESSAGE = "You are not allowed to interact with this select menu."


class EchoModal(miru.Modal):
    """Asks for a paragraph of text and repeats it back privately."""

    echo = miru.TextInput(
        label="What to Echo?",
        style=hikari.TextInputStyle.PARAGRAPH,
        placeholder="Enter text to echo",
        required=False,
    )

    def __init__(self, user_id: int) -> None:
        super().__init__(ECHO_MODAL_TITLE, custom_id=f"echo_confirm:{user_id}")

    async def callback(self, ctx: miru.ModalContext) -> None:
        submitted = (self.echo.value or "").strip() or ECHO_EMPTY_TEXT
        await ctx.respond(f"You said: {submitted}", flags=hikari.MessageFlag.EPHEMERAL)


class OptionSelectView(miru.View):
    """Select menu offering the value picked through autocomplete, usable only by its owner."""

    def __init__(self, owner_id: int, choice: str, *, timeout: float = VIEW_TIMEOUT) -> None:
        super().__init__(timeout=timeout)
        self.owner_id = owner_id

        label = choice[:MAX_OPTION_LABEL]
        select = miru.TextSelect(
            placeholder="Select an option",
            custom_id=f"menu:{owner_id}",
            min_values=1,
            max_values=1,
            options=[miru.SelectOption(label=label, value=label, description=label)],
        )
        select.callback = self.on_select
        self.add_item(select)

    async def on_select(self, ctx: miru.ViewContext) -> None:
        if ctx.user.id != self.owner_id:
            await ctx.respond(NOT_ALLOWED_MESSAGE, flags=hikari.MessageFlag.EPHEMERAL)
            return

        select = self.children[0]
        selection = select.values[0] if select.values else None
        if selection is None:
            logger.warning(f"Select menu {select.custom_id} submitted without a value")
            return

        await ctx.respond(f"You selected {selection}.", flags=hikari.MessageFlag.EPHEMERAL)

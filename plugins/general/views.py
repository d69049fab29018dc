"""Miru views for the general plugin."""

import hikari
import miru

from .config import BUTTON_TIMEOUT

NOT_ALLOWED_MESSAGE = "You are not allowed to interact with this button."


class PingView(miru.View):
    """A single button only the user who ran ``ping`` may press."""

    def __init__(self, owner_id: int, *, timeout: float = BUTTON_TIMEOUT) -> None:
        super().__init__(timeout=timeout)
        self.owner_id = owner_id

        button = miru.Button(
            label="Click me!",
            style=hikari.ButtonStyle.PRIMARY,
            custom_id=f"button:{owner_id}",
        )
        button.callback = self.on_click
        self.add_item(button)

    async def on_click(self, ctx: miru.ViewContext) -> None:
        if ctx.user.id != self.owner_id:
            await ctx.respond(NOT_ALLOWED_MESSAGE, flags=hikari.MessageFlag.EPHEMERAL)
            return

        await ctx.respond("You clicked the button.")

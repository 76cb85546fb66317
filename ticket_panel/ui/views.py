import logging
from collections.abc import Awaitable, Callable

import discord
from discord import ui

from ticket_panel.ui.embeds import error_embed

CREATE_TICKET_ID = "create_ticket"
CLOSE_TICKET_ID = "close_ticket"

ButtonCallback = Callable[[discord.Interaction], Awaitable[None]]


class PersistentView(ui.View):
    """A base view that never times out and handles errors raised by its items.

    Every item must carry a fixed ``custom_id`` so the view keeps working after a
    restart once it has been registered with ``bot.add_view``.
    """

    def __init__(self) -> None:
        """Initialize the PersistentView."""
        super().__init__(timeout=None)
        self.log = logging.getLogger(__name__)

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: ui.Item) -> None:
        """Handle errors raised in view items."""
        self.log.error("Error in view %s item %s: %s", self, item, error, exc_info=error)

        embed = error_embed(description="Something went wrong!\nThe error has been logged for the developers.")

        if interaction.response.is_done():
            await interaction.followup.send(embed=embed, ephemeral=True)
        else:
            await interaction.response.send_message(embed=embed, ephemeral=True)


class TicketButtonView(PersistentView):
    """Persistent view holding a single button wired to a callback.

    This allows the ticket cog to keep the button logic while the view only describes
    how the button looks.
    """

    def __init__(
        self,
        custom_id: str,
        callback: ButtonCallback,
        *,
        label: str,
        style: discord.ButtonStyle = discord.ButtonStyle.primary,
    ) -> None:
        """Initialize the TicketButtonView.

        Args:
            custom_id: Fixed identifier Discord sends back when the button is pressed
            callback: Coroutine function called with the interaction on press
            label: Text label for the button
            style: Discord button style (primary, secondary, success, danger)
        """
        super().__init__()
        self.button_callback = callback

        button: ui.Button[TicketButtonView] = ui.Button(label=label, style=style, custom_id=custom_id)
        button.callback = self._on_press  # type: ignore[method-assign]
        self.add_item(button)

    async def _on_press(self, interaction: discord.Interaction) -> None:
        await self.button_callback(interaction)


def panel_view(callback: ButtonCallback) -> TicketButtonView:
    """Build the button row shown under the ticket panel."""
    return TicketButtonView(CREATE_TICKET_ID, callback, label="🎟 Create Ticket", style=discord.ButtonStyle.primary)


def close_view(callback: ButtonCallback) -> TicketButtonView:
    """Build the button row shown under a ticket's welcome message."""
    return TicketButtonView(CLOSE_TICKET_ID, callback, label="🗑 Close Ticket", style=discord.ButtonStyle.danger)

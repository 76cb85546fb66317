"""Opening and closing of ticket channels.

A ticket is just a text channel named ``ticket-<username>``; nothing about it is stored.
Closing posts a warning and deletes the channel after a fixed delay. Pending deletions
live in memory only, keyed by channel id, so they can be cancelled but do not survive a
restart.
"""

import asyncio
import functools
import logging
import random

import discord

from ticket_panel.store import ConfigStore
from ticket_panel.ui.embeds import welcome_embed
from ticket_panel.ui.views import close_view

from . import CLOSE_WARNING, QUOTES, ticket_channel_name


class TicketLifecycle:
    """Drives ticket channels from opened to closing to deleted."""

    def __init__(
        self,
        store: ConfigStore,
        *,
        close_delay: float = 5.0,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the TicketLifecycle.

        Args:
            store: Where guild ticket settings are read from
            close_delay: Seconds between the close warning and the channel deletion
            rng: Random source for quote selection
        """
        self.store = store
        self.close_delay = close_delay
        self.rng = rng or random.Random()
        self.log = logging.getLogger(__name__)
        self._pending: dict[int, asyncio.Task[None]] = {}

    @property
    def pending_closes(self) -> frozenset[int]:
        """Ids of channels waiting to be deleted."""
        return frozenset(self._pending)

    def pick_quote(self) -> str:
        """Pick one of the welcome quotes, repeats allowed."""
        return self.rng.choice(QUOTES)

    def find_ticket(self, guild: discord.Guild, username: str) -> discord.abc.GuildChannel | None:
        """Return ``username``'s open ticket channel in ``guild``, if any."""
        return discord.utils.get(guild.channels, name=ticket_channel_name(username))

    async def open_ticket(self, interaction: discord.Interaction) -> None:
        """Handle a press of the panel's "create ticket" button."""
        guild = interaction.guild
        if guild is None:
            await interaction.response.send_message("Tickets can only be opened inside a server.", ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True, thinking=True)

        config = self.store.get(guild.id)
        if config is None:
            await interaction.edit_original_response(content="Panel not set up.")
            return

        user = interaction.user
        # Lookup and creation are not atomic; two quick presses can both pass this check.
        if self.find_ticket(guild, user.name) is not None:
            await interaction.edit_original_response(content="You already have an open ticket.")
            return

        staff_role = guild.get_role(int(config.staff_role_id))
        if staff_role is None:
            self.log.warning("Staff role %s missing in guild %s", config.staff_role_id, guild.id)
            await interaction.edit_original_response(
                content="The configured staff role no longer exists. Ask an administrator to run setup again."
            )
            return

        overwrites = {
            guild.default_role: discord.PermissionOverwrite(view_channel=False),
            staff_role: discord.PermissionOverwrite(view_channel=True, send_messages=True),
            user: discord.PermissionOverwrite(view_channel=True, send_messages=True),
        }
        channel = await guild.create_text_channel(ticket_channel_name(user.name), overwrites=overwrites)
        self.log.info("Opened ticket %s for user %s (ID: %s) in guild %s", channel.name, user, user.id, guild.id)

        view = close_view(self.close_from_button)
        await channel.send(content=user.mention, embed=welcome_embed(config, user.name, self.pick_quote()), view=view)
        # The persistent close view registered at startup handles presses; don't keep one per ticket.
        view.stop()
        await interaction.edit_original_response(content=f"Your ticket: {channel.mention}")

    async def close_from_button(self, interaction: discord.Interaction) -> None:
        """Handle a press of a ticket's "close ticket" button.

        The presser is acknowledged right away; the deletion happens later.
        """
        channel = interaction.channel
        if not isinstance(channel, discord.TextChannel):
            await interaction.response.send_message("This button only works in a ticket channel.", ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True, thinking=True)
        await self.schedule_close(channel)
        await interaction.edit_original_response(content="Ticket will close soon.")

    async def schedule_close(self, channel: discord.TextChannel) -> None:
        """Warn in ``channel`` and delete it once the close delay has passed."""
        await channel.send(CLOSE_WARNING.format(delay=self.close_delay))

        if channel.id in self._pending:
            self.log.info("Ticket channel %s is already closing", channel.id)
            return

        task = asyncio.create_task(self._delete_later(channel), name=f"close-ticket-{channel.id}")
        task.add_done_callback(functools.partial(self._forget, channel.id))
        self._pending[channel.id] = task
        self.log.info("Scheduled deletion of ticket channel %s in %ss", channel.id, self.close_delay)

    def cancel_close(self, channel_id: int) -> bool:
        """Cancel a pending deletion.

        Returns:
            True if a deletion was pending for ``channel_id``.
        """
        task = self._pending.pop(channel_id, None)
        if task is None:
            return False

        task.cancel()
        self.log.info("Cancelled deletion of ticket channel %s", channel_id)
        return True

    def cancel_all(self) -> None:
        """Cancel every pending deletion."""
        for channel_id in list(self._pending):
            self.cancel_close(channel_id)

    async def _delete_later(self, channel: discord.TextChannel) -> None:
        await asyncio.sleep(self.close_delay)
        try:
            await channel.delete(reason="Ticket closed")
        except discord.NotFound:
            self.log.info("Ticket channel %s was already deleted", channel.id)
            return
        except discord.HTTPException:
            self.log.exception("Failed to delete ticket channel %s", channel.id)
            return

        self.log.info("Deleted ticket channel %s (ID: %s)", channel.name, channel.id)

    def _forget(self, channel_id: int, task: asyncio.Task[None]) -> None:
        if self._pending.get(channel_id) is task:
            del self._pending[channel_id]

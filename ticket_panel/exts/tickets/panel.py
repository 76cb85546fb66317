"""Ticket panel cog.

Prefix commands:
- ``setup @role #RRGGBB [image URL]``: save the guild's staff role, color and banner
- ``panel``: post the panel with the "create ticket" button
- ``status``: count the open ticket channels
- ``close``: close the ticket channel the command was sent in
"""

import itertools
import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, cast

import discord
from discord.ext import commands

from ticket_panel.config import settings
from ticket_panel.errors import UserFriendlyError
from ticket_panel.store import COLOR_PATTERN, ConfigStore, GuildConfig
from ticket_panel.ui.embeds import panel_embed
from ticket_panel.ui.views import close_view, panel_view

from . import is_ticket_channel
from .lifecycle import TicketLifecycle

if TYPE_CHECKING:
    from ticket_panel.bot import Bot

MEDIA_URL_PATTERN = re.compile(r"^https?:.*\.(?:gif|png|jpe?g)$")


def parse_setup_args(args: Sequence[str]) -> tuple[str | None, str | None]:
    """Pick the color and banner URL out of the ``setup`` arguments.

    Tokens may come in any order; the first match of each kind wins.

    Returns:
        ``(color, media_url)``, either of which may be None.
    """
    color = next((arg for arg in args if COLOR_PATTERN.match(arg)), None)
    media_url = next((arg for arg in args if MEDIA_URL_PATTERN.match(arg)), None)
    return color, media_url


def _is_admin(member: discord.abc.User) -> bool:
    return isinstance(member, discord.Member) and member.guild_permissions.administrator


class TicketPanel(commands.Cog):
    """Cog for configuring the ticket panel and managing ticket channels."""

    def __init__(self, bot: commands.Bot, store: ConfigStore, *, close_delay: float = 5.0) -> None:
        """Initialize the TicketPanel cog."""
        self.bot = bot
        self.store = store
        self.lifecycle = TicketLifecycle(store, close_delay=close_delay)
        self.log = logging.getLogger(__name__)
        self.log.info("TicketPanel cog initialized")

    async def cog_load(self) -> None:
        """Register the ticket buttons so panels posted before a restart keep working."""
        self.bot.add_view(panel_view(self.lifecycle.open_ticket))
        self.bot.add_view(close_view(self.lifecycle.close_from_button))

    async def cog_unload(self) -> None:
        """Drop any pending ticket deletions."""
        self.lifecycle.cancel_all()

    async def cog_check(self, ctx: commands.Context) -> bool:  # type: ignore[override]
        """Only respond inside guilds."""
        if ctx.guild is None:
            raise commands.NoPrivateMessage
        return True

    @commands.command(name="setup")
    async def setup_command(self, ctx: commands.Context, *, raw: str = "") -> None:
        """Save the staff role, accent color and optional banner for this guild.

        The rest of the message is taken as-is and split on whitespace, so quote marks are plain text.
        """
        args = raw.split()
        if not _is_admin(ctx.author):
            msg = f"{ctx.author} ran setup without administrator"
            raise UserFriendlyError(msg, "Administrator perms needed!")

        role = ctx.message.role_mentions[0] if ctx.message.role_mentions else None
        color, media_url = parse_setup_args(args)
        if role is None or color is None:
            msg = f"setup called with unusable arguments: {args!r}"
            usage = f"Usage: {ctx.clean_prefix}setup @staff #hexColor [optional direct image URL]"
            raise UserFriendlyError(msg, usage)

        guild = cast("discord.Guild", ctx.guild)
        config = GuildConfig(staff_role_id=role.id, accent_color=color, banner_media_url=media_url)
        self.store.set(guild.id, config)
        self.log.info("Ticket panel configured in guild %s by %s (ID: %s)", guild.id, ctx.author, ctx.author.id)

        await ctx.reply(
            f"Setup saved! Staff: {role.mention}, Color: {config.accent_color}, GIF: {config.banner_media_url}"
        )

    @commands.command(name="panel")
    async def panel(self, ctx: commands.Context) -> None:
        """Post the ticket panel in the current channel."""
        if not _is_admin(ctx.author):
            msg = f"{ctx.author} ran panel without administrator"
            raise UserFriendlyError(msg, "Admins only!")

        guild = cast("discord.Guild", ctx.guild)
        config = self.store.get(guild.id)
        if config is None:
            msg = f"panel called before setup in guild {guild.id}"
            raise UserFriendlyError(msg, f"Run {ctx.clean_prefix}setup first.")

        view = panel_view(self.lifecycle.open_ticket)
        await ctx.send(embed=panel_embed(config), view=view)
        # Presses on this message are served by the view registered in cog_load.
        view.stop()

    @commands.command(name="status")
    async def status(self, ctx: commands.Context) -> None:
        """Report how many ticket channels and threads are open."""
        guild = cast("discord.Guild", ctx.guild)
        count = sum(1 for channel in itertools.chain(guild.channels, guild.threads) if is_ticket_channel(channel))
        await ctx.reply(f"Currently {count} open ticket(s).")

    @commands.command(name="close")
    async def close(self, ctx: commands.Context) -> None:
        """Close the ticket channel this command was sent in."""
        channel = ctx.channel
        if not is_ticket_channel(channel) or not isinstance(channel, discord.TextChannel):
            msg = f"close used outside a ticket channel ({channel.id})"
            raise UserFriendlyError(msg, "Use this inside a ticket channel!")

        if not (_is_admin(ctx.author) or channel.permissions_for(cast("discord.Member", ctx.author)).view_channel):
            msg = f"{ctx.author} may not close {channel.name}"
            raise UserFriendlyError(msg, "Cannot close this ticket.")

        await self.lifecycle.schedule_close(channel)


async def setup(bot: "Bot") -> None:
    """Set up the TicketPanel cog."""
    await bot.add_cog(TicketPanel(bot, bot.config_store, close_delay=settings.close_delay_seconds))

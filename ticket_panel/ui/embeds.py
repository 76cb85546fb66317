"""Embed factory functions for the ticket panel and error replies."""

import discord

from ticket_panel.store import GuildConfig

# Color of error replies
STATUS_ERROR = discord.Color.red()

PANEL_TITLE = "🎫 Need Help?"
PANEL_DESCRIPTION = "Click below to open a support ticket!"


def error_embed(title: str = "❌ Error", description: str | None = None) -> discord.Embed:
    """Create an error embed.

    Args:
        title: The embed title
        description: Optional description

    Returns:
        A red embed describing what went wrong
    """
    return discord.Embed(title=title, description=description, color=STATUS_ERROR)


def panel_embed(config: GuildConfig) -> discord.Embed:
    """Create the embed members see above the "create ticket" button.

    Args:
        config: The guild's ticket panel settings

    Returns:
        An embed in the guild's accent color showing its banner
    """
    embed = discord.Embed(title=PANEL_TITLE, description=PANEL_DESCRIPTION, color=config.color_value)
    embed.set_image(url=config.banner_media_url)
    return embed


def welcome_embed(config: GuildConfig, username: str, quote: str) -> discord.Embed:
    """Create the greeting posted as the first message of a new ticket channel.

    Args:
        config: The guild's ticket panel settings
        username: Name of the member who opened the ticket
        quote: Motivational quote shown as the body

    Returns:
        An embed in the guild's accent color showing its banner
    """
    embed = discord.Embed(title=f"Hi {username}, how can we help?", description=quote, color=config.color_value)
    embed.set_image(url=config.banner_media_url)
    return embed

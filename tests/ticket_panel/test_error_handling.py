from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest
from discord.ext import commands

from ticket_panel.bot import Bot
from ticket_panel.errors import UserFriendlyError
from ticket_panel.store import MemoryConfigStore


@pytest.fixture
def bot():
    intents = discord.Intents.default()
    b = Bot(MemoryConfigStore(), serve_liveness=False, command_prefix="!", intents=intents)
    b.log = MagicMock()
    return b


@pytest.fixture
def ctx():
    c = MagicMock(spec=commands.Context)
    c.command = None
    c.reply = AsyncMock()
    c.send = AsyncMock()
    return c


@pytest.mark.asyncio
async def test_on_command_error_user_friendly(bot, ctx):
    error = UserFriendlyError("Internal", "User Message")
    command_error = commands.CommandInvokeError(error)

    await bot.on_command_error(ctx, command_error)

    ctx.reply.assert_called_once()
    args, kwargs = ctx.reply.call_args
    embed = kwargs.get("embed") or args[0]
    assert embed.description == "User Message"


@pytest.mark.asyncio
async def test_on_command_error_generic(bot, ctx):
    ctx.command = MagicMock()
    ctx.command.module = "ticket_panel.exts.tickets.panel"

    error = Exception("Unexpected")
    command_error = commands.CommandInvokeError(error)

    with patch("logging.getLogger") as mock_get_logger:
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger
        await bot.on_command_error(ctx, command_error)
        mock_get_logger.assert_called_with("ticket_panel.exts.tickets.panel")
        mock_logger.exception.assert_called_once()

    ctx.reply.assert_called_once()
    args, kwargs = ctx.reply.call_args
    embed = kwargs.get("embed") or args[0]
    assert "An unexpected error occurred" in embed.description


@pytest.mark.asyncio
async def test_on_command_error_fallback_logger(bot, ctx):
    error = Exception("Unexpected")
    command_error = commands.CommandInvokeError(error)

    await bot.on_command_error(ctx, command_error)

    bot.log.exception.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [commands.CommandNotFound('Command "nope" is not found'), commands.NoPrivateMessage()],
)
async def test_on_command_error_ignores_unknown_commands_and_dms(bot, ctx, error):
    await bot.on_command_error(ctx, error)

    ctx.reply.assert_not_called()
    ctx.send.assert_not_called()
    bot.log.exception.assert_not_called()

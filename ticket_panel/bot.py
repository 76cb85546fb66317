import logging
from typing import Any

from aiohttp import web
from discord.ext import commands

from ticket_panel.config import settings
from ticket_panel.errors import UserFriendlyError
from ticket_panel.liveness import start_liveness_server
from ticket_panel.store import ConfigStore
from ticket_panel.ui.embeds import error_embed

EXTENSIONS = ("ticket_panel.exts.tickets.panel",)

# Unknown commands and DMs get no reply at all
SILENT_ERRORS = (commands.CommandNotFound, commands.NoPrivateMessage)


class Bot(commands.Bot):
    """Bot class for the ticket panel."""

    def __init__(
        self,
        config_store: ConfigStore,
        *,
        serve_liveness: bool = True,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """Initialize the bot.

        Args:
            config_store: Loaded guild configuration shared with the extensions.
            serve_liveness: Whether to start the HTTP liveness endpoint in ``setup_hook``.
            **kwargs: Passed through to ``commands.Bot``.
        """
        super().__init__(**kwargs)
        self.config_store = config_store
        self.serve_liveness = serve_liveness
        self.liveness_runner: web.AppRunner | None = None
        self.log = logging.getLogger(__name__)

    async def setup_hook(self) -> None:
        """Run before the bot starts."""
        if self.serve_liveness:
            self.liveness_runner = await start_liveness_server(settings.liveness_host, settings.liveness_port)
        await self.load_extensions()

    async def close(self) -> None:
        """Close bot resources before shutting down."""
        if self.liveness_runner is not None:
            await self.liveness_runner.cleanup()
            self.liveness_runner = None
        await super().close()

    async def on_ready(self) -> None:
        """Log once the gateway session is ready."""
        self.log.info("Bot online as %s", self.user)

    def _get_logger_for_command(self, command: commands.Command | None) -> logging.Logger:
        if command and hasattr(command, "module") and command.module:
            return logging.getLogger(command.module)
        return self.log

    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError) -> None:
        """Handle errors in prefix commands."""
        if isinstance(error, SILENT_ERRORS):
            return

        actual_error = error
        if isinstance(error, commands.CommandInvokeError):
            actual_error = error.original

        if isinstance(actual_error, UserFriendlyError):
            self.log.debug("Rejected command: %s", actual_error)
            embed = error_embed(description=actual_error.user_message)
            await ctx.reply(embed=embed)
            return

        # Generic error handling
        logger = self._get_logger_for_command(ctx.command)
        logger.exception("Prefix command error: %s", error, exc_info=actual_error)
        embed = error_embed(description="An unexpected error occurred. Please try again later.")
        await ctx.reply(embed=embed)

    async def load_extensions(self) -> None:
        """Load all enabled extensions."""
        for extension in EXTENSIONS:
            try:
                await self.load_extension(extension)
                self.log.info("Loaded extension: %s", extension)
            except Exception:
                self.log.exception("Failed to load extension: %s", extension)

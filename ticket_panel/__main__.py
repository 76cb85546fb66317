import discord

from ticket_panel.bot import Bot
from ticket_panel.config import settings
from ticket_panel.logging import setup_logging
from ticket_panel.store import JsonConfigStore


def main() -> None:
    """Main function to run the application."""
    setup_logging(settings.log_level)

    # A broken configuration file stops the process here, before logging in.
    store = JsonConfigStore(settings.config_path)
    store.load()

    intents = discord.Intents.default()
    intents.message_content = True

    bot = Bot(
        store,
        command_prefix=settings.prefix,
        intents=intents,
        help_command=None,
        strip_after_prefix=True,
    )
    bot.run(settings.token, log_handler=None)


if __name__ == "__main__":
    main()

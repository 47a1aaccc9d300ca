"""
Module: quickedit/main.py

Entry point for the QuickEdit Discord Bot.
Builds the bot, constructs the interaction dispatcher and runs the event loop.
"""
import sys

from quickedit.config import (
    DISCORD_BOT_TOKEN, DISCORD_APPLICATION_ID, GUILD_IDS,
    RUN_MODE, COMMAND_PACKAGES, LOG_LEVEL,
)
from quickedit.bot_context import create_bot, attach_events
from quickedit.dispatcher import InteractionDispatcher
from quickedit.registry import RegistryConfig
from quickedit.utils import log_message, set_log_level, install_library_logging


def main():
    if not DISCORD_BOT_TOKEN:
        raise EnvironmentError("Missing DISCORD_BOT_TOKEN in .env file")

    set_log_level(LOG_LEVEL)
    install_library_logging()

    bot = create_bot(GUILD_IDS)
    dispatcher = InteractionDispatcher(
        bot,
        RegistryConfig(run_mode=RUN_MODE, guild_ids=tuple(GUILD_IDS)),
        command_packages=COMMAND_PACKAGES,
    )
    attach_events(bot, dispatcher, application_id=DISCORD_APPLICATION_ID)

    log_message(f"Bot is starting up (run mode: {RUN_MODE.value})...")
    bot.run(DISCORD_BOT_TOKEN)

    if not dispatcher.is_initialized:
        log_message("Bot stopped before commands were registered.", "critical")
        sys.exit(1)


if __name__ == "__main__":
    main()

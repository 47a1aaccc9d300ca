"""
Module: quickedit/bot_context.py

Builds the Discord bot and attaches the lifecycle event handlers that drive
the InteractionDispatcher.
"""
import traceback

import nextcord
from nextcord.ext import commands

from quickedit.utils import log_message


def create_bot(guild_ids=()):
    """
    Create the nextcord bot with default intents.

    With `guild_ids`, commands that name no guilds of their own are
    registered to those guilds instead of globally.
    """
    intents = nextcord.Intents.default()
    return commands.Bot(intents=intents, default_guild_ids=list(guild_ids) or None)


def invite_url(application_id):
    """
    Build the OAuth2 invite URL for the bot, or None without an application ID.
    """
    if not application_id:
        return None
    perms = nextcord.Permissions()
    perms.send_messages = True
    perms.view_channel = True
    perms.read_message_history = True
    return nextcord.utils.oauth_url(
        client_id=application_id,
        permissions=perms,
        scopes=["bot", "applications.commands"]
    )


def attach_events(bot, dispatcher, application_id=None):
    """
    Register lifecycle handlers on `bot`.

    The dispatcher is initialized on the first ready event only. If that fails
    the bot is closed, so `bot.run()` returns with the dispatcher uninitialized.
    """

    @bot.event
    async def on_ready():
        """
        Handler for the bot's ready event.

        Logs bot identity and initializes the dispatcher once per process.
        """
        log_message(f'Logged in as {bot.user.name} ({bot.user.id})', "info")
        if dispatcher.is_initialized:
            return
        try:
            await dispatcher.initialize()
        except Exception:
            await bot.close()
            raise

        url = invite_url(application_id)
        if url:
            from colorama import Fore, Style
            print(f"{Fore.CYAN}Bot invite URL: {Fore.YELLOW}{url}{Style.RESET_ALL}")

    @bot.event
    async def on_error(event_method, *args, **kwargs):
        """
        Catch-all handler for unhandled errors in any event.

        Logs the event method name and full traceback.
        """
        tb = traceback.format_exc()
        log_message(f"Unhandled error in event {event_method}: {tb}", "error")

    @bot.event
    async def on_guild_join(guild):
        log_message(f"Joined new guild: {guild.name} ({guild.id})", "info")

    @bot.event
    async def on_guild_remove(guild):
        log_message(f"Removed from guild: {guild.name} ({guild.id})", "warning")

    @bot.event
    async def on_disconnect():
        log_message("Bot disconnected from Discord.", "warning")

    @bot.event
    async def on_resumed():
        log_message("Bot resumed connection.", "info")

    return bot

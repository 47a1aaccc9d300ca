"""
Module: quickedit/commands/help.py

Provides the `/help` slash command listing every registered application command.
"""
import nextcord
from nextcord.ext import commands

from quickedit.utils import log_message


def build_help_embed(app_commands, command=None):
    """
    Build the help embed.

    Without `command`, lists all commands sorted by name. With `command`,
    shows only that one. Returns None if the named command does not exist.
    """
    by_name = {cmd.name: cmd for cmd in app_commands if getattr(cmd, "name", None)}
    if command:
        if command not in by_name:
            return None
        selected = [by_name[command]]
        title = f"📚 /{command}"
    else:
        selected = [by_name[name] for name in sorted(by_name)]
        title = "📚 Help"

    embed = nextcord.Embed(
        title=title,
        description="Here are the available commands:" if not command else None,
        color=nextcord.Color.green()
    )
    for cmd in selected:
        embed.add_field(name=f"/{cmd.name}", value=cmd.description or "No description", inline=False)
    return embed


class HelpCog(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    @nextcord.slash_command(name="help", description="List the available commands")
    async def show_help(
        self,
        interaction: nextcord.Interaction,
        command: str = nextcord.SlashOption(
            description="Show help for a single command", required=False
        )
    ):
        embed = build_help_embed(self.bot.get_all_application_commands(), command)
        if embed is None:
            await interaction.response.send_message(f"❌ Unknown command: {command}", ephemeral=True)
            return

        log_message(
            f"User {interaction.user.name} ({interaction.user.id}) accessed help: {command or 'general'}",
            "info"
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)

"""
Module: quickedit/commands/about.py

Defines `/about` to show basic bot info, runtime settings, and a support link.
"""
import nextcord
from nextcord import ui, ButtonStyle
from nextcord.ext import commands

from quickedit import __version__
from quickedit.config import GUILD_MODE, RUN_MODE, SUPPORT_INVITE_URL
from quickedit.utils import log_message


class AboutLinksView(ui.View):
    def __init__(self, support_invite_url: str | None):
        super().__init__(timeout=60)
        if support_invite_url:
            self.add_item(ui.Button(label="Join Support Server", style=ButtonStyle.link, url=support_invite_url))


def build_about_embed(guild_mode=GUILD_MODE, run_mode=RUN_MODE, support_invite_url=SUPPORT_INVITE_URL):
    """
    Build the `/about` embed from the current settings.
    """
    desc_lines = [
        "A Discord bot for quick edits through slash commands.",
    ]
    if support_invite_url:
        desc_lines.append("Support: see the button below to join the support server.")

    embed = nextcord.Embed(
        title="QuickEdit",
        description="\n".join(desc_lines),
        color=nextcord.Color.blurple(),
    )
    embed.add_field(
        name="Status",
        value=(
            f"Version: **{__version__}**\n"
            f"Guild mode: **{'ON' if guild_mode else 'OFF'}**\n"
            f"Run mode: **{run_mode.value}**\n"
            f"Library: **nextcord {getattr(nextcord, '__version__', 'unknown')}**"
        ),
        inline=False,
    )
    embed.set_footer(text="Use /help for commands")
    return embed


class AboutCog(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    @nextcord.slash_command(name="about", description="About this bot")
    async def about(self, interaction: nextcord.Interaction):
        """
        Show basic info about the bot with an optional support server button.
        """
        embed = build_about_embed()
        view = AboutLinksView(SUPPORT_INVITE_URL)

        log_message(
            f"User {interaction.user.display_name} ({interaction.user.id}) opened /about",
            "info"
        )
        await interaction.response.send_message(embed=embed, view=view, ephemeral=True)

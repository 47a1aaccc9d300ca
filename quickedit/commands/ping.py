"""
Module: quickedit/commands/ping.py

Defines `/ping`, reporting the gateway latency.
"""
import math

import nextcord
from nextcord.ext import commands


def format_latency(latency):
    if latency is None or math.isnan(latency) or math.isinf(latency):
        return "🏓 Pong! Latency unknown."
    return f"🏓 Pong! {round(latency * 1000)} ms"


class PingCog(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    @nextcord.slash_command(name="ping", description="Check that the bot is responding")
    async def ping(self, interaction: nextcord.Interaction):
        await interaction.response.send_message(format_latency(self.bot.latency), ephemeral=True)

"""
Information commands for the bot: /ping, /stats, /perks
"""

import logging
import math

import discord
from discord import app_commands
from discord.ext import commands

from domain.models.command import CommandRateLimitPolicy, ScopeLimit, create_command
from domain.models.interaction import InteractionContext
from domain.models.permission import Permission
from utils.interaction_context import context_from_interaction
from utils.interaction_safety import safe_defer

logger = logging.getLogger("gate_bot.commands.info")

PING_POLICY = CommandRateLimitPolicy(
    global_scope=ScopeLimit.per_seconds(120, 60, strict=False),
    user_scope=ScopeLimit.per_seconds(1, 5),
)

STATS_POLICY = CommandRateLimitPolicy(
    guild_scope=ScopeLimit.per_seconds(5, 60),
    user_scope=ScopeLimit.per_seconds(2, 30),
)


class InfoCommands(commands.Cog):
    """General information commands, all routed through the dispatcher."""

    def __init__(self, bot: commands.Bot, dispatcher, telemetry_service, command_registry=None):
        self.bot = bot
        self.dispatcher = dispatcher
        self.telemetry_service = telemetry_service
        self.command_registry = command_registry

    def cog_unload(self):
        """Drop this cog's descriptors so a reload can register them again."""
        if self.command_registry is not None:
            for descriptor in self.descriptors():
                self.command_registry.unregister(descriptor.name)

    def descriptors(self):
        """CommandDescriptors served by this cog."""
        ping = create_command(
            "ping",
            description="Check that the bot is responsive",
            ratelimit=PING_POLICY,
        )(self.run_ping)
        stats = create_command(
            "stats",
            description="Show how many commands the bot has run",
            required_bot_permissions=(Permission.SEND_MESSAGES, Permission.EMBED_LINKS),
            ratelimit=STATS_POLICY,
        )(self.run_stats)
        perks = create_command(
            "perks",
            description="Show your premium perks",
            premium_only=True,
        )(self.run_perks)
        return [ping, stats, perks]

    # -- handlers -------------------------------------------------------------

    async def run_ping(self, ctx: InteractionContext) -> None:
        latency = getattr(self.bot, "latency", float("nan"))
        if latency is None or math.isnan(latency) or math.isinf(latency):
            await ctx.reply("🏓 Pong!")
            return
        await ctx.reply(f"🏓 Pong! Gateway latency: {round(latency * 1000)}ms")

    async def run_stats(self, ctx: InteractionContext) -> None:
        stats = await self.telemetry_service.get_stats()
        lines = [
            "📊 **Command statistics**",
            f"Executed: {stats['commands_executed']}",
            f"Failed: {stats['commands_failed']}",
        ]
        await ctx.reply("\n".join(lines))

    async def run_perks(self, ctx: InteractionContext) -> None:
        await ctx.reply(
            "⭐ You have premium! Premium commands are unlocked for you.",
            ephemeral=True,
        )

    # -- discord surface ------------------------------------------------------

    @app_commands.command(name="ping", description="Check that the bot is responsive")
    async def ping(self, interaction: discord.Interaction):
        await safe_defer(interaction)
        await self.dispatcher.dispatch(context_from_interaction(interaction))

    @app_commands.command(name="stats", description="Show how many commands the bot has run")
    async def stats(self, interaction: discord.Interaction):
        await safe_defer(interaction)
        await self.dispatcher.dispatch(context_from_interaction(interaction))

    @app_commands.command(name="perks", description="Show your premium perks")
    async def perks(self, interaction: discord.Interaction):
        await safe_defer(interaction, ephemeral=True)
        await self.dispatcher.dispatch(context_from_interaction(interaction))


async def setup(bot: commands.Bot):
    """Setup function called when loading the cog."""
    cog = InfoCommands(
        bot,
        dispatcher=getattr(bot, "dispatcher", None),
        telemetry_service=getattr(bot, "telemetry_service", None),
        command_registry=getattr(bot, "command_registry", None),
    )
    if cog.command_registry is not None:
        for descriptor in cog.descriptors():
            cog.command_registry.register(descriptor, replace=True)
    await bot.add_cog(cog)

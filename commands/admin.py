"""
Owner and helper commands: premium grants, command toggles, rate-limit resets.
"""

import asyncio
import logging

import discord
from discord import app_commands
from discord.ext import commands

from domain.models.command import create_command
from domain.models.interaction import InteractionContext
from utils.interaction_context import context_from_interaction
from utils.interaction_safety import safe_defer

logger = logging.getLogger("gate_bot.commands.admin")


class AdminCommands(commands.Cog):
    """Owner-only and helper-only slash commands."""

    def __init__(
        self,
        bot: commands.Bot,
        dispatcher,
        command_registry,
        permission_service,
        rate_limiter_registry,
    ):
        self.bot = bot
        self.dispatcher = dispatcher
        self.command_registry = command_registry
        self.permission_service = permission_service
        self.rate_limiter_registry = rate_limiter_registry

    def cog_unload(self):
        """Drop this cog's descriptors so a reload can register them again."""
        if self.command_registry is not None:
            for descriptor in self.descriptors():
                self.command_registry.unregister(descriptor.name)

    def descriptors(self):
        """CommandDescriptors served by this cog."""
        premium = create_command(
            "premium",
            description="Grant, revoke or check premium for a user (Owner only)",
            super_user_only=True,
        )(self.run_premium)
        toggle = create_command(
            "toggle-command",
            description="Enable or disable a command (Owner only)",
            super_user_only=True,
        )(self.run_toggle_command)
        reset = create_command(
            "ratelimit-reset",
            description="Clear rate limits for a command (Helpers only)",
            helper_user_only=True,
        )(self.run_ratelimit_reset)
        return [premium, toggle, reset]

    # -- handlers -------------------------------------------------------------

    async def run_premium(self, ctx: InteractionContext) -> None:
        action = ctx.options.get("action", "check")
        user_id = ctx.options["user_id"]
        days = ctx.options.get("days")

        if action == "grant":
            result = await asyncio.to_thread(
                self.permission_service.grant_premium, user_id, ctx.user_id, days
            )
            if not result:
                await ctx.reply(f"❌ {result.error}", ephemeral=True)
                return
            suffix = f" for {days} day(s)" if days else ""
            await ctx.reply(f"✅ Granted premium to <@{user_id}>{suffix}.", ephemeral=True)
        elif action == "revoke":
            result = await asyncio.to_thread(self.permission_service.revoke_premium, user_id)
            if not result:
                await ctx.reply(f"❌ {result.error}", ephemeral=True)
                return
            await ctx.reply(f"✅ Revoked premium from <@{user_id}>.", ephemeral=True)
        else:
            has_premium = await self.permission_service.is_premium(user_id)
            status = "has" if has_premium else "does not have"
            await ctx.reply(f"<@{user_id}> {status} premium.", ephemeral=True)

    async def run_toggle_command(self, ctx: InteractionContext) -> None:
        name = ctx.options["command"].lstrip("/")
        enabled = ctx.options["enabled"]

        if name not in self.command_registry:
            await ctx.reply(f"❌ Unknown command `/{name}`.", ephemeral=True)
            return

        self.command_registry.set_disabled(name, not enabled)
        state = "enabled" if enabled else "disabled"
        logger.info(f"/{name} {state} by {ctx.user_id}")
        await ctx.reply(f"✅ `/{name}` is now {state}.", ephemeral=True)

    async def run_ratelimit_reset(self, ctx: InteractionContext) -> None:
        name = (ctx.options.get("command") or "").lstrip("/")
        if name:
            self.rate_limiter_registry.reset(name)
            await ctx.reply(f"✅ Cleared rate limits for `/{name}`.", ephemeral=True)
        else:
            self.rate_limiter_registry.reset()
            await ctx.reply("✅ Cleared all rate limits.", ephemeral=True)

    # -- discord surface ------------------------------------------------------

    @app_commands.command(
        name="premium", description="Grant, revoke or check premium for a user (Owner only)"
    )
    @app_commands.describe(
        action="What to do",
        user="The user to update",
        days="How long the grant lasts (omit for permanent)",
    )
    @app_commands.choices(
        action=[
            app_commands.Choice(name="Grant", value="grant"),
            app_commands.Choice(name="Revoke", value="revoke"),
            app_commands.Choice(name="Check", value="check"),
        ]
    )
    async def premium(
        self,
        interaction: discord.Interaction,
        action: app_commands.Choice[str],
        user: discord.User,
        days: int | None = None,
    ):
        await safe_defer(interaction, ephemeral=True)
        options = {"action": action.value, "user_id": user.id, "days": days}
        await self.dispatcher.dispatch(context_from_interaction(interaction, options))

    @app_commands.command(name="toggle-command", description="Enable or disable a command (Owner only)")
    @app_commands.describe(command="Command name, e.g. stats", enabled="Whether it should be usable")
    async def toggle_command(self, interaction: discord.Interaction, command: str, enabled: bool):
        await safe_defer(interaction, ephemeral=True)
        options = {"command": command, "enabled": enabled}
        await self.dispatcher.dispatch(context_from_interaction(interaction, options))

    @app_commands.command(
        name="ratelimit-reset", description="Clear rate limits for a command (Helpers only)"
    )
    @app_commands.describe(command="Command name; omit to clear every command")
    async def ratelimit_reset(self, interaction: discord.Interaction, command: str | None = None):
        await safe_defer(interaction, ephemeral=True)
        options = {"command": command}
        await self.dispatcher.dispatch(context_from_interaction(interaction, options))


async def setup(bot: commands.Bot):
    if "AdminCommands" in [cog.__class__.__name__ for cog in bot.cogs.values()]:
        logger.warning("AdminCommands cog is already loaded, skipping duplicate registration")
        return

    cog = AdminCommands(
        bot,
        dispatcher=getattr(bot, "dispatcher", None),
        command_registry=getattr(bot, "command_registry", None),
        permission_service=getattr(bot, "permission_service", None),
        rate_limiter_registry=getattr(bot, "rate_limiter_registry", None),
    )
    if cog.command_registry is not None:
        for descriptor in cog.descriptors():
            cog.command_registry.register(descriptor, replace=True)
    await bot.add_cog(cog)

"""
discord.py adapter: turns a discord.Interaction into an InteractionContext.
"""

from typing import Any

import discord

from domain.models.interaction import InteractionContext
from domain.models.permission import permissions_from_discord
from services.interfaces import IResponseChannel
from utils.interaction_safety import safe_followup


class DiscordResponseChannel(IResponseChannel):
    """Replies through the interaction's response or followup webhook."""

    def __init__(self, interaction: discord.Interaction):
        self.interaction = interaction

    async def reply(self, text: str, *, ephemeral: bool = False) -> None:
        await safe_followup(self.interaction, content=text, ephemeral=ephemeral)


def _member_permissions(interaction: discord.Interaction):
    if interaction.guild is None:
        return None
    # Member.guild_permissions is not channel-aware; interaction.permissions is
    perms = getattr(interaction, "permissions", None)
    if perms is None:
        perms = getattr(interaction.user, "guild_permissions", None)
    return permissions_from_discord(perms) if perms is not None else None


def context_from_interaction(
    interaction: discord.Interaction, options: dict[str, Any] | None = None
) -> InteractionContext:
    """Build the gate's view of an application-command interaction."""
    command = getattr(interaction, "command", None)
    if command is not None:
        name = command.qualified_name
    else:
        name = (interaction.data or {}).get("name", "")
    return InteractionContext(
        command_name=name,
        user_id=interaction.user.id,
        user_tag=str(interaction.user),
        guild_id=interaction.guild.id if interaction.guild else None,
        bot_permissions=permissions_from_discord(getattr(interaction, "app_permissions", None)),
        member_permissions=_member_permissions(interaction),
        options=dict(options or {}),
        channel=DiscordResponseChannel(interaction),
    )

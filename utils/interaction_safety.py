"""
Helpers for answering Discord interactions without tripping over their state.

An interaction can be answered once through interaction.response; anything
after that (or after a defer) must go through interaction.followup.
"""

import logging

import discord

logger = logging.getLogger("gate_bot.utils.interaction_safety")


async def safe_defer(interaction: discord.Interaction, *, ephemeral: bool = False) -> bool:
    """Defer the response if not already answered. Returns False if deferring failed."""
    try:
        if interaction.response.is_done():
            return True
        await interaction.response.defer(ephemeral=ephemeral)
        return True
    except discord.HTTPException as exc:
        logger.warning(f"Failed to defer interaction {interaction.id}: {exc}")
        return False


async def safe_followup(interaction: discord.Interaction, **kwargs):
    """
    Send a message for an interaction, using the initial response if it is
    still available and a followup otherwise.
    """
    if not interaction.response.is_done():
        await interaction.response.send_message(**kwargs)
        return None
    return await interaction.followup.send(**kwargs)

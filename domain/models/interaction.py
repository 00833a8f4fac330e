"""
Platform-neutral view of an inbound slash-command interaction.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from domain.models.permission import PermissionSet

if TYPE_CHECKING:
    from services.interfaces import IResponseChannel


@dataclass
class InteractionContext:
    """
    What the gate chain and command handlers see of an interaction.

    guild_id is None outside a guild. member_permissions is None when there
    is no guild member (DMs), which fails any user-permission requirement.
    """

    command_name: str
    user_id: int
    channel: "IResponseChannel"
    user_tag: str = ""
    guild_id: int | None = None
    bot_permissions: PermissionSet = frozenset()
    member_permissions: PermissionSet | None = None
    options: dict[str, Any] = field(default_factory=dict)

    async def reply(self, text: str, *, ephemeral: bool = False) -> None:
        await self.channel.reply(text, ephemeral=ephemeral)

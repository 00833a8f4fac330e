"""
Permission model used by the authorization gate.

Permissions are a finite enum whose values match the attribute names on
discord.Permissions, so a permission set is just a frozenset of members and
"has every required permission" is a subset check.
"""

from collections.abc import Iterable
from enum import Enum


class Permission(Enum):
    """Discord permissions the bot's commands may require."""

    ADMINISTRATOR = "administrator"
    VIEW_CHANNEL = "view_channel"
    SEND_MESSAGES = "send_messages"
    EMBED_LINKS = "embed_links"
    ATTACH_FILES = "attach_files"
    READ_MESSAGE_HISTORY = "read_message_history"
    ADD_REACTIONS = "add_reactions"
    USE_EXTERNAL_EMOJIS = "use_external_emojis"
    MANAGE_MESSAGES = "manage_messages"
    MANAGE_ROLES = "manage_roles"
    MANAGE_CHANNELS = "manage_channels"
    MANAGE_GUILD = "manage_guild"
    MANAGE_EVENTS = "manage_events"
    KICK_MEMBERS = "kick_members"
    BAN_MEMBERS = "ban_members"
    MODERATE_MEMBERS = "moderate_members"

    @property
    def display_name(self) -> str:
        """Name shown to users, e.g. EMBED_LINKS."""
        return self.name


PermissionSet = frozenset[Permission]


def has_permissions(granted: Iterable[Permission] | None, required: Iterable[Permission]) -> bool:
    """True if every required permission is present in granted. None grants nothing."""
    required_set = frozenset(required)
    if not required_set:
        return True
    if granted is None:
        return False
    return required_set <= frozenset(granted)


def missing_permissions(
    granted: Iterable[Permission] | None, required: Iterable[Permission]
) -> list[Permission]:
    """Required permissions absent from granted, in the order they were required."""
    granted_set = frozenset(granted or ())
    return [perm for perm in required if perm not in granted_set]


def format_permissions(permissions: Iterable[Permission]) -> str:
    return ", ".join(perm.display_name for perm in permissions)


def permissions_from_discord(perms) -> PermissionSet:
    """
    Convert a discord.Permissions (or any object exposing the same boolean
    attributes) into a PermissionSet. Returns an empty set for None.
    """
    if perms is None:
        return frozenset()
    return frozenset(perm for perm in Permission if getattr(perms, perm.value, False))

"""
Domain models - pure data structures describing commands and interactions.
"""

from domain.models.command import (
    CommandDescriptor,
    CommandRateLimitPolicy,
    ScopeLimit,
    create_command,
)
from domain.models.interaction import InteractionContext
from domain.models.permission import Permission, has_permissions

__all__ = [
    "CommandDescriptor",
    "CommandRateLimitPolicy",
    "ScopeLimit",
    "create_command",
    "InteractionContext",
    "Permission",
    "has_permissions",
]

"""
In-memory command registry.
"""

import dataclasses
import logging

from domain.models.command import CommandDescriptor
from services.interfaces import ICommandRegistry

logger = logging.getLogger("gate_bot.services.command_registry")


class CommandRegistry(ICommandRegistry):
    """
    Holds the CommandDescriptor for every slash command the bot serves.

    Descriptors are immutable; toggling a command swaps in a copy.
    """

    def __init__(self):
        self._commands: dict[str, CommandDescriptor] = {}

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def register(self, descriptor: CommandDescriptor, *, replace: bool = False) -> CommandDescriptor:
        """
        Add a descriptor. A name can only be registered once unless replace is
        set, which swaps in the new descriptor (used when an extension reloads).
        """
        if descriptor.name in self._commands:
            if not replace:
                raise ValueError(f"Command '{descriptor.name}' is already registered")
            logger.info(f"Replacing registered command /{descriptor.name}")
        self._commands[descriptor.name] = descriptor
        logger.debug(f"Registered command /{descriptor.name}")
        return descriptor

    def unregister(self, name: str) -> CommandDescriptor | None:
        return self._commands.pop(name, None)

    def lookup(self, name: str) -> CommandDescriptor | None:
        return self._commands.get(name)

    def all(self) -> list[CommandDescriptor]:
        return sorted(self._commands.values(), key=lambda d: d.name)

    def set_disabled(self, name: str, disabled: bool) -> CommandDescriptor:
        """Enable or disable a registered command. Raises ValueError if unknown."""
        current = self._commands.get(name)
        if current is None:
            raise ValueError(f"Unknown command '{name}'")
        updated = dataclasses.replace(current, disabled=disabled)
        self._commands[name] = updated
        logger.info(f"Command /{name} {'disabled' if disabled else 'enabled'}")
        return updated

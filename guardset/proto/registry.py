"""Registry of guard descriptors."""

import logging

from .programs import ProgramRegistry
from .types import GuardDescriptor, ProgramDescriptor

logger = logging.getLogger(__name__)


class UnregisteredGuardError(RuntimeError):
    """Raised when a guard name has no registered descriptor."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No guard named {name!r} is registered")
        self.name = name


class GuardRegistry:
    """Ordered guard descriptors, resolved by name.

    Registering a name twice keeps both entries; lookups return the one
    registered first.

    Example:
        registry = GuardRegistry(programs)
        registry.register(bot_tax, lamports)
        guards = registry.available_for("CandyGuardProgram")
    """

    def __init__(self, programs: ProgramRegistry) -> None:
        self._programs = programs
        self._guards: list[GuardDescriptor] = []

    def register(self, *guards: GuardDescriptor) -> None:
        """Append one or more guard descriptors."""
        for guard in guards:
            if any(existing.name == guard.name for existing in self._guards):
                logger.warning("Guard %s is already registered, keeping the first", guard.name)
            else:
                logger.debug("Registering guard %s", guard.name)
            self._guards.append(guard)

    def get(self, name: str) -> GuardDescriptor:
        """Return the first descriptor registered under ``name``."""
        for guard in self._guards:
            if guard.name == name:
                return guard
        raise UnregisteredGuardError(name)

    def all(self) -> list[GuardDescriptor]:
        """Return every descriptor in registration order."""
        return list(self._guards)

    def available_for(self, program: str | ProgramDescriptor) -> list[GuardDescriptor]:
        """Return the guards a program accepts, in the program's wire order.

        Args:
            program: A program name, address, or descriptor.

        Raises:
            UnregisteredProgramError: The program identity is unknown.
            UnregisteredGuardError: The program lists a guard that was never
                registered.
        """
        descriptor = self._programs.resolve(program)
        return [self.get(name) for name in descriptor.available_guards]

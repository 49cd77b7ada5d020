"""Registry of program descriptors, looked up by name or address."""

import logging

from .types import ProgramDescriptor

logger = logging.getLogger(__name__)


class UnregisteredProgramError(RuntimeError):
    """Raised when no registered program matches an identity."""

    def __init__(self, identity: str) -> None:
        super().__init__(f"No program named or located at {identity!r} is registered")
        self.identity = identity


class ProgramRegistry:
    """Ordered collection of the programs a client knows about."""

    def __init__(self) -> None:
        self._programs: list[ProgramDescriptor] = []

    def register(self, *programs: ProgramDescriptor) -> None:
        """Append programs, keeping registration order."""
        for program in programs:
            logger.debug("Registering program %s (%s)", program.name, program.address)
            self._programs.append(program)

    def get(self, identity: str) -> ProgramDescriptor:
        """Return the first program whose name or address is ``identity``."""
        for program in self._programs:
            if identity in (program.name, program.address):
                return program
        raise UnregisteredProgramError(identity)

    def all(self) -> list[ProgramDescriptor]:
        return list(self._programs)

    def resolve(self, program: str | ProgramDescriptor) -> ProgramDescriptor:
        """Return ``program`` itself if it is a descriptor, else look it up."""
        if isinstance(program, ProgramDescriptor):
            return program
        return self.get(program)

"""Client facade tying programs, guards and the settings codec together."""

from collections.abc import Mapping, Sequence
from typing import Any

from .groups import GroupCodec
from .programs import ProgramRegistry
from .registry import GuardRegistry
from .settings import SettingsCodec
from .types import DecodedGuards, GuardDescriptor, ProgramDescriptor

DEFAULT_PROGRAM = "CandyGuardProgram"


class GuardsClient:
    """Owns the guard and program registries of one session.

    Guards and programs are registered once, during installation. After that
    the client is only read, and serialize/deserialize calls may run
    concurrently.

    Example:
        client = GuardsClient()
        client.programs.register(program)
        client.register(*guards)
        data = client.serialize_settings({"botTax": BotTax(100, True)})
        guards, groups = client.deserialize_settings(data)
    """

    def __init__(self, programs: ProgramRegistry | None = None) -> None:
        self.programs = programs if programs is not None else ProgramRegistry()
        self.registry = GuardRegistry(self.programs)

    def register(self, *guards: GuardDescriptor) -> None:
        self.registry.register(*guards)

    def get(self, name: str) -> GuardDescriptor:
        return self.registry.get(name)

    def all(self) -> list[GuardDescriptor]:
        return self.registry.all()

    def for_program(
        self, program: str | ProgramDescriptor = DEFAULT_PROGRAM
    ) -> list[GuardDescriptor]:
        return self.registry.available_for(program)

    def codec_for(self, program: str | ProgramDescriptor = DEFAULT_PROGRAM) -> GroupCodec:
        """Build the codec matching a program's guard order and presence format."""
        descriptor = self.programs.resolve(program)
        guards = self.registry.available_for(descriptor)
        return GroupCodec(SettingsCodec(guards, descriptor.presence))

    def serialize_settings(
        self,
        guards: Mapping[str, Any],
        groups: Sequence[Mapping[str, Any]] = (),
        program: str | ProgramDescriptor = DEFAULT_PROGRAM,
    ) -> bytes:
        """Pack base settings and groups for a program.

        Args:
            guards: Guard name to settings, None or missing means disabled.
            groups: Additional settings sets sharing the same guard order.
            program: Program name, address, or descriptor.

        Returns:
            The encoded settings.
        """
        return self.codec_for(program).serialize(guards, groups)

    def deserialize_settings(
        self, data: bytes | memoryview, program: str | ProgramDescriptor = DEFAULT_PROGRAM
    ) -> DecodedGuards:
        """Unpack settings previously packed for the same program."""
        decoded, _ = self.codec_for(program).deserialize(data)
        return decoded

"""Runtime descriptors for guards and the programs that recognise them.

A guard descriptor pairs a guard name with the encoder and decoder of its
settings. A program descriptor lists, in wire order, the guards one deployed
program accepts.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple

Encoder = Callable[[Any], bytes]
Decoder = Callable[[bytes | memoryview, int], tuple[Any, int]]


class PresenceFormat(StrEnum):
    """How a settings record marks which guards are enabled."""

    INTERLEAVED = "interleaved"  # one presence byte before each guard payload
    BITMASK = "bitmask"  # legacy: 8-byte feature block ahead of the payloads


@dataclass(frozen=True, slots=True)
class GuardDescriptor:
    """Describes one guard kind and how its settings go on the wire.

    ``settings_bytes`` is informational. The number of bytes a decoder reports
    as consumed is what advances the cursor.
    """

    name: str
    settings_bytes: int
    encode: Encoder
    decode: Decoder


@dataclass(frozen=True, slots=True)
class ProgramDescriptor:
    """Describes a program and the ordered guards it accepts."""

    name: str
    available_guards: tuple[str, ...]
    address: str | None = None
    presence: PresenceFormat = PresenceFormat.INTERLEAVED


class DecodedGuards(NamedTuple):
    """Base settings set plus the group settings sets that follow it."""

    guards: dict[str, Any]
    groups: list[dict[str, Any]]

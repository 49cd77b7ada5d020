"""Serialization primitives shared by the settings codec and generated guards."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self

from dataclasses_json import DataClassJsonMixin, config


class SerializationError(RuntimeError):
    """Raised when serialization or deserialization fails."""


class TruncatedBufferError(SerializationError):
    """Raised when a read needs more bytes than the buffer holds."""


class MalformedPresenceFlagError(SerializationError):
    """Raised when a presence byte is neither 0 nor 1."""


def require(data: bytes | memoryview, offset: int, size: int, what: str) -> None:
    """Fail unless ``size`` bytes are readable at ``offset``."""
    remaining = len(data) - offset
    if remaining < size:
        raise TruncatedBufferError(
            f"{what} needs {size} bytes at offset {offset}, {max(remaining, 0)} left"
        )


@dataclass(frozen=True)
class GuardFieldInfo:
    """Metadata for a guard settings field."""

    guard_type: str
    size: int | None = None  # only set for bytes[N]
    optional: bool = False


BYTES_TYPES = frozenset(["bytes", "pubkey"])


def _hex_encode(value: bytes | None) -> str | None:
    return value.hex() if value is not None else None


def _hex_decode(value: str | None) -> bytes | None:
    return bytes.fromhex(value) if value is not None else None


def settings_field(type: str, *, size: int | None = None, optional: bool = False) -> Any:
    """Define a guard settings field with serialization metadata.

    Args:
        type: The wire type of the field (e.g., "uint64", "pubkey", "bytes").
        size: Exact length for ``bytes`` fields.
        optional: Whether the field is prefixed with a one byte option tag.

    Returns:
        A dataclass field with guardset metadata attached. Raw byte fields are
        rendered as hex strings in JSON.
    """
    metadata: dict[str, Any] = {"guardset": GuardFieldInfo(type, size, optional)}
    if type in BYTES_TYPES:
        metadata.update(config(encoder=_hex_encode, decoder=_hex_decode))
    return field(metadata=metadata)


class GuardSettings(DataClassJsonMixin):
    """Base class for generated guard settings types.

    Subclasses are @dataclass decorated and define fields using
    settings_field().

    Example:
        @dataclass
        class BotTax(GuardSettings):
            lamports: int = settings_field(type="uint64")
            last_instruction: bool = settings_field(type="bool")
    """

    def pack(self) -> bytes:
        """Pack these settings to bytes. Generated code overrides this."""
        raise NotImplementedError("pack() must be implemented by generated code")

    @classmethod
    def unpack(cls, data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        """Unpack settings from bytes.

        Args:
            data: The bytes to unpack from.
            offset: Starting offset in data.

        Returns:
            Tuple of (instance, bytes_consumed).
        """
        raise NotImplementedError("unpack() must be implemented by generated code")


class GuardEnum(Enum):
    """Base class for enums used inside guard settings."""

    def pack(self) -> bytes:
        """Pack enum value. Generated code overrides this."""
        raise NotImplementedError("pack() must be implemented by generated code")

    @classmethod
    def unpack(cls, data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        """Unpack enum from bytes.

        Returns:
            Tuple of (enum member, bytes_consumed).
        """
        raise NotImplementedError("unpack() must be implemented by generated code")

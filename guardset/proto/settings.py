"""Settings record codec.

A record holds the settings of every available guard, in the order the
program declares them. Two presence layouts exist:

    interleaved:  [flag:u8 payload?] for each guard
    bitmask:      [features:8 bytes] [payload] for each enabled guard
"""

import logging
import struct
from collections.abc import Mapping, Sequence
from typing import Any

from .flags import pack_flags, unpack_flags
from .serialization import (
    MalformedPresenceFlagError,
    SerializationError,
    TruncatedBufferError,
    require,
)
from .types import GuardDescriptor, PresenceFormat

logger = logging.getLogger(__name__)

FEATURE_BYTES = 8


def read_flag(data: bytes | memoryview, offset: int, what: str) -> bool:
    """Read a one byte presence flag."""
    require(data, offset, 1, what)
    flag = data[offset]
    if flag not in (0, 1):
        raise MalformedPresenceFlagError(f"{what} is {flag}, expected 0 or 1")
    return flag == 1


def _encode(guard: GuardDescriptor, value: Any) -> bytes:
    try:
        return guard.encode(value)
    except struct.error as exc:
        raise SerializationError(f"Cannot encode {guard.name} settings: {exc}") from exc


def _decode(guard: GuardDescriptor, data: bytes | memoryview, offset: int) -> tuple[Any, int]:
    try:
        value, consumed = guard.decode(data, offset)
    except struct.error as exc:
        raise TruncatedBufferError(f"{guard.name} settings at offset {offset}: {exc}") from exc

    if offset + consumed > len(data):
        raise TruncatedBufferError(
            f"{guard.name} settings at offset {offset} claim {consumed} bytes, "
            f"{len(data) - offset} left"
        )
    return value, consumed


class SettingsCodec:
    """Packs and unpacks one settings record against an ordered guard list."""

    def __init__(
        self,
        guards: Sequence[GuardDescriptor],
        presence: PresenceFormat = PresenceFormat.INTERLEAVED,
    ) -> None:
        self._guards = tuple(guards)
        self._presence = PresenceFormat(presence)

        if self._presence == PresenceFormat.BITMASK and len(self._guards) > FEATURE_BYTES * 8:
            raise SerializationError(
                f"Bitmask records hold at most {FEATURE_BYTES * 8} guards, got {len(self._guards)}"
            )

    @property
    def guards(self) -> tuple[GuardDescriptor, ...]:
        return self._guards

    @property
    def presence(self) -> PresenceFormat:
        return self._presence

    def serialize_set(self, settings: Mapping[str, Any]) -> bytes:
        """Pack a settings set into one record.

        A guard is enabled when its key maps to anything other than None.
        """
        names = {guard.name for guard in self._guards}
        for name in settings:
            if name not in names:
                logger.warning("Ignoring settings for %s, not available to this program", name)

        values = [settings.get(guard.name) for guard in self._guards]
        _buf = bytearray()

        if self._presence == PresenceFormat.BITMASK:
            _buf.extend(pack_flags([value is not None for value in values], FEATURE_BYTES))

        for guard, value in zip(self._guards, values):
            if self._presence == PresenceFormat.INTERLEAVED:
                _buf.append(0 if value is None else 1)
            if value is not None:
                _buf.extend(_encode(guard, value))

        return bytes(_buf)

    def deserialize_set(
        self, data: bytes | memoryview, offset: int = 0
    ) -> tuple[dict[str, Any], int]:
        """Unpack one record.

        Args:
            data: The bytes to unpack from.
            offset: Starting offset in data.

        Returns:
            Tuple of (settings, bytes_consumed). Every available guard is a
            key of settings; disabled guards map to None.
        """
        _o = offset
        features: list[bool] = []

        if self._presence == PresenceFormat.BITMASK:
            require(data, _o, FEATURE_BYTES, "feature flags")
            features = unpack_flags(data[_o : _o + FEATURE_BYTES])
            _o += FEATURE_BYTES

        settings: dict[str, Any] = {}
        for index, guard in enumerate(self._guards):
            if self._presence == PresenceFormat.BITMASK:
                enabled = features[index]
            else:
                enabled = read_flag(data, _o, f"{guard.name} presence flag")
                _o += 1

            if not enabled:
                settings[guard.name] = None
                continue

            settings[guard.name], consumed = _decode(guard, data, _o)
            _o += consumed

        return settings, _o - offset

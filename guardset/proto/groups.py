"""Base settings plus repeated groups.

    [base record][group prefix][group record]*

The interleaved layout prefixes groups with ``0x00`` (none) or ``0x01``
followed by a u32 little-endian count. The legacy bitmask layout always
writes the bare u32 count.
"""

import logging
import struct
from collections.abc import Mapping, Sequence
from typing import Any

from .serialization import SerializationError, require
from .settings import SettingsCodec, read_flag
from .types import DecodedGuards, PresenceFormat

logger = logging.getLogger(__name__)

GROUP_COUNT = struct.Struct("<I")
MAX_GROUPS = 2**32 - 1


class GroupCodec:
    """Wraps a SettingsCodec to add the group section."""

    def __init__(self, settings: SettingsCodec) -> None:
        self._settings = settings

    @property
    def settings(self) -> SettingsCodec:
        return self._settings

    def serialize(
        self, guards: Mapping[str, Any], groups: Sequence[Mapping[str, Any]] = ()
    ) -> bytes:
        """Pack the base settings followed by every group."""
        if len(groups) > MAX_GROUPS:
            raise SerializationError(f"{len(groups)} groups exceed the u32 group count")

        _buf = bytearray(self._settings.serialize_set(guards))
        _buf.extend(self._pack_group_count(len(groups)))
        for group in groups:
            _buf.extend(self._settings.serialize_set(group))
        return bytes(_buf)

    def deserialize(
        self, data: bytes | memoryview, offset: int = 0
    ) -> tuple[DecodedGuards, int]:
        """Unpack the base settings and groups.

        Returns:
            Tuple of (decoded guards, bytes_consumed). Bytes after the last
            group are left alone.
        """
        _o = offset
        guards, consumed = self._settings.deserialize_set(data, _o)
        _o += consumed

        count, consumed = self._unpack_group_count(data, _o)
        _o += consumed

        groups: list[dict[str, Any]] = []
        for _ in range(count):
            group, consumed = self._settings.deserialize_set(data, _o)
            _o += consumed
            groups.append(group)

        if _o < len(data):
            logger.debug("%d trailing bytes after settings", len(data) - _o)

        return DecodedGuards(guards, groups), _o - offset

    def _pack_group_count(self, count: int) -> bytes:
        if self._settings.presence == PresenceFormat.BITMASK:
            return GROUP_COUNT.pack(count)
        if count == 0:
            return b"\x00"
        return b"\x01" + GROUP_COUNT.pack(count)

    def _unpack_group_count(self, data: bytes | memoryview, offset: int) -> tuple[int, int]:
        if offset == len(data):
            # Settings written before groups existed end after the base record
            logger.debug("No group section after the base settings")
            return 0, 0

        _o = offset
        if self._settings.presence == PresenceFormat.INTERLEAVED:
            has_groups = read_flag(data, _o, "group flag")
            _o += 1
            if not has_groups:
                return 0, _o - offset

        require(data, _o, GROUP_COUNT.size, "group count")
        (count,) = GROUP_COUNT.unpack_from(data, _o)
        _o += GROUP_COUNT.size
        return count, _o - offset

"""Bit packing for the legacy feature-flag block."""

from collections.abc import Sequence


def pack_flags(flags: Sequence[bool], byte_length: int) -> bytes:
    """Pack flags least significant bit first into exactly ``byte_length`` bytes.

    Flags that do not fit in ``byte_length`` bytes are dropped, missing bytes
    are zero.
    """
    output = bytearray(byte_length)
    for index, flag in enumerate(flags):
        byte_index = index // 8
        if byte_index >= byte_length:
            break
        if flag:
            output[byte_index] |= 1 << (index % 8)
    return bytes(output)


def unpack_flags(data: bytes | memoryview) -> list[bool]:
    """Expand every byte into 8 flags, least significant bit first."""
    return [bool(byte >> bit & 1) for byte in bytes(data) for bit in range(8)]

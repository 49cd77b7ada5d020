"""Tests for feature flag bit packing."""

from guardset.proto import pack_flags, unpack_flags


def describe_pack_flags():
    def packs_least_significant_bit_first(expect):
        expect(pack_flags([True, False, True], 1)) == b"\x05"

    def spills_into_following_bytes(expect):
        flags = [False] * 8 + [True]
        expect(pack_flags(flags, 2)) == b"\x00\x01"

    def pads_to_requested_length(expect):
        expect(pack_flags([True], 8)) == b"\x01" + b"\x00" * 7

    def truncates_to_requested_length(expect):
        expect(pack_flags([True] * 16, 1)) == b"\xff"

    def packs_nothing(expect):
        expect(pack_flags([], 0)) == b""


def describe_unpack_flags():
    def expands_every_byte_to_eight_flags(expect):
        expect(unpack_flags(b"\x81")) == [True, False, False, False, False, False, False, True]

    def accepts_memoryview(expect):
        expect(len(unpack_flags(memoryview(b"\x00\x00")))) == 16

    def inverts_pack_flags(expect):
        for length in (0, 1, 7, 8, 9, 31, 64):
            flags = [index % 3 == 0 for index in range(length)]
            byte_length = (length + 7) // 8
            unpacked = unpack_flags(pack_flags(flags, byte_length))
            expect(unpacked[:length]) == flags
            expect(any(unpacked[length:])) == False
            expect(len(unpacked)) == byte_length * 8

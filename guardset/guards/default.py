"""Generated guard settings definitions."""

import struct as _struct
from dataclasses import dataclass
from typing import Self

from guardset.proto import (
    GuardDescriptor,
    GuardEnum,
    GuardSettings,
    PresenceFormat,
    ProgramDescriptor,
    SerializationError,
    require,
    settings_field,
)


class WhitelistTokenMode(GuardEnum):
    BurnEveryTime = 0
    NeverBurn = 1

    def pack(self) -> bytes:
        return _struct.pack("<B", self.value)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        require(_data, offset, 1, "WhitelistTokenMode")
        _value, = _struct.unpack_from("<B", _data, offset)
        try:
            return cls(_value), 1
        except ValueError as exc:
            raise SerializationError(f"{_value} is not a valid WhitelistTokenMode") from exc


class EndSettingType(GuardEnum):
    Date = 0
    Amount = 1

    def pack(self) -> bytes:
        return _struct.pack("<B", self.value)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        require(_data, offset, 1, "EndSettingType")
        _value, = _struct.unpack_from("<B", _data, offset)
        try:
            return cls(_value), 1
        except ValueError as exc:
            raise SerializationError(f"{_value} is not a valid EndSettingType") from exc


@dataclass
class BotTax(GuardSettings):
    lamports: int = settings_field(type="uint64")
    last_instruction: bool = settings_field(type="bool")

    def pack(self) -> bytes:
        _buf = bytearray()
        _buf.extend(_struct.pack("<Q?", self.lamports, self.last_instruction))
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 9, "lamports, last_instruction")
        lamports, last_instruction = _struct.unpack_from("<Q?", _data, _o)
        _o += 9
        return cls(lamports, last_instruction), _o - offset


@dataclass
class Lamports(GuardSettings):
    amount: int = settings_field(type="uint64")
    destination: bytes = settings_field(type="pubkey")

    def pack(self) -> bytes:
        _buf = bytearray()
        _buf.extend(_struct.pack("<Q", self.amount))
        if not isinstance(self.destination, (bytes, bytearray)):
            raise SerializationError("destination must be bytes")
        if len(self.destination) != 32:
            raise SerializationError("destination must be 32 bytes")
        _buf.extend(self.destination)
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 8, "amount")
        amount, = _struct.unpack_from("<Q", _data, _o)
        _o += 8
        require(_data, _o, 32, "destination")
        destination = bytes(_data[_o:_o + 32])
        _o += 32
        return cls(amount, destination), _o - offset


@dataclass
class SplToken(GuardSettings):
    amount: int = settings_field(type="uint64")
    token_mint: bytes = settings_field(type="pubkey")
    destination_ata: bytes = settings_field(type="pubkey")

    def pack(self) -> bytes:
        _buf = bytearray()
        _buf.extend(_struct.pack("<Q", self.amount))
        if not isinstance(self.token_mint, (bytes, bytearray)):
            raise SerializationError("token_mint must be bytes")
        if len(self.token_mint) != 32:
            raise SerializationError("token_mint must be 32 bytes")
        _buf.extend(self.token_mint)
        if not isinstance(self.destination_ata, (bytes, bytearray)):
            raise SerializationError("destination_ata must be bytes")
        if len(self.destination_ata) != 32:
            raise SerializationError("destination_ata must be 32 bytes")
        _buf.extend(self.destination_ata)
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 8, "amount")
        amount, = _struct.unpack_from("<Q", _data, _o)
        _o += 8
        require(_data, _o, 32, "token_mint")
        token_mint = bytes(_data[_o:_o + 32])
        _o += 32
        require(_data, _o, 32, "destination_ata")
        destination_ata = bytes(_data[_o:_o + 32])
        _o += 32
        return cls(amount, token_mint, destination_ata), _o - offset


@dataclass
class LiveDate(GuardSettings):
    date: int | None = settings_field(type="int64", optional=True)

    def pack(self) -> bytes:
        _buf = bytearray()
        if self.date is None:
            _buf.append(0)
        else:
            _buf.append(1)
            _buf.extend(_struct.pack("<q", self.date))
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 1, "date option tag")
        _tag_date = _data[_o]
        _o += 1
        if _tag_date == 0:
            date = None
        elif _tag_date == 1:
            require(_data, _o, 8, "date")
            date, = _struct.unpack_from("<q", _data, _o)
            _o += 8
        else:
            raise SerializationError(f"date option tag is {_tag_date}")
        return cls(date), _o - offset


@dataclass
class ThirdPartySigner(GuardSettings):
    signer_key: bytes = settings_field(type="pubkey")

    def pack(self) -> bytes:
        _buf = bytearray()
        if not isinstance(self.signer_key, (bytes, bytearray)):
            raise SerializationError("signer_key must be bytes")
        if len(self.signer_key) != 32:
            raise SerializationError("signer_key must be 32 bytes")
        _buf.extend(self.signer_key)
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 32, "signer_key")
        signer_key = bytes(_data[_o:_o + 32])
        _o += 32
        return cls(signer_key), _o - offset


@dataclass
class Whitelist(GuardSettings):
    mint: bytes = settings_field(type="pubkey")
    presale: bool = settings_field(type="bool")
    discount_price: int | None = settings_field(type="uint64", optional=True)
    mode: WhitelistTokenMode = settings_field(type="WhitelistTokenMode")

    def pack(self) -> bytes:
        _buf = bytearray()
        if not isinstance(self.mint, (bytes, bytearray)):
            raise SerializationError("mint must be bytes")
        if len(self.mint) != 32:
            raise SerializationError("mint must be 32 bytes")
        _buf.extend(self.mint)
        _buf.extend(_struct.pack("<?", self.presale))
        if self.discount_price is None:
            _buf.append(0)
        else:
            _buf.append(1)
            _buf.extend(_struct.pack("<Q", self.discount_price))
        _buf.extend(self.mode.pack())
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 32, "mint")
        mint = bytes(_data[_o:_o + 32])
        _o += 32
        require(_data, _o, 1, "presale")
        presale, = _struct.unpack_from("<?", _data, _o)
        _o += 1
        require(_data, _o, 1, "discount_price option tag")
        _tag_discount_price = _data[_o]
        _o += 1
        if _tag_discount_price == 0:
            discount_price = None
        elif _tag_discount_price == 1:
            require(_data, _o, 8, "discount_price")
            discount_price, = _struct.unpack_from("<Q", _data, _o)
            _o += 8
        else:
            raise SerializationError(f"discount_price option tag is {_tag_discount_price}")
        mode, _n = WhitelistTokenMode.unpack(_data, _o)
        _o += _n
        return cls(mint, presale, discount_price, mode), _o - offset


@dataclass
class Gatekeeper(GuardSettings):
    gatekeeper_network: bytes = settings_field(type="pubkey")
    expire_on_use: bool = settings_field(type="bool")

    def pack(self) -> bytes:
        _buf = bytearray()
        if not isinstance(self.gatekeeper_network, (bytes, bytearray)):
            raise SerializationError("gatekeeper_network must be bytes")
        if len(self.gatekeeper_network) != 32:
            raise SerializationError("gatekeeper_network must be 32 bytes")
        _buf.extend(self.gatekeeper_network)
        _buf.extend(_struct.pack("<?", self.expire_on_use))
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 32, "gatekeeper_network")
        gatekeeper_network = bytes(_data[_o:_o + 32])
        _o += 32
        require(_data, _o, 1, "expire_on_use")
        expire_on_use, = _struct.unpack_from("<?", _data, _o)
        _o += 1
        return cls(gatekeeper_network, expire_on_use), _o - offset


@dataclass
class EndSettings(GuardSettings):
    end_setting_type: EndSettingType = settings_field(type="EndSettingType")
    number: int = settings_field(type="uint64")

    def pack(self) -> bytes:
        _buf = bytearray()
        _buf.extend(self.end_setting_type.pack())
        _buf.extend(_struct.pack("<Q", self.number))
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        end_setting_type, _n = EndSettingType.unpack(_data, _o)
        _o += _n
        require(_data, _o, 8, "number")
        number, = _struct.unpack_from("<Q", _data, _o)
        _o += 8
        return cls(end_setting_type, number), _o - offset


@dataclass
class AllowList(GuardSettings):
    merkle_root: bytes = settings_field(type="bytes", size=32)

    def pack(self) -> bytes:
        _buf = bytearray()
        if not isinstance(self.merkle_root, (bytes, bytearray)):
            raise SerializationError("merkle_root must be bytes")
        if len(self.merkle_root) != 32:
            raise SerializationError("merkle_root must be 32 bytes")
        _buf.extend(self.merkle_root)
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 32, "merkle_root")
        merkle_root = bytes(_data[_o:_o + 32])
        _o += 32
        return cls(merkle_root), _o - offset


@dataclass
class MintLimit(GuardSettings):
    id: int = settings_field(type="uint8")
    limit: int = settings_field(type="uint16")

    def pack(self) -> bytes:
        _buf = bytearray()
        _buf.extend(_struct.pack("<BH", self.id, self.limit))
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 3, "id, limit")
        id, limit = _struct.unpack_from("<BH", _data, _o)
        _o += 3
        return cls(id, limit), _o - offset


@dataclass
class NftPayment(GuardSettings):
    burn: bool = settings_field(type="bool")
    required_collection: bytes = settings_field(type="pubkey")

    def pack(self) -> bytes:
        _buf = bytearray()
        _buf.extend(_struct.pack("<?", self.burn))
        if not isinstance(self.required_collection, (bytes, bytearray)):
            raise SerializationError("required_collection must be bytes")
        if len(self.required_collection) != 32:
            raise SerializationError("required_collection must be 32 bytes")
        _buf.extend(self.required_collection)
        return bytes(_buf)

    @classmethod
    def unpack(cls, _data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        _o = offset
        require(_data, _o, 1, "burn")
        burn, = _struct.unpack_from("<?", _data, _o)
        _o += 1
        require(_data, _o, 32, "required_collection")
        required_collection = bytes(_data[_o:_o + 32])
        _o += 32
        return cls(burn, required_collection), _o - offset


SETTINGS_TYPES: dict[str, type[GuardSettings]] = {
    "botTax": BotTax,
    "lamports": Lamports,
    "splToken": SplToken,
    "liveDate": LiveDate,
    "thirdPartySigner": ThirdPartySigner,
    "whitelist": Whitelist,
    "gatekeeper": Gatekeeper,
    "endSettings": EndSettings,
    "allowList": AllowList,
    "mintLimit": MintLimit,
    "nftPayment": NftPayment,
}

GUARDS: tuple[GuardDescriptor, ...] = (
    GuardDescriptor(
        name="botTax",
        settings_bytes=9,
        encode=BotTax.pack,
        decode=BotTax.unpack,
    ),
    GuardDescriptor(
        name="lamports",
        settings_bytes=40,
        encode=Lamports.pack,
        decode=Lamports.unpack,
    ),
    GuardDescriptor(
        name="splToken",
        settings_bytes=72,
        encode=SplToken.pack,
        decode=SplToken.unpack,
    ),
    GuardDescriptor(
        name="liveDate",
        settings_bytes=9,
        encode=LiveDate.pack,
        decode=LiveDate.unpack,
    ),
    GuardDescriptor(
        name="thirdPartySigner",
        settings_bytes=32,
        encode=ThirdPartySigner.pack,
        decode=ThirdPartySigner.unpack,
    ),
    GuardDescriptor(
        name="whitelist",
        settings_bytes=43,
        encode=Whitelist.pack,
        decode=Whitelist.unpack,
    ),
    GuardDescriptor(
        name="gatekeeper",
        settings_bytes=33,
        encode=Gatekeeper.pack,
        decode=Gatekeeper.unpack,
    ),
    GuardDescriptor(
        name="endSettings",
        settings_bytes=9,
        encode=EndSettings.pack,
        decode=EndSettings.unpack,
    ),
    GuardDescriptor(
        name="allowList",
        settings_bytes=32,
        encode=AllowList.pack,
        decode=AllowList.unpack,
    ),
    GuardDescriptor(
        name="mintLimit",
        settings_bytes=3,
        encode=MintLimit.pack,
        decode=MintLimit.unpack,
    ),
    GuardDescriptor(
        name="nftPayment",
        settings_bytes=33,
        encode=NftPayment.pack,
        decode=NftPayment.unpack,
    ),
)

PROGRAMS: tuple[ProgramDescriptor, ...] = (
    ProgramDescriptor(
        name="CandyGuardProgram",
        available_guards=(
            "botTax",
            "lamports",
            "splToken",
            "liveDate",
            "thirdPartySigner",
            "whitelist",
            "gatekeeper",
            "endSettings",
            "allowList",
            "mintLimit",
            "nftPayment",
        ),
        address="Guard1JwRhJkVH6XZhYGtJzC1aKNbBVQ1uoBdFNAFsFo",
        presence=PresenceFormat.INTERLEAVED,
    ),
)

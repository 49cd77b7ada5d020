"""Size calculation for guard settings and settings records."""

from dataclasses import dataclass
from enum import StrEnum, auto

from ..proto.settings import FEATURE_BYTES
from ..proto.types import PresenceFormat
from .types import EnumDef, GuardDef, GuardMember, ProgramDef, SchemaType

# Primitive type sizes in bytes
PRIMITIVE_SIZES: dict[str, int] = {
    "bool": 1,
    "int8": 1,
    "uint8": 1,
    "int16": 2,
    "uint16": 2,
    "int32": 4,
    "uint32": 4,
    "int64": 8,
    "uint64": 8,
    "pubkey": 32,
}


class SizeKind(StrEnum):
    """Classification of size characteristics."""

    FIXED = auto()  # Min == Max
    BOUNDED = auto()  # Variable, e.g. an optional field


@dataclass(frozen=True)
class SizeInfo:
    """Size information for a type or guard."""

    min_size: int
    max_size: int
    kind: SizeKind

    @property
    def is_fixed(self) -> bool:
        return self.kind == SizeKind.FIXED


@dataclass(frozen=True)
class GuardSizeInfo:
    """Settings size of one guard."""

    name: str
    size: SizeInfo


@dataclass(frozen=True)
class ProgramSizeInfo:
    """Size of one settings record (base or group) for a program."""

    name: str
    presence: PresenceFormat
    guard_count: int
    min_record_size: int  # every guard disabled
    max_record_size: int  # every guard enabled with its largest settings


@dataclass(frozen=True)
class SchemaSizeInfo:
    """Size information for an entire schema."""

    guards: dict[str, GuardSizeInfo]
    programs: dict[str, ProgramSizeInfo]


def presence_overhead(guard_count: int, presence: PresenceFormat) -> int:
    """Bytes a record spends on presence flags."""
    if presence == PresenceFormat.BITMASK:
        return FEATURE_BYTES
    return guard_count


class SizeCalculator:
    """Calculate sizes for schema types."""

    def __init__(
        self,
        enums: list[EnumDef],
        guards: list[GuardDef],
        programs: list[ProgramDef],
    ):
        self.enums = {e.name: e for e in enums}
        self.guards = {g.name: g for g in guards}
        self.programs = programs
        self._cache: dict[str, SizeInfo] = {}

    def calc_type_size(self, t: SchemaType) -> SizeInfo:
        """Calculate size for any field type (primitive or enum)."""
        if t.name == "bytes":
            if t.size is None:
                raise ValueError("bytes type must have a size")
            size = t.size
        elif t.name in PRIMITIVE_SIZES:
            size = PRIMITIVE_SIZES[t.name]
        elif t.name in self.enums:
            size = PRIMITIVE_SIZES[self.enums[t.name].type.name]
        else:
            raise ValueError(f"Unknown type: {t.name}")

        if t.optional:
            # 1-byte option tag, then the value when set
            return SizeInfo(1, 1 + size, SizeKind.BOUNDED)
        return SizeInfo(size, size, SizeKind.FIXED)

    def calc_member_size(self, member: GuardMember) -> SizeInfo:
        return self.calc_type_size(member.type)

    def calc_guard_size(self, name: str) -> GuardSizeInfo:
        """Calculate settings size for a guard (with caching)."""
        if name in self._cache:
            return GuardSizeInfo(name, self._cache[name])

        total_min = 0
        total_max = 0
        overall_kind = SizeKind.FIXED

        for member in self.guards[name].members:
            size = self.calc_member_size(member)
            total_min += size.min_size
            total_max += size.max_size
            if size.kind == SizeKind.BOUNDED:
                overall_kind = SizeKind.BOUNDED

        guard_size = SizeInfo(total_min, total_max, overall_kind)
        self._cache[name] = guard_size

        return GuardSizeInfo(name, guard_size)

    def calc_program_size(self, program: ProgramDef) -> ProgramSizeInfo:
        presence = PresenceFormat(program.option("presence", PresenceFormat.INTERLEAVED.value))
        overhead = presence_overhead(len(program.guards), presence)
        payload = sum(self.calc_guard_size(name).size.max_size for name in program.guards)

        return ProgramSizeInfo(
            name=program.name,
            presence=presence,
            guard_count=len(program.guards),
            min_record_size=overhead,
            max_record_size=overhead + payload,
        )

    def calc_schema_info(self) -> SchemaSizeInfo:
        """Calculate sizes for every guard and program."""
        return SchemaSizeInfo(
            guards={name: self.calc_guard_size(name) for name in self.guards},
            programs={p.name: self.calc_program_size(p) for p in self.programs},
        )


def calculate_sizes(
    enums: list[EnumDef],
    guards: list[GuardDef],
    programs: list[ProgramDef],
) -> SchemaSizeInfo:
    """Calculate size information for a guard schema."""
    calc = SizeCalculator(enums, guards, programs)
    return calc.calc_schema_info()

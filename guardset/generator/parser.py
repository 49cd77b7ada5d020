"""Guard schema parser using Lark."""

import keyword
import os
from dataclasses import dataclass
from typing import Any, TypeVar

from lark import Lark, Token
from lark.visitors import Transformer

from ..proto.settings import FEATURE_BYTES
from ..proto.types import PresenceFormat
from .types import (
    INTEGER_TYPES,
    PRIMITIVE_TYPES,
    EnumDef,
    EnumValue,
    GuardDef,
    GuardMember,
    ProgramDef,
    ProgramOption,
    SchemaType,
)
from .util import to_camel_case

_g_parser: Lark | None = None

PROGRAM_OPTIONS = frozenset(["address", "presence"])

# Names the generated module and class bodies rely on
RESERVED_NAMES = frozenset(
    [
        # runtime imports and module constants
        "GuardDescriptor",
        "GuardEnum",
        "GuardSettings",
        "PresenceFormat",
        "ProgramDescriptor",
        "SerializationError",
        "require",
        "settings_field",
        "dataclass",
        "Self",
        "SETTINGS_TYPES",
        "GUARDS",
        "PROGRAMS",
        # builtins evaluated in class bodies
        "bool",
        "bytes",
        "int",
        "memoryview",
        "tuple",
        "classmethod",
        # method names and parameters
        "cls",
        "self",
        "offset",
        "pack",
        "unpack",
        # dataclasses-json
        "schema",
        "to_dict",
        "to_json",
        "from_dict",
        "from_json",
        "dataclass_json_config",
    ]
)


class ValidationError(RuntimeError):
    """Raised when schema validation fails."""


@dataclass
class _Name:
    value: str


@dataclass
class _Number:
    value: int


@dataclass
class _Size:
    value: int


@dataclass
class _GuardList:
    value: list[str]


TFilter = TypeVar("TFilter", bound=object)


def _filter(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


def _find_one(args: list[Any], class_type: type[object]) -> Any:
    filtered = _filter(args, class_type)
    if len(filtered) == 0:
        return None
    if len(filtered) > 1:
        raise ValidationError(f"Found more than one {class_type.__name__.strip('_').lower()}")

    if hasattr(filtered[0], "value"):
        return filtered[0].value
    return filtered[0]


class TreeTransformer(Transformer):
    """Transform parse tree into schema types."""

    def start(self, args: list[Any]) -> list[Any]:
        return args

    def name(self, args: list[Any]) -> _Name:
        return _Name(value=str(args[0]))

    def number(self, args: list[Any]) -> _Number:
        return _Number(value=int(args[0]))

    def size(self, args: list[Any]) -> _Size:
        return _Size(value=int(args[0]))

    def type(self, args: list[Any]) -> SchemaType:
        optional = any(isinstance(arg, Token) and arg.type == "OPTIONAL" for arg in args)
        return SchemaType(name=str(args[0]), size=_find_one(args, _Size), optional=optional)

    def enum(self, args: list[Any]) -> EnumDef:
        return EnumDef(
            name=_find_one(args, _Name),
            type=_find_one(args, SchemaType),
            values=_filter(args, EnumValue),
        )

    def enum_value(self, args: list[Any]) -> EnumValue:
        return EnumValue(name=_find_one(args, _Name), value=_find_one(args, _Number))

    def guard(self, args: list[Any]) -> GuardDef:
        return GuardDef(name=_find_one(args, _Name), members=_filter(args, GuardMember))

    def member(self, args: list[Any]) -> GuardMember:
        return GuardMember(name=_find_one(args, _Name), type=_find_one(args, SchemaType))

    def program(self, args: list[Any]) -> ProgramDef:
        guards = _find_one(args, _GuardList)
        return ProgramDef(
            name=_find_one(args, _Name),
            options=_filter(args, ProgramOption),
            guards=guards if guards is not None else [],
        )

    def option(self, args: list[Any]) -> ProgramOption:
        return ProgramOption(name=_find_one(args, _Name), value=args[1])

    def guard_list(self, args: list[Any]) -> _GuardList:
        return _GuardList(value=[name.value for name in _filter(args, _Name)])

    def string_value(self, args: list[Any]) -> str:
        return str(args[0])[1:-1]

    def int_value(self, args: list[Any]) -> int:
        return int(args[0])

    def name_value(self, args: list[Any]) -> str:
        return str(args[0])


def _check_unique(kind: str, names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValidationError(f"{kind} {name} declared more than once")
        seen.add(name)


def _validate_type(owner: str, t: SchemaType, enum_map: dict[str, EnumDef]) -> None:
    if t.name == "bytes":
        if not t.size:
            raise ValidationError(f"{owner}: bytes must have a size, e.g. bytes[32]")
    elif t.name in PRIMITIVE_TYPES or t.name in enum_map:
        if t.size is not None:
            raise ValidationError(f"{owner}: only bytes can have a size")
    else:
        raise ValidationError(f"{owner}: unknown type {t.name}")


def validate(
    enums: list[EnumDef],
    guards: list[GuardDef],
    programs: list[ProgramDef],
) -> None:
    """Validate a parsed schema."""
    _check_unique("Enum", [enum.name for enum in enums])
    _check_unique("Guard", [guard.name for guard in guards])
    _check_unique("Program", [program.name for program in programs])

    enum_map = {enum.name: enum for enum in enums}
    guard_map = {guard.name: guard for guard in guards}

    # Generated class names must not collide
    class_names: dict[str, str] = {enum.name: enum.name for enum in enums}
    for guard in guards:
        class_name = to_camel_case(guard.name)
        if class_name in class_names:
            raise ValidationError(
                f"{guard.name} and {class_names[class_name]} both generate class {class_name}"
            )
        class_names[class_name] = guard.name

    for class_name, declared in class_names.items():
        if class_name in RESERVED_NAMES:
            raise ValidationError(f"{declared} generates class {class_name}, a reserved name")

    for enum in enums:
        if enum.type.name not in INTEGER_TYPES or enum.type.size is not None or enum.type.optional:
            raise ValidationError(f"Enum {enum.name} must use an integer type")
        _check_unique(f"{enum.name} value", [value.name for value in enum.values])
        for value in enum.values:
            if keyword.iskeyword(value.name) or value.name.startswith("_"):
                raise ValidationError(f"{enum.name}.{value.name} is not a usable enum value name")
            if value.name in RESERVED_NAMES:
                raise ValidationError(f"{enum.name}.{value.name} is reserved by generated code")

    for guard in guards:
        seen: set[str] = set()
        for member in guard.members:
            owner = f"{guard.name}.{member.name}"
            if keyword.iskeyword(member.name) or member.name.startswith("_"):
                raise ValidationError(f"{owner} is not a usable field name")
            if member.name in RESERVED_NAMES or member.name in class_names:
                raise ValidationError(f"{owner} is reserved by generated code")
            if member.name in seen:
                raise ValidationError(f"{owner} declared more than once")
            seen.add(member.name)
            _validate_type(owner, member.type, enum_map)

    for program in programs:
        for opt in program.options:
            if opt.name not in PROGRAM_OPTIONS:
                raise ValidationError(f"Program {program.name} has unknown option {opt.name}")

        presence = program.option("presence", PresenceFormat.INTERLEAVED.value)
        if presence not in {p.value for p in PresenceFormat}:
            raise ValidationError(f"Program {program.name} has unknown presence {presence}")
        if presence == PresenceFormat.BITMASK and len(program.guards) > FEATURE_BYTES * 8:
            raise ValidationError(
                f"Program {program.name} lists {len(program.guards)} guards, "
                f"bitmask presence allows {FEATURE_BYTES * 8}"
            )

        listed: set[str] = set()
        for name in program.guards:
            if name not in guard_map:
                raise ValidationError(f"{name} listed by program {program.name}, but not declared")
            if name in listed:
                raise ValidationError(f"{name} listed more than once by program {program.name}")
            listed.add(name)


def parse(
    text: str,
) -> tuple[list[EnumDef], list[GuardDef], list[ProgramDef]]:
    """Parse a guard schema."""
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/grammar.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_parser = Lark(grammar)

    items = TreeTransformer().transform(_g_parser.parse(text))

    enums = _filter(items, EnumDef)
    guards = _filter(items, GuardDef)
    programs = _filter(items, ProgramDef)

    validate(enums, guards, programs)

    return (enums, guards, programs)

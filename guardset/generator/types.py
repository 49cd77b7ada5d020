"""Type definitions for guard schema parsing and code generation."""

from dataclasses import dataclass
from typing import Any

from dataclasses_json import DataClassJsonMixin


@dataclass
class SchemaType(DataClassJsonMixin):
    """Represents a field type.

    - size=N: only for bytes, exactly N raw bytes
    - optional=True: prefixed with a one byte option tag
    """

    name: str
    size: int | None = None
    optional: bool = False


@dataclass
class GuardMember(DataClassJsonMixin):
    """Represents one field of a guard's settings."""

    name: str
    type: SchemaType


@dataclass
class GuardDef(DataClassJsonMixin):
    """Represents a guard and the layout of its settings."""

    name: str
    members: list[GuardMember]


@dataclass
class EnumValue(DataClassJsonMixin):
    """Represents a single enum value."""

    name: str
    value: int


@dataclass
class EnumDef(DataClassJsonMixin):
    """Represents an enum type definition."""

    name: str
    type: SchemaType
    values: list[EnumValue]


@dataclass
class ProgramOption(DataClassJsonMixin):
    """Represents a program option such as its address."""

    name: str
    value: Any


@dataclass
class ProgramDef(DataClassJsonMixin):
    """Represents a program and the ordered guards it accepts."""

    name: str
    options: list[ProgramOption]
    guards: list[str]

    def option(self, name: str, default: Any = None) -> Any:
        for opt in self.options:
            if opt.name == name:
                return opt.value
        return default


INTEGER_TYPES = frozenset(
    [
        "int8",
        "int16",
        "int32",
        "int64",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
    ]
)

PRIMITIVE_TYPES = INTEGER_TYPES | frozenset(["bool", "pubkey", "bytes"])


def is_primitive(t: SchemaType) -> bool:
    """Check if a type is a primitive type."""
    return t.name in PRIMITIVE_TYPES

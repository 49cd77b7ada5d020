"""Python code generator for guard schemas."""

import sys
from types import ModuleType

from jinja2 import Environment, PackageLoader

from .parser import parse
from .sizes import PRIMITIVE_SIZES, SizeCalculator
from .types import EnumDef, GuardDef, GuardMember, ProgramDef, SchemaType
from .util import to_camel_case

env = Environment(
    loader=PackageLoader("guardset.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("python.py.j2")

# Map schema types to Python type annotations
PRIMITIVE_TYPE_MAP = {
    "bool": "bool",
    "int8": "int",
    "int16": "int",
    "int32": "int",
    "int64": "int",
    "uint8": "int",
    "uint16": "int",
    "uint32": "int",
    "uint64": "int",
    "pubkey": "bytes",
    "bytes": "bytes",
}

# Map schema types to struct format characters (always little-endian)
FORMAT_CHARS = {
    "bool": "?",
    "int8": "b",
    "uint8": "B",
    "int16": "h",
    "uint16": "H",
    "int32": "i",
    "uint32": "I",
    "int64": "q",
    "uint64": "Q",
}


def _map_type(member: GuardMember) -> str:
    """Map a schema type to a Python type annotation."""
    type_name = PRIMITIVE_TYPE_MAP.get(member.type.name, member.type.name)

    if member.type.optional:
        return f"{type_name} | None"
    return type_name


def _format_char(t: SchemaType) -> str:
    """Get the struct format character for a type."""
    return FORMAT_CHARS.get(t.name, "")


def _type_size(t: SchemaType) -> int:
    """Get the size in bytes of a type."""
    return PRIMITIVE_SIZES.get(t.name, 0)


def _pack_value(t: SchemaType, expr: str, label: str) -> list[str]:
    """Generate pack lines for one non-optional value."""
    if t.name in FORMAT_CHARS:
        return [f'_buf.extend(_struct.pack("<{FORMAT_CHARS[t.name]}", {expr}))']

    if t.name in ("bytes", "pubkey"):
        size = t.size if t.name == "bytes" else PRIMITIVE_SIZES["pubkey"]
        return [
            f"if not isinstance({expr}, (bytes, bytearray)):",
            f'    raise SerializationError("{label} must be bytes")',
            f"if len({expr}) != {size}:",
            f'    raise SerializationError("{label} must be {size} bytes")',
            f"_buf.extend({expr})",
        ]

    # Enum
    return [f"_buf.extend({expr}.pack())"]


def _unpack_value(t: SchemaType, target: str) -> list[str]:
    """Generate unpack lines for one non-optional value."""
    if t.name in FORMAT_CHARS:
        size = PRIMITIVE_SIZES[t.name]
        return [
            f'require(_data, _o, {size}, "{target}")',
            f'{target}, = _struct.unpack_from("<{FORMAT_CHARS[t.name]}", _data, _o)',
            f"_o += {size}",
        ]

    if t.name in ("bytes", "pubkey"):
        size = t.size if t.name == "bytes" else PRIMITIVE_SIZES["pubkey"]
        return [
            f'require(_data, _o, {size}, "{target}")',
            f"{target} = bytes(_data[_o:_o + {size}])",
            f"_o += {size}",
        ]

    # Enum
    return [f"{target}, _n = {t.name}.unpack(_data, _o)", "_o += _n"]


def _gen_pack_member(member: GuardMember) -> str:
    """Generate pack code for a guard field."""
    name = member.name
    lines = _pack_value(member.type, f"self.{name}", name)

    if not member.type.optional:
        return "\n".join(lines)

    return "\n".join(
        [
            f"if self.{name} is None:",
            "    _buf.append(0)",
            "else:",
            "    _buf.append(1)",
            *("    " + line for line in lines),
        ]
    )


def _gen_unpack_member(member: GuardMember) -> str:
    """Generate unpack code for a guard field."""
    name = member.name
    lines = _unpack_value(member.type, name)

    if not member.type.optional:
        return "\n".join(lines)

    return "\n".join(
        [
            f'require(_data, _o, 1, "{name} option tag")',
            f"_tag_{name} = _data[_o]",
            "_o += 1",
            f"if _tag_{name} == 0:",
            f"    {name} = None",
            f"elif _tag_{name} == 1:",
            *("    " + line for line in lines),
            "else:",
            f'    raise SerializationError(f"{name} option tag is {{_tag_{name}}}")',
        ]
    )


def _can_batch(member: GuardMember) -> bool:
    """Check if member can be batched with other primitives."""
    return not member.type.optional and member.type.name in FORMAT_CHARS


def _batch_members(members: list[GuardMember]) -> list[tuple[str, list[GuardMember]]]:
    """Group members into batches for pack/unpack optimization.

    Returns list of (batch_type, members) where batch_type is "primitive" or "single".
    """
    batches: list[tuple[str, list[GuardMember]]] = []
    current: list[GuardMember] = []

    for member in members:
        if _can_batch(member):
            current.append(member)
        else:
            if current:
                batches.append(("primitive", current))
                current = []
            batches.append(("single", [member]))

    if current:
        batches.append(("primitive", current))

    return batches


def _gen_pack_batch(members: list[GuardMember]) -> str:
    """Generate pack code for a batch of primitives."""
    fmt = "<" + "".join(FORMAT_CHARS[m.type.name] for m in members)
    args = ", ".join(f"self.{m.name}" for m in members)
    return f'_buf.extend(_struct.pack("{fmt}", {args}))'


def _gen_unpack_batch(members: list[GuardMember]) -> str:
    """Generate unpack code for a batch of primitives."""
    fmt = "<" + "".join(FORMAT_CHARS[m.type.name] for m in members)
    size = sum(PRIMITIVE_SIZES[m.type.name] for m in members)
    names = ", ".join(m.name for m in members)
    label = names
    # Add trailing comma for single values so tuple unpacking works: val, = (1,)
    if len(members) == 1:
        names += ","
    return (
        f'require(_data, _o, {size}, "{label}")\n'
        f'{names} = _struct.unpack_from("{fmt}", _data, _o)\n'
        f"_o += {size}"
    )


def _field_args(member: GuardMember) -> str:
    """Generate additional arguments for settings_field()."""
    args: list[str] = []
    if member.type.size is not None:
        args.append(f"size={member.type.size}")
    if member.type.optional:
        args.append("optional=True")
    if args:
        return ", " + ", ".join(args)
    return ""


def _program_address(program: ProgramDef) -> str:
    address = program.option("address")
    return "None" if address is None else f'"{address}"'


def _presence_member(program: ProgramDef) -> str:
    return str(program.option("presence", "interleaved")).upper()


def render(
    enums: list[EnumDef],
    guards: list[GuardDef],
    programs: list[ProgramDef],
    runtime_import: str = "guardset.proto",
) -> str:
    """Render a guard schema to Python source code."""
    sizes = SizeCalculator(enums, guards, programs)

    return template.render(
        enums=enums,
        guards=guards,
        programs=programs,
        class_name=lambda guard: to_camel_case(guard.name),
        map_type=_map_type,
        format_char=_format_char,
        type_size=_type_size,
        settings_bytes=lambda guard: sizes.calc_guard_size(guard.name).size.max_size,
        gen_pack_member=_gen_pack_member,
        gen_unpack_member=_gen_unpack_member,
        batch_members=_batch_members,
        gen_pack_batch=_gen_pack_batch,
        gen_unpack_batch=_gen_unpack_batch,
        field_args=_field_args,
        program_address=_program_address,
        presence_member=_presence_member,
        runtime_import=runtime_import,
    )


def load(text: str, module_name: str = "guardset_schema") -> ModuleType:
    """Parse a schema and execute the generated code as a module.

    Used for schemas supplied at run time, such as `guardset decode -i`. The
    default guards ship as the pre-generated module guardset.guards.default.

    The module is registered in sys.modules under ``module_name``, replacing
    any module previously loaded under that name.
    """
    source = render(*parse(text))
    module = ModuleType(module_name)
    sys.modules[module_name] = module
    try:
        exec(compile(source, f"<{module_name}>", "exec"), module.__dict__)
    except Exception:
        del sys.modules[module_name]
        raise
    return module

"""Tests for the guard schema parser."""

import pytest
from lark.exceptions import UnexpectedInput

from guardset.generator import parse
from guardset.generator.parser import ValidationError


def describe_parse_enum():
    def parses_simple_enum(expect):
        enums, _, _ = parse(
            """
            enum Color: uint8 {
                Red = 0
                Green = 1
                Blue = 2
            }
        """
        )
        expect(len(enums)) == 1
        expect(enums[0].name) == "Color"
        expect(enums[0].type.name) == "uint8"
        expect([value.name for value in enums[0].values]) == ["Red", "Green", "Blue"]
        expect(enums[0].values[2].value) == 2

    def requires_integer_base_type(expect):
        with pytest.raises(ValidationError):
            parse("enum Flag: bool { No = 0 }")

    def rejects_duplicate_value_names(expect):
        with pytest.raises(ValidationError):
            parse("enum Color: uint8 { Red = 0 Red = 1 }")

    def rejects_reserved_value_names(expect):
        with pytest.raises(ValidationError):
            parse("enum Color: uint8 { pack = 0 }")
        with pytest.raises(ValidationError):
            parse("enum Color: uint8 { _hidden = 0 }")
        with pytest.raises(ValidationError):
            parse("enum Color: uint8 { bytes = 0 }")

    def rejects_reserved_class_names(expect):
        with pytest.raises(ValidationError):
            parse("enum Self: uint8 { A = 0 }")
        with pytest.raises(ValidationError) as exinfo:
            parse("guard guardSettings { }")

        expect(str(exinfo.value)).includes("GuardSettings")


def describe_parse_guard():
    def parses_members_in_order(expect):
        _, guards, _ = parse(
            """
            guard botTax {
                lamports: uint64
                last_instruction: bool  # trailing comment
            }
        """
        )
        expect(len(guards)) == 1
        expect(guards[0].name) == "botTax"
        expect([member.name for member in guards[0].members]) == ["lamports", "last_instruction"]
        expect(guards[0].members[0].type.name) == "uint64"

    def parses_empty_guard(expect):
        _, guards, _ = parse("guard toggle { }")
        expect(guards[0].members) == []

    def parses_sized_and_optional_types(expect):
        _, guards, _ = parse(
            """
            guard allowList {
                merkle_root: bytes[32]
                date: int64?
                key: pubkey?
            }
        """
        )
        root, date, key = guards[0].members
        expect(root.type.size) == 32
        expect(root.type.optional) == False
        expect(date.type.optional) == True
        expect(date.type.size) == None
        expect(key.type.optional) == True

    def accepts_enum_member_types(expect):
        _, guards, _ = parse(
            """
            enum Mode: uint8 { A = 0 }
            guard g { mode: Mode }
        """
        )
        expect(guards[0].members[0].type.name) == "Mode"

    def rejects_unknown_types(expect):
        with pytest.raises(ValidationError) as exinfo:
            parse("guard g { value: float32 }")

        expect(str(exinfo.value)).includes("unknown type float32")

    def rejects_unsized_bytes(expect):
        with pytest.raises(ValidationError):
            parse("guard g { data: bytes }")

    def rejects_size_on_other_types(expect):
        with pytest.raises(ValidationError):
            parse("guard g { value: uint8[4] }")

    def rejects_duplicate_members(expect):
        with pytest.raises(ValidationError):
            parse("guard g { a: uint8 a: uint16 }")

    def rejects_reserved_member_names(expect):
        for name in ("offset", "pack", "schema", "_buf", "class"):
            with pytest.raises(ValidationError):
                parse(f"guard g {{ {name}: uint8 }}")

    def rejects_names_the_generated_module_uses(expect):
        names = ("settings_field", "int", "bool", "bytes", "dataclass", "Self", "GuardSettings")
        for name in names:
            with pytest.raises(ValidationError) as exinfo:
                parse(f"guard g {{ {name}: uint8\n other: uint8? }}")

            expect(str(exinfo.value)).includes("reserved")

    def rejects_none_as_member_name(expect):
        with pytest.raises(ValidationError):
            parse("guard g { None: uint8 }")

    def rejects_member_named_like_a_class(expect):
        with pytest.raises(ValidationError):
            parse(
                """
                enum Mode: uint8 { A = 0 }
                guard g { Mode: Mode }
            """
            )

    def rejects_duplicate_guards(expect):
        with pytest.raises(ValidationError):
            parse("guard g { } guard g { }")

    def rejects_class_name_collisions(expect):
        with pytest.raises(ValidationError) as exinfo:
            parse("guard bot_tax { } guard botTax { }")

        expect(str(exinfo.value)).includes("BotTax")


def describe_parse_program():
    def parses_options_and_guard_order(expect):
        _, _, programs = parse(
            """
            guard a { }
            guard b { }
            program Demo {
                address = "Demo111"
                presence = bitmask
                guards = [b, a,]
            }
        """
        )
        expect(len(programs)) == 1
        expect(programs[0].name) == "Demo"
        expect(programs[0].guards) == ["b", "a"]
        expect(programs[0].option("address")) == "Demo111"
        expect(programs[0].option("presence")) == "bitmask"
        expect(programs[0].option("missing", 5)) == 5

    def parses_empty_program(expect):
        _, _, programs = parse("program Empty { }")
        expect(programs[0].guards) == []
        expect(programs[0].options) == []

    def rejects_undeclared_guards(expect):
        with pytest.raises(ValidationError) as exinfo:
            parse("program P { guards = [missing] }")

        expect(str(exinfo.value)).includes("missing")

    def rejects_repeated_guards(expect):
        with pytest.raises(ValidationError):
            parse("guard a { } program P { guards = [a, a] }")

    def rejects_unknown_options(expect):
        with pytest.raises(ValidationError):
            parse("program P { color = 3 }")

    def rejects_unknown_presence(expect):
        with pytest.raises(ValidationError):
            parse("program P { presence = sparse }")

    def limits_bitmask_programs_to_sixty_four_guards(expect):
        names = [f"g{index}" for index in range(65)]
        schema = "".join(f"guard {name} {{ }}\n" for name in names)

        interleaved = schema + f"program P {{ guards = [{', '.join(names)}] }}"
        expect(len(parse(interleaved)[2][0].guards)) == 65

        bitmask = schema + f"program P {{ presence = bitmask guards = [{', '.join(names)}] }}"
        with pytest.raises(ValidationError):
            parse(bitmask)

    def rejects_duplicate_programs(expect):
        with pytest.raises(ValidationError):
            parse("program P { } program P { }")


def describe_syntax_errors():
    def reports_malformed_input(expect):
        with pytest.raises(UnexpectedInput):
            parse("guard { }")

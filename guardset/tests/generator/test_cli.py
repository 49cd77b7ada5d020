"""Tests for CLI interface."""

import json
import os
import tempfile

from click.testing import CliRunner

from guardset.generator.cli import cli

FILE_DIR = os.path.dirname(os.path.realpath(__file__))
SAMPLE = f"{FILE_DIR}/sample.guards"


def describe_gen_command():
    def generates_python_code(expect):
        runner = CliRunner()
        with tempfile.NamedTemporaryFile(suffix=".py", delete=False) as f:
            output_file = f.name

        try:
            result = runner.invoke(cli, ["gen", "-i", SAMPLE, "-o", output_file])
            expect(result.exit_code) == 0
            with open(output_file) as f:
                content = f.read()
            expect("class Window(GuardSettings)" in content) == True
            expect("@dataclass" in content) == True
            expect("PROGRAMS" in content) == True
        finally:
            os.unlink(output_file)

    def fails_with_invalid_schema(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            schema = os.path.join(tmpdir, "bad.guards")
            with open(schema, "w") as f:
                f.write("program P { guards = [missing] }")

            result = runner.invoke(cli, ["gen", "-i", schema, "-o", os.path.join(tmpdir, "out.py")])

        expect(result.exit_code) == 1
        expect("Invalid schema" in result.output) == True

    def fails_with_missing_input(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["gen", "-i", "/nonexistent/file.guards", "-o", "/tmp/out.py"])
        expect(result.exit_code) != 0

    def requires_all_options(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["gen"])
        expect(result.exit_code) != 0
        expect("Missing option" in result.output) == True


def describe_info_command():
    def shows_default_guards(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info"])
        expect(result.exit_code) == 0
        expect("botTax" in result.output) == True
        expect("CandyGuardProgram" in result.output) == True

    def outputs_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-i", SAMPLE, "--json"])
        expect(result.exit_code) == 0

        data = json.loads(result.output)
        expect(data["guards"]["window"]) == {"min_size": 39, "max_size": 55, "kind": "bounded"}
        expect(data["programs"]["Counters"]["address"]) == "Counter1111"
        expect(data["programs"]["Counters"]["guards"]) == ["counter", "toggle", "window"]
        expect(data["programs"]["LegacyCounters"]["presence"]) == "bitmask"
        expect(data["programs"]["LegacyCounters"]["max_record_size"]) == 11


def describe_decode_command():
    def decodes_default_settings(expect):
        runner = CliRunner()
        data = "01" + (100).to_bytes(8, "little").hex() + "01" + "00" * 10 + "00"
        result = runner.invoke(cli, ["decode", data])
        expect(result.exit_code) == 0

        output = json.loads(result.output)
        expect(output["guards"]["botTax"]) == {"lamports": 100, "last_instruction": True}
        expect(output["guards"]["lamports"]) == None
        expect(output["groups"]) == []

    def decodes_with_a_schema_and_program(expect):
        runner = CliRunner()
        # feature block with counter (second guard) set, counter settings, no groups
        data = "02" + "00" * 7 + "0200" + "01" + "00000000"
        result = runner.invoke(cli, ["decode", "-i", SAMPLE, "-p", "LegacyCounters", data])
        expect(result.exit_code) == 0

        output = json.loads(result.output)
        expect(output["guards"]) == {"toggle": None, "counter": {"start": 2, "step": 1}}

    def reports_truncated_input(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "0100"])
        expect(result.exit_code) == 1
        expect("Cannot decode settings" in result.output) == True

    def reports_invalid_hex(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "zz"])
        expect(result.exit_code) == 1

    def reports_reserved_field_names(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            schema = os.path.join(tmpdir, "reserved.guards")
            with open(schema, "w") as f:
                f.write("guard g { settings_field: uint8\n other: uint8 }\n")
                f.write("program P { guards = [g] }")

            result = runner.invoke(cli, ["decode", "-i", schema, "-p", "P", "00"])

        expect(result.exit_code) == 1
        expect("Cannot decode settings" in result.output) == True

    def reports_unknown_program(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "-p", "Nowhere", "00"])
        expect(result.exit_code) == 1
        expect("Nowhere" in result.output) == True


def describe_encode_command():
    def encodes_settings_from_stdin(expect):
        runner = CliRunner()
        document = {
            "guards": {"counter": {"start": 2, "step": 1}, "toggle": {}},
            "groups": [{"toggle": None}],
        }
        result = runner.invoke(
            cli, ["encode", "-i", SAMPLE, "-p", "Counters", "-"], input=json.dumps(document)
        )
        expect(result.exit_code) == 0
        expect(result.output.strip()) == "01020001" "01" "00" "0101000000" "000000"

    def encodes_with_the_default_guards(expect):
        runner = CliRunner()
        document = {"guards": {"mintLimit": {"id": 3, "limit": 10}}}
        result = runner.invoke(cli, ["encode", "-"], input=json.dumps(document))
        expect(result.exit_code) == 0
        expect(result.output.strip()) == "00" * 9 + "01030a00" + "00" + "00"

    def reports_unknown_guards(expect):
        runner = CliRunner()
        document = {"guards": {"nonexistent": {}}}
        result = runner.invoke(cli, ["encode", "-"], input=json.dumps(document))
        expect(result.exit_code) == 1
        expect("Cannot encode settings" in result.output) == True


def describe_main_group():
    def shows_help(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        expect(result.exit_code) == 0
        for command in ("gen", "info", "decode", "encode"):
            expect(command in result.output) == True

"""Tests for domain/commands.py — slash command table and parsing."""

from dataclasses import fields

from shapebridge.domain.commands import (
    COMMANDS,
    CommandKind,
    CommandSpec,
    EmptyReplyPolicy,
    parse_command,
)


class TestCommandTable:
    def test_entries_carry_only_routing_fields(self):
        assert [f.name for f in fields(CommandSpec)] == [
            "name", "kind", "provider_command", "requires_args", "on_empty",
        ]
        assert all(key == spec.name for key, spec in COMMANDS.items())

    def test_local_commands(self):
        assert COMMANDS["activate"].kind is CommandKind.LOCAL
        assert COMMANDS["deactivate"].kind is CommandKind.LOCAL

    def test_passthrough_strings(self):
        expected = {
            "reset": "!reset",
            "sleep": "!sleep",
            "dashboard": "!dashboard",
            "info": "!info",
            "web": "!web",
            "help": "!help",
            "imagine": "!imagine",
            "wack": "!wack",
        }
        for name, provider_command in expected.items():
            assert COMMANDS[name].kind is CommandKind.PASSTHROUGH
            assert COMMANDS[name].provider_command == provider_command

    def test_argument_requirements(self):
        required = {name for name, spec in COMMANDS.items() if spec.requires_args}
        assert required == {"web", "imagine"}

    def test_empty_reply_policies(self):
        assert COMMANDS["reset"].on_empty is EmptyReplyPolicy.RESET_CONFIRMATION
        assert COMMANDS["sleep"].on_empty is EmptyReplyPolicy.MAY_BE_SILENT
        assert COMMANDS["wack"].on_empty is EmptyReplyPolicy.MAY_BE_SILENT
        assert COMMANDS["info"].on_empty is EmptyReplyPolicy.NO_TEXT

    def test_provider_string_with_args(self):
        assert COMMANDS["web"].provider_string(["cute", "cats"]) == "!web cute cats"
        assert COMMANDS["reset"].provider_string(["ignored"]) == "!reset"


class TestParseCommand:
    def test_not_a_command(self):
        assert parse_command("hello /activate") is None
        assert parse_command("") is None

    def test_name_is_case_insensitive(self):
        parsed = parse_command("/ReSeT")
        assert parsed.name == "reset"
        assert parsed.spec is COMMANDS["reset"]

    def test_args_split_on_whitespace(self):
        parsed = parse_command("/imagine  a   red\tfox ")
        assert parsed.name == "imagine"
        assert parsed.args == ["a", "red", "fox"]

    def test_unknown_command_is_parsed_but_unrecognized(self):
        parsed = parse_command("/shrug whatever")
        assert parsed is not None
        assert parsed.recognized is False

    def test_bare_prefix(self):
        parsed = parse_command("/")
        assert parsed is not None
        assert parsed.recognized is False

    def test_custom_prefix(self):
        assert parse_command("/info", prefix="$") is None
        assert parse_command("$info", prefix="$").spec is COMMANDS["info"]

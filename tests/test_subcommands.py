"""
Unit tests for the subcommand catalog.

Tests cover:
- Declaration order of names
- Case-insensitive resolution
- Message keys
- Help listing
"""

import pytest

from ServerAdminApp.subcommands import SUBCOMMAND_MAP, SUBCOMMANDS, Subcommand, resolve
from ServerAdminApp.messages import CommandMessages

from tests.conftest import sent_lines


class TestCatalog:
    """Tests for the ordered catalog and its index."""

    def test_names_in_declaration_order(self):
        """Names are lowercase and in declaration order, not sorted."""
        assert SUBCOMMANDS == ["about", "chunk", "eval", "help", "property", "vm", "world", "worlds"]

    def test_index_has_one_entry_per_name(self):
        """Every subcommand has exactly one index entry."""
        assert len(SUBCOMMAND_MAP) == len(Subcommand)
        assert set(SUBCOMMAND_MAP.values()) == set(Subcommand)

    def test_message_keys(self):
        """Usage and description keys are derived from the lowercase name."""
        assert Subcommand.WORLD.usage_key == "server.subcommand.world.usage"
        assert Subcommand.WORLD.description_key == "server.subcommand.world.description"
        assert Subcommand.VM.lower_case_name == "vm"

    def test_every_subcommand_has_messages(self, bundle):
        """The bundled messages define usage and description text for every entry."""
        for subcommand in Subcommand:
            assert subcommand.usage_key in bundle.strings
            assert subcommand.description_key in bundle.strings


class TestResolve:
    """Tests for case-insensitive resolution."""

    @pytest.mark.parametrize("name", SUBCOMMANDS)
    def test_casing_variants_resolve_to_same_entry(self, name):
        """upper, lower, title and swapped case all resolve identically."""
        expected = resolve(name)
        assert expected is not None
        for variant in (name.upper(), name.lower(), name.title(), name.swapcase()):
            assert resolve(variant) is expected

    def test_resolves_to_declared_member(self):
        assert resolve("World") is Subcommand.WORLD
        assert resolve("worlds") is Subcommand.WORLDS
        assert resolve("HELP") is Subcommand.HELP

    @pytest.mark.parametrize("token", ["", "worl", "worldz", "w0rld", "help me", "évaluer"])
    def test_unknown_tokens_do_not_resolve(self, token):
        assert resolve(token) is None

    def test_none_does_not_resolve(self):
        assert resolve(None) is None
        assert resolve(42) is None


class TestHelpListing:
    """Tests for the help subcommand."""

    def test_one_line_per_subcommand_in_order(self, console, bundle):
        """help sends one line per entry, each with its own usage and description."""
        result = Subcommand.HELP.execute(console, "srv", ["help"], CommandMessages(bundle))

        lines = sent_lines(console)
        assert result is False
        assert len(lines) == len(Subcommand)
        for line, subcommand in zip(lines, Subcommand):
            usage = bundle.strings[subcommand.usage_key]
            description = bundle.strings[subcommand.description_key]
            assert line == f"- /srv {usage}: {description}"

    def test_help_line_uses_invocation_label(self, bundle):
        """The label the command was invoked with appears in each line."""
        line = Subcommand.ABOUT.help_line("server", bundle)
        assert "/server about" in line
        assert line.startswith("- §6/server §babout§7: ")

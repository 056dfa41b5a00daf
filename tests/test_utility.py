"""
Unit tests for utility functions.

Tests cover:
- Splitting input lines
- Prefix matching
- Physical senders
"""

import pytest

from ServerAdminApp.collation import CaseInsensitiveCollator
from ServerAdminApp.utility import copy_partial_matches, get_location, is_physical, split_preserving_quotes


class TestSplitPreservingQuotes:
    """Tests for splitting command lines into arguments."""

    def test_plain_words(self):
        assert split_preserving_quotes("srv world nether") == ["srv", "world", "nether"]

    def test_extra_whitespace(self):
        assert split_preserving_quotes("  srv\t world  ") == ["srv", "world"]

    @pytest.mark.parametrize("line,expected", [
        ('eval "a b"', ["eval", "a b"]),
        ("eval 'a b'", ["eval", "a b"]),
        ("eval ''", ["eval", ""]),
    ])
    def test_quoted(self, line, expected):
        assert split_preserving_quotes(line) == expected

    def test_empty(self):
        assert split_preserving_quotes("") == []


class TestCopyPartialMatches:
    """Tests for case-insensitive prefix filtering."""

    def test_keeps_original_order_and_spelling(self):
        assert copy_partial_matches("w", ["World", "about", "worlds"]) == ["World", "worlds"]

    def test_empty_token_matches_all(self):
        assert copy_partial_matches("", ["b", "a"]) == ["b", "a"]

    def test_no_matches(self):
        assert copy_partial_matches("z", ["a", "b"]) == []

    def test_locale_collator(self):
        collator = CaseInsensitiveCollator("tr")

        assert copy_partial_matches("I", ["ırmak", "inci"], collator) == ["ırmak"]


class TestPhysicalSenders:

    def test_player_is_physical(self, player):
        assert is_physical(player)
        assert get_location(player) is player.location

    def test_console_is_not_physical(self, console):
        assert not is_physical(console)
        assert get_location(console) is None

    def test_player_without_location(self, player):
        player.location = None

        assert not is_physical(player)

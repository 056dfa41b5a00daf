"""
Unit tests for routing input lines to registered commands.
"""

import pytest

from ServerAdminApp.admin_command import ServerAdminCommand
from ServerAdminApp.command_handler import CommandHandler
from ServerAdminApp.command_interface import ServerCommand

from tests.conftest import sent_lines


class EchoCommand(ServerCommand):

    def run_command(self, sender, label, args, command_messages):
        sender.send_message(' '.join(args))
        return True


@pytest.fixture
def handler(command):
    handler = CommandHandler()
    handler.register(command)
    return handler


class TestRegistration:

    def test_name_and_aliases_registered(self, handler, command):
        assert handler.labels == ["server", "srv"]
        assert handler.get_command("SRV") is command

    def test_conflicting_label_raises(self, handler):
        with pytest.raises(ValueError):
            handler.register(EchoCommand("echo", aliases=["srv"]))

    def test_registering_same_command_twice_is_allowed(self, handler, command):
        handler.register(command)

        assert handler.get_command("server") is command


class TestProcessCommand:

    def test_dispatch_by_name(self, handler, player):
        assert handler.process_command(player, "/server chunk") is True
        assert sent_lines(player) == ["Chunk: (2, -1)"]

    def test_dispatch_by_alias_without_slash(self, handler, player):
        assert handler.process_command(player, "srv world world_nether") is True
        assert player.world.name == "world_nether"

    def test_quoted_arguments(self, handler, player):
        handler.register(EchoCommand("echo"))

        handler.process_command(player, "echo 'a b' c")

        assert sent_lines(player) == ["a b c"]

    def test_empty_line(self, handler, player):
        assert handler.process_command(player, "   ") is None
        assert sent_lines(player) == []

    def test_unknown_command(self, handler, player):
        assert handler.process_command(player, "/nosuch thing") is None
        assert sent_lines(player) == ["Unknown command 'nosuch'."]


class TestCompleteLine:

    def test_command_labels(self, handler, player):
        assert handler.complete_line(player, "/s") == ["server", "srv"]

    def test_empty_line_offers_all_labels(self, handler, player):
        assert handler.complete_line(player, "") == ["server", "srv"]

    def test_trailing_space_starts_a_new_argument(self, handler, player):
        assert handler.complete_line(player, "server ") == [
            "about", "chunk", "eval", "help", "property", "vm", "world", "worlds",
        ]

    def test_partial_argument(self, handler, player):
        assert handler.complete_line(player, "srv wor") == ["world", "worlds"]

    def test_second_argument(self, handler, player):
        assert handler.complete_line(player, "srv world world_") == ["world_nether", "world_the_end"]

    def test_unknown_command(self, handler, player):
        assert handler.complete_line(player, "nosuch ") == []

    def test_commands_without_completion(self, player):
        handler = CommandHandler()
        handler.register(EchoCommand("echo"))

        assert handler.complete_line(player, "echo ") == []

    def test_custom_labels(self, config, player):
        config.COMMAND_NAME = "admin"
        config.COMMAND_ALIASES = []
        handler = CommandHandler()
        handler.register(ServerAdminCommand(config))

        assert handler.complete_line(player, "a") == ["admin"]
        assert handler.process_command(player, "admin chunk") is True

"""
Unit tests for the interactive console.
"""

import pytest
from unittest.mock import patch

from ServerAdminApp.command_handler import CommandHandler
from ServerAdminApp.console import Console, build_server, main

from tests.conftest import sent_lines


@pytest.fixture
def handler(command):
    handler = CommandHandler()
    handler.register(command)
    return handler


def run_lines(console, lines):
    with patch.object(Console, "install_completer"), patch("builtins.input", side_effect=lines):
        console.run()


def test_run_dispatches_lines_until_exit(handler, player):
    run_lines(Console(handler, player), ["srv chunk", "exit", "srv about"])

    assert sent_lines(player) == ["Chunk: (2, -1)"]


def test_run_stops_at_end_of_input(handler, player):
    run_lines(Console(handler, player), ["/server world world_nether", EOFError()])

    assert player.world.name == "world_nether"


def test_run_survives_failing_command(handler, player):
    with patch.object(CommandHandler, "process_command", side_effect=[RuntimeError("boom"), True]) as process:
        run_lines(Console(handler, player), ["srv chunk", "srv chunk", "quit"])

    assert process.call_count == 2


def test_completer_uses_line_buffer(handler, player):
    console = Console(handler, player)

    with patch("ServerAdminApp.console.readline") as readline:
        readline.get_line_buffer.return_value = "srv wor"
        readline.get_endidx.return_value = 7

        assert console.complete("wor", 0) == "world"
        assert console.complete("wor", 1) == "worlds"
        assert console.complete("wor", 2) is None


def test_build_server_creates_configured_worlds(config):
    config.WORLDS = ["lobby", "arena"]

    assert build_server(config).get_world_names() == ["lobby", "arena"]


def test_main_rejects_missing_config(tmp_path, capsys):
    with pytest.raises(SystemExit) as exit_info:
        main(["--config", str(tmp_path / "missing.yaml")])

    assert exit_info.value.code == 1
    assert "not found" in capsys.readouterr().err

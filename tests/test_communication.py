"""
Unit tests for chat colors and connections.
"""

from ServerAdminApp.communication import (
    BufferedConnection, ChatColor, Connection, strip_color, translate_to_ansi,
)


def test_color_str_is_code():
    assert str(ChatColor.RED) == "§c"
    assert f"{ChatColor.GOLD}x" == "§6x"


def test_by_code():
    assert ChatColor.by_code("b") is ChatColor.AQUA
    assert ChatColor.by_code("B") is ChatColor.AQUA
    assert ChatColor.by_code("z") is None


def test_strip_color():
    assert strip_color("§6/server §babout§7: text") == "/server about: text"
    assert strip_color("no colors") == "no colors"


def test_translate_to_ansi_resets_at_end():
    translated = translate_to_ansi("§cError")

    assert translated == ChatColor.RED.ansi + "Error" + ChatColor.RESET.ansi


def test_translate_to_ansi_without_colors():
    assert translate_to_ansi("plain") == "plain"


def test_buffered_connection_keeps_lines():
    connection = BufferedConnection("test")

    connection.send("§aone")
    connection.send("two")

    assert connection.lines == ["§aone", "two"]
    assert connection.plain_lines() == ["one", "two"]


def test_closed_connection_drops_messages():
    received = []
    connection = Connection(received.append)

    connection.send("before")
    connection.close()
    connection.send("after")

    assert received == ["before"]

"""
Shared pytest fixtures for ServerAdmin tests.

This module provides a local server with a few worlds, players and console senders that
record what they are sent, and the admin command under test.
"""

import pytest
import os
import sys
from typing import List

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ServerAdminApp.admin_command import ServerAdminCommand
from ServerAdminApp.communication import BufferedConnection, strip_color
from ServerAdminApp.config import Config
from ServerAdminApp.local_server import LocalServer
from ServerAdminApp.messages import ResourceBundle
from ServerAdminApp.nondb_models.senders import ConsoleCommandSender, Player
from ServerAdminApp.nondb_models.world import Location, World
from ServerAdminApp.server_interface import ServerInterface


class RecordingConsole(ConsoleCommandSender):
    """Console sender that keeps the raw messages instead of printing them."""

    def __init__(self, is_op: bool = True):
        super().__init__(writer=None)
        self.is_op = is_op
        self.messages: List[str] = []

    def send_message(self, text: str):
        self.messages.append(text)

    def plain_messages(self) -> List[str]:
        return [strip_color(message) for message in self.messages]


@pytest.fixture
def server():
    """A local server with three worlds, registered as the current server."""
    server = LocalServer(
        server_name="Test Server",
        worlds=[
            World("world", (0.5, 64, 0.5)),
            World("world_nether", (8, 70, -8)),
            World("world_the_end", (100, 50, 0)),
        ],
        plugins=["essentials", "worldedit"],
    )
    ServerInterface.set_instance(server)
    yield server
    ServerInterface.set_instance(None)


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def command(config):
    return ServerAdminCommand(config)


@pytest.fixture
def bundle():
    return ResourceBundle.get_bundle("en")


@pytest.fixture
def player(server):
    return create_player(server)


@pytest.fixture
def console():
    return RecordingConsole()


# Utility functions for tests
def create_player(
    server: LocalServer,
    name: str = "Alex",
    permissions=("server.debug",),
    world_name: str = "world",
    x: float = 33.5,
    y: float = 64,
    z: float = -0.5,
) -> Player:
    """Create a player standing in a world of the server, with a buffered connection."""
    location = Location(server.get_world(world_name), x, y, z)
    player = Player(name, location=location, connection=BufferedConnection(name), permissions=permissions)
    server.add_player(player)
    return player


def sent_lines(sender) -> List[str]:
    """Messages a recording sender received, without color codes."""
    if hasattr(sender, "plain_messages"):
        return sender.plain_messages()
    return sender.connection.plain_lines()

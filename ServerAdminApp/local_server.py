import getpass
import os
import platform
import sys
import tempfile
import threading
from typing import Dict, Iterable, List, Optional
from . import __version__
from .constants import Constants
from .nondb_models.senders import Player
from .nondb_models.world import World
from .server_interface import ServerInterface
from .structured_logger import StructuredLogger


def _user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # no passwd entry and no LOGNAME/USER/LNAME/USERNAME in the environment
        return str(os.getuid()) if hasattr(os, "getuid") else ""


class LocalServer(ServerInterface):
    """In-process server backed by the running Python interpreter."""

    def __init__(self, server_name: str = "Local Server", worlds: Iterable[World] = None,
                 plugins: Iterable[str] = None, properties: Dict[str, str] = None):
        self.server_name = server_name
        self.worlds_: Dict[str, World] = {}
        self.players_: List[Player] = []
        self.plugins_: List[str] = list(plugins or [])
        self.properties_: Dict[str, str] = dict(properties or {})
        for world in worlds or []:
            self.add_world(world)

    def add_world(self, world: World):
        logger = StructuredLogger(__name__, prefix="LocalServer.add_world()> ")
        if world.name in self.worlds_:
            raise ValueError(f"World {world.name} already exists.")
        logger.debug(f"adding world {world.name}")
        self.worlds_[world.name] = world

    def remove_world(self, name: str) -> Optional[World]:
        return self.worlds_.pop(name, None)

    def add_player(self, player: Player):
        if player not in self.players_:
            self.players_.append(player)

    def remove_player(self, player: Player):
        if player in self.players_:
            self.players_.remove(player)

    def set_property(self, key: str, value: str):
        self.properties_[key] = value

    def get_name(self) -> str:
        return "ServerAdmin"

    def get_server_name(self) -> str:
        return self.server_name

    def get_version(self) -> str:
        return f"{__version__} (Python {platform.python_version()})"

    def get_api_version(self) -> str:
        return Constants.API_VERSION

    def get_online_players(self) -> List[Player]:
        return list(self.players_)

    def get_worlds(self) -> List[World]:
        return list(self.worlds_.values())

    def get_world(self, name: str) -> Optional[World]:
        return self.worlds_.get(name)

    def get_plugins(self) -> List[str]:
        return list(self.plugins_)

    def get_system_properties(self) -> Dict[str, str]:
        """A fresh snapshot of the interpreter's properties with explicit overrides applied."""
        properties = {
            "os.name": platform.system(),
            "os.arch": platform.machine(),
            "os.version": platform.release(),
            "user.name": _user_name(),
            "user.home": os.path.expanduser("~"),
            "user.dir": os.getcwd(),
            "python.version": platform.python_version(),
            "python.implementation": platform.python_implementation(),
            "python.executable": sys.executable,
            "file.encoding": sys.getfilesystemencoding(),
            "file.separator": os.sep,
            "path.separator": os.pathsep,
            "line.separator": os.linesep,
            "tmp.dir": tempfile.gettempdir(),
        }
        properties.update(self.properties_)
        return properties

    def get_vm_arguments(self) -> List[str]:
        """Interpreter options the process was started with, in command line form."""
        arguments = []
        flags = sys.flags
        if flags.optimize:
            arguments.append("-" + "O" * flags.optimize)
        for flag, option in (("dont_write_bytecode", "-B"), ("ignore_environment", "-E"),
                             ("isolated", "-I"), ("no_user_site", "-s"), ("no_site", "-S"),
                             ("verbose", "-v"), ("quiet", "-q"), ("bytes_warning", "-b")):
            if getattr(flags, flag, 0):
                arguments.append(option)
        arguments.extend(f"-W{option}" for option in sys.warnoptions)
        for key, value in sys._xoptions.items():
            arguments.append(f"-X{key}" if value is True else f"-X{key}={value}")
        return arguments

    def get_thread_count(self) -> int:
        return threading.active_count()

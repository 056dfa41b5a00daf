from enum import Enum
import re
from typing import Callable, List
from .structured_logger import StructuredLogger


COLOR_CHAR = '§'
_COLOR_CODE_PATTERN = re.compile(f"{COLOR_CHAR}([0-9a-fk-or])", re.IGNORECASE)


class ChatColor(Enum):
    BLACK = ('0', '\x1b[30m')
    DARK_BLUE = ('1', '\x1b[34m')
    DARK_GREEN = ('2', '\x1b[32m')
    DARK_AQUA = ('3', '\x1b[36m')
    DARK_RED = ('4', '\x1b[31m')
    DARK_PURPLE = ('5', '\x1b[35m')
    GOLD = ('6', '\x1b[33m')
    GRAY = ('7', '\x1b[37m')
    DARK_GRAY = ('8', '\x1b[90m')
    BLUE = ('9', '\x1b[94m')
    GREEN = ('a', '\x1b[92m')
    AQUA = ('b', '\x1b[96m')
    RED = ('c', '\x1b[91m')
    LIGHT_PURPLE = ('d', '\x1b[95m')
    YELLOW = ('e', '\x1b[93m')
    WHITE = ('f', '\x1b[97m')
    RESET = ('r', '\x1b[0m')

    def __init__(self, code, ansi):
        self._code = code
        self._ansi = ansi

    @property
    def code(self):
        return self._code

    @property
    def ansi(self):
        return self._ansi

    def __str__(self):
        return f"{COLOR_CHAR}{self._code}"

    @classmethod
    def by_code(cls, code: str) -> 'ChatColor':
        for color in cls:
            if color.code == code.lower():
                return color
        return None


def strip_color(text: str) -> str:
    return _COLOR_CODE_PATTERN.sub('', text)


def translate_to_ansi(text: str) -> str:
    """Replace color codes with ANSI escapes, resetting at the end if any were used."""
    used = False

    def _replace(match):
        nonlocal used
        color = ChatColor.by_code(match.group(1))
        if color is None:
            return ''
        used = True
        return color.ansi

    translated = _COLOR_CODE_PATTERN.sub(_replace, text)
    return translated + ChatColor.RESET.ansi if used else translated


class Connection:
    """Outbound text channel of an in-band client."""

    def __init__(self, writer: Callable[[str], None], name: str = "connection"):
        self.writer_ = writer
        self.name = name
        self.closed = False

    def send(self, text: str):
        logger = StructuredLogger(__name__, prefix="Connection.send()> ")
        if self.closed:
            logger.debug2(f"dropping message for closed {self.name}: {text}")
            return
        logger.debug3(f"{self.name} <- {text}")
        self.writer_(text)

    def close(self):
        self.closed = True


class BufferedConnection(Connection):
    """Connection that keeps everything sent to it, used for embedding and tests."""

    def __init__(self, name: str = "buffer"):
        self.lines: List[str] = []
        super().__init__(self.lines.append, name)

    def plain_lines(self) -> List[str]:
        return [strip_color(line) for line in self.lines]

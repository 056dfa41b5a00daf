from typing import Callable, Iterable, Optional
from ..communication import Connection, translate_to_ansi
from ..constants import Constants
from ..structured_logger import StructuredLogger
from .world import Location, World


class CommandSender:
    """Anything that can issue a command and receive text back."""

    def __init__(self, name: str, permissions: Iterable[str] = None, is_op: bool = False,
                 locale: str = None):
        self.name = name
        self.permissions = set(permissions or [])
        self.is_op = is_op
        self.locale = locale or Constants.DEFAULT_LOCALE

    def send_message(self, text: str):
        raise NotImplementedError

    def has_permission(self, permission: str) -> bool:
        if not permission:
            return True
        return self.is_op or permission in self.permissions

    def add_permission(self, permission: str):
        self.permissions.add(permission)

    def remove_permission(self, permission: str):
        self.permissions.discard(permission)

    def to_dict(self):
        return {'name': self.name, 'is_op': self.is_op, 'locale': self.locale}

    def __repr__(self):
        fields_info = ', '.join([f"{key}={value}" for key, value in self.to_dict().items()])
        return f"{self.__class__.__name__}({fields_info})"


class ConsoleCommandSender(CommandSender):

    def __init__(self, writer: Callable[[str], None] = print, locale: str = None):
        super().__init__("CONSOLE", is_op=True, locale=locale)
        self.writer = writer

    def send_message(self, text: str):
        self.writer(translate_to_ansi(text))


class Entity(CommandSender):
    """A sender that exists somewhere in a world."""

    def __init__(self, name: str, location: Location = None, connection: Connection = None, **kwargs):
        super().__init__(name, **kwargs)
        self.location = location
        self.connection = connection

    @property
    def world(self) -> Optional[World]:
        return self.location.world if self.location else None

    def send_message(self, text: str):
        if self.connection is not None:
            self.connection.send(text)

    def teleport(self, location: Location) -> bool:
        logger = StructuredLogger(__name__, prefix="Entity.teleport()> ")
        logger.debug2(f"{self.name}: {self.location} -> {location}")
        self.location = location
        return True

    def to_dict(self):
        result = super().to_dict()
        result['location'] = self.location.to_dict() if self.location else None
        return result


class Player(Entity):
    pass

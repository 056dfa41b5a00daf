from abc import abstractmethod
from typing import Dict, List, Optional


class ServerInterface:
    """Runtime environment the subcommands query: worlds, players and process information."""

    _instance: 'ServerInterface' = None

    @classmethod
    def set_instance(cls, instance: 'ServerInterface'):
        cls._instance = instance

    @classmethod
    def get_instance(cls) -> 'ServerInterface':
        if not cls._instance:
            from .local_server import LocalServer
            cls._instance = LocalServer()
        return cls._instance

    @abstractmethod
    def get_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_server_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_version(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_api_version(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_online_players(self) -> List['Player']:
        raise NotImplementedError

    @abstractmethod
    def get_worlds(self) -> List['World']:
        raise NotImplementedError

    @abstractmethod
    def get_world(self, name: str) -> Optional['World']:
        raise NotImplementedError

    @abstractmethod
    def get_plugins(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def get_system_properties(self) -> Dict[str, str]:
        raise NotImplementedError

    def get_system_property(self, key: str) -> Optional[str]:
        return self.get_system_properties().get(key)

    @abstractmethod
    def get_vm_arguments(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def get_thread_count(self) -> int:
        raise NotImplementedError

    def get_world_names(self) -> List[str]:
        return [world.name for world in self.get_worlds()]

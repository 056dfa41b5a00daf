import math
from typing import Tuple
from ..constants import Constants


class Location:
    def __init__(self, world: 'World', x: float, y: float, z: float):
        self.world = world
        self.x = x
        self.y = y
        self.z = z

    @property
    def block_x(self) -> int:
        return math.floor(self.x)

    @property
    def block_z(self) -> int:
        return math.floor(self.z)

    def get_chunk(self) -> Tuple[int, int]:
        """Chunk coordinates (x, z) containing this location."""
        return self.block_x // Constants.CHUNK_SIZE, self.block_z // Constants.CHUNK_SIZE

    def to_dict(self):
        return {
            'world': self.world.name if self.world else None,
            'x': self.x,
            'y': self.y,
            'z': self.z,
        }

    def __repr__(self):
        fields_info = ', '.join([f"{key}={value}" for key, value in self.to_dict().items()])
        return f"{self.__class__.__name__}({fields_info})"

    def __eq__(self, other):
        if not isinstance(other, Location):
            return NotImplemented
        return self.to_dict() == other.to_dict()


class World:
    def __init__(self, name: str, spawn: Tuple[float, float, float] = (0, 64, 0)):
        self.name = name
        self.spawn_x, self.spawn_y, self.spawn_z = spawn

    @property
    def spawn_location(self) -> Location:
        return Location(self, self.spawn_x, self.spawn_y, self.spawn_z)

    def to_dict(self):
        return {
            'name': self.name,
            'spawn': [self.spawn_x, self.spawn_y, self.spawn_z],
        }

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name})"

    def __str__(self):
        return self.name

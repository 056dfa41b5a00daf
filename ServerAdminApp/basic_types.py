from enum import Enum
from typing import Any


class GenericEnumWithAttributes(Enum):
    """
    A generic enum that forwards attribute access to its values.
    Specially handles dictionary values to allow attribute-style access.
    """
    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        if isinstance(self.value, dict) and name in self.value:
            return self.value[name]
        return getattr(self.value, name)

    @classmethod
    def _missing_(cls, value):
        return None

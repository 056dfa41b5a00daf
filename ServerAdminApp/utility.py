import re
from typing import Iterable, List, Optional
from .collation import CaseInsensitiveCollator
from .nondb_models.senders import CommandSender, Entity
from .nondb_models.world import Location

_default_collator = CaseInsensitiveCollator()


def split_preserving_quotes(text):
    # Regular expression pattern:
    # - Match and capture anything inside quotes (single or double) without the quotes
    # - Or match sequences of non-whitespace characters
    pattern = r'"([^"]*)"|\'([^\']*)\'|(\S+)'
    matches = re.finditer(pattern, text)
    return [next(group for group in match.groups() if group is not None) for match in matches]


def copy_partial_matches(token: str, originals: Iterable[str],
                         collator: CaseInsensitiveCollator = None) -> List[str]:
    """Return the originals starting with token, case-insensitively, in their original order."""
    collator = collator or _default_collator
    return [candidate for candidate in originals if collator.starts_with(candidate, token)]


def is_physical(sender: CommandSender) -> bool:
    return isinstance(sender, Entity) and sender.location is not None


def get_location(sender: CommandSender) -> Optional[Location]:
    if isinstance(sender, Entity):
        return sender.location
    return None

"""Caller gate and game access policy.

A game is usable by a caller in exactly two ways: the caller owns it, or it
is system-owned (no owner) and therefore shared. Everything else is treated
as if the game did not exist.
"""

import enum
from typing import Optional

from app.errors import UnauthorizedError
from app.models import MemoryGame


class GameAccess(enum.Enum):
    OWNED = 'owned'
    SHARED = 'shared'


def require_user(user_id: Optional[int]) -> int:
    """Return the caller id or raise UnauthorizedError."""
    if user_id is None:
        raise UnauthorizedError()
    return user_id


def game_access(game: Optional[MemoryGame], user_id: int) -> Optional[GameAccess]:
    if game is None:
        return None
    if game.owner_id is None:
        return GameAccess.SHARED
    if game.owner_id == user_id:
        return GameAccess.OWNED
    return None

"""Memory trainer operations.

Each operation takes the store handle (a SQLAlchemy session) and the caller's
user id explicitly, checks the caller first, and performs at most one write.
HTTP routes call into here; nothing in this package touches the request.
"""

from .access import GameAccess, game_access, require_user
from .catalog import create_game, list_my_games, update_game
from .sessions import complete_session, get_session, record_round, start_session
from .performance import get_performance, upsert_performance

__all__ = [
    'GameAccess',
    'game_access',
    'require_user',
    'create_game',
    'update_game',
    'list_my_games',
    'start_session',
    'complete_session',
    'record_round',
    'get_session',
    'upsert_performance',
    'get_performance',
]

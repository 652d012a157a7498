from typing import Any, Dict, Optional

from flask import current_app

from app.errors import NotFoundError
from app.models import MemoryGame, MemoryPerformance, utcnow
from .access import game_access, require_user

AGGREGATE_FIELDS = ('total_sessions', 'average_score', 'best_score')


def _merged(data: Dict[str, Any], existing: Optional[MemoryPerformance]) -> Dict[str, Any]:
    """Supplied value, else the stored value, else 0 (no default for the preference)."""
    values = {}
    for key in AGGREGATE_FIELDS:
        value = data.get(key)
        if value is None and existing is not None:
            value = getattr(existing, key)
        values[key] = value if value is not None else 0
    preference = data.get('difficulty_preference')
    if preference is None and existing is not None:
        preference = existing.difficulty_preference
    values['difficulty_preference'] = preference
    values['updated_at'] = utcnow()
    return values


def upsert_performance(store, user_id: Optional[int], game_id: int, data: Dict[str, Any]) -> MemoryPerformance:
    """Create or update the caller's aggregate row for a game.

    The aggregates are written as given; nothing is derived from rounds.
    """
    user_id = require_user(user_id)
    game = store.query(MemoryGame).filter_by(id=game_id).first()
    if game_access(game, user_id) is None:
        raise NotFoundError('Game not found.')

    existing = (
        store.query(MemoryPerformance)
        .filter_by(game_id=game_id, user_id=user_id)
        .with_for_update()
        .first()
    )
    values = _merged(data, existing)

    if existing is not None:
        performance = existing
        for key, value in values.items():
            setattr(performance, key, value)
        action = 'update'
    else:
        performance = MemoryPerformance(game_id=game_id, user_id=user_id, **values)
        action = 'insert'

    store.add(performance)
    store.commit()
    current_app.logger.info(
        f"[performance-{action}] performance={performance.id} game={game_id} user={user_id}"
    )
    return performance


def get_performance(store, user_id: Optional[int], game_id: int) -> MemoryPerformance:
    user_id = require_user(user_id)
    performance = (
        store.query(MemoryPerformance)
        .filter_by(game_id=game_id, user_id=user_id)
        .first()
    )
    if performance is None:
        raise NotFoundError('Performance not found.')
    return performance

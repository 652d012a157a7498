from typing import Any, Dict, List, Optional

from flask import current_app

from app.errors import NotFoundError
from app.models import MemoryGame, utcnow
from .access import require_user

UPDATABLE_GAME_FIELDS = ('name', 'description', 'game_type', 'difficulty_levels', 'is_active')


def create_game(store, user_id: Optional[int], data: Dict[str, Any]) -> MemoryGame:
    user_id = require_user(user_id)
    game = MemoryGame(
        owner_id=user_id,
        name=data['name'],
        description=data.get('description'),
        game_type=data['game_type'],
        difficulty_levels=data.get('difficulty_levels'),
        is_active=data.get('is_active', True),
        created_at=utcnow(),
    )
    store.add(game)
    store.commit()
    current_app.logger.info(f"[game-create] game={game.id} owner={user_id} type={game.game_type}")
    return game


def update_game(store, user_id: Optional[int], game_id: int, data: Dict[str, Any]) -> MemoryGame:
    """Apply the fields present in `data` to a game the caller owns.

    A missing game and a game owned by someone else both raise the same
    NotFoundError. Keys absent from `data` are left alone; keys present with
    None are written. With nothing to apply the existing row is returned as is.
    """
    user_id = require_user(user_id)
    game = (
        store.query(MemoryGame)
        .filter_by(id=game_id, owner_id=user_id)
        .with_for_update()
        .first()
    )
    if game is None:
        raise NotFoundError('Game not found.')

    changes = {key: data[key] for key in UPDATABLE_GAME_FIELDS if key in data}
    if not changes:
        return game

    for key, value in changes.items():
        setattr(game, key, value)
    store.add(game)
    store.commit()
    current_app.logger.info(f"[game-update] game={game.id} fields={sorted(changes)}")
    return game


def list_my_games(store, user_id: Optional[int], include_inactive: bool = False) -> List[MemoryGame]:
    user_id = require_user(user_id)
    games = store.query(MemoryGame).filter_by(owner_id=user_id).all()
    if include_inactive:
        return games
    return [g for g in games if g.is_active]

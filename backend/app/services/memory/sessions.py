from typing import Any, Dict, List, Optional, Tuple

from flask import current_app

from app.errors import NotFoundError
from app.models import MemoryGame, MemoryRound, MemorySession, utcnow
from .access import game_access, require_user


def _owned_session(store, user_id: int, session_id: int, lock: bool = False) -> MemorySession:
    query = store.query(MemorySession).filter_by(id=session_id, user_id=user_id)
    if lock:
        query = query.with_for_update()
    session = query.first()
    if session is None:
        raise NotFoundError('Session not found.')
    return session


def start_session(store, user_id: Optional[int], data: Dict[str, Any]) -> MemorySession:
    """Open an in-progress session on an active game the caller may play.

    Missing, inaccessible and inactive games all answer "Game not available."
    """
    user_id = require_user(user_id)
    game = store.query(MemoryGame).filter_by(id=data['game_id']).first()
    if game_access(game, user_id) is None or not game.is_active:
        raise NotFoundError('Game not available.')

    session = MemorySession(
        game_id=game.id,
        user_id=user_id,
        status='in_progress',
        difficulty=data.get('difficulty'),
        started_at=utcnow(),
        meta=data.get('meta'),
    )
    store.add(session)
    store.commit()
    current_app.logger.info(f"[session-start] session={session.id} game={game.id} user={user_id}")
    return session


def complete_session(store, user_id: Optional[int], session_id: int, data: Dict[str, Any]) -> MemorySession:
    """Close a session.

    Omitted total_score, difficulty and meta keep their stored values; status
    defaults to "completed". ended_at is stamped whatever the final status is.
    """
    user_id = require_user(user_id)
    session = _owned_session(store, user_id, session_id, lock=True)

    if data.get('total_score') is not None:
        session.total_score = data['total_score']
    if data.get('difficulty') is not None:
        session.difficulty = data['difficulty']
    if data.get('meta') is not None:
        session.meta = data['meta']
    session.status = data.get('status') or 'completed'
    session.ended_at = utcnow()

    store.add(session)
    store.commit()
    current_app.logger.info(
        f"[session-end] session={session.id} status={session.status} total_score={session.total_score}"
    )
    return session


def record_round(store, user_id: Optional[int], session_id: int, data: Dict[str, Any]) -> MemoryRound:
    # No status gate: rounds may be appended to completed or abandoned sessions.
    user_id = require_user(user_id)
    session = _owned_session(store, user_id, session_id)

    round_ = MemoryRound(
        session_id=session.id,
        round_number=data.get('round_number') or 1,
        prompt=data['prompt'],
        response=data.get('response'),
        is_correct=bool(data.get('is_correct', False)),
        score=data.get('score') or 0,
        created_at=utcnow(),
    )
    store.add(round_)
    store.commit()
    current_app.logger.info(
        f"[round] session={session.id} round={round_.round_number} correct={round_.is_correct} score={round_.score}"
    )
    return round_


def get_session(store, user_id: Optional[int], session_id: int) -> Tuple[MemorySession, List[MemoryRound]]:
    user_id = require_user(user_id)
    session = _owned_session(store, user_id, session_id)
    rounds = (
        session.rounds
        .order_by(MemoryRound.round_number, MemoryRound.id)
        .all()
    )
    return session, rounds

import pytest

from app import db
from app.errors import NotFoundError, UnauthorizedError
from app.models import MemoryRound
from app.services import memory as svc


def _game(owner, **extra):
    return svc.create_game(db.session, owner.id, {'name': 'Recall', 'game_type': 'sequence', **extra})


def _start(user, game, **extra):
    return svc.start_session(db.session, user.id, {'game_id': game.id, **extra})


def test_start_session_on_own_game(users):
    game = _game(users['alice'])
    session = _start(users['alice'], game, difficulty='easy', meta={'device': 'web'})
    assert session.status == 'in_progress'
    assert session.user_id == users['alice'].id
    assert session.total_score == 0
    assert session.difficulty == 'easy'
    assert session.meta == {'device': 'web'}
    assert session.started_at is not None
    assert session.ended_at is None


def test_start_session_on_system_game_for_anyone(users, system_game):
    assert _start(users['alice'], system_game).game_id == system_game.id
    assert _start(users['bob'], system_game).game_id == system_game.id


@pytest.mark.parametrize('case', ['inactive', 'missing', 'foreign'])
def test_start_session_game_not_available(users, case):
    if case == 'inactive':
        game_id = _game(users['alice'], is_active=False).id
    elif case == 'missing':
        game_id = 4242
    else:
        game_id = _game(users['bob']).id
    with pytest.raises(NotFoundError) as exc:
        svc.start_session(db.session, users['alice'].id, {'game_id': game_id})
    assert exc.value.message == 'Game not available.'


def test_start_session_requires_caller(system_game):
    with pytest.raises(UnauthorizedError):
        svc.start_session(db.session, None, {'game_id': system_game.id})


def test_complete_session_defaults_to_completed(users, system_game):
    session = _start(users['alice'], system_game, difficulty='hard', meta={'a': 1})
    done = svc.complete_session(db.session, users['alice'].id, session.id, {})
    assert done.status == 'completed'
    assert done.ended_at is not None
    assert done.total_score == 0
    assert done.difficulty == 'hard'
    assert done.meta == {'a': 1}


def test_complete_session_stamps_end_even_in_progress(users, system_game):
    session = _start(users['alice'], system_game)
    result = svc.complete_session(db.session, users['alice'].id, session.id, {'status': 'in_progress'})
    assert result.status == 'in_progress'
    assert result.ended_at is not None


def test_complete_session_abandoned_with_score(users, system_game):
    session = _start(users['alice'], system_game)
    result = svc.complete_session(
        db.session, users['alice'].id, session.id,
        {'status': 'abandoned', 'total_score': 4, 'meta': {'reason': 'quit'}},
    )
    assert result.status == 'abandoned'
    assert result.total_score == 4
    assert result.meta == {'reason': 'quit'}


def test_complete_session_of_other_user_not_found(users, system_game):
    session = _start(users['alice'], system_game)
    with pytest.raises(NotFoundError):
        svc.complete_session(db.session, users['bob'].id, session.id, {})
    with pytest.raises(NotFoundError):
        svc.complete_session(db.session, users['alice'].id, 31337, {})


def test_record_round_defaults(users, system_game):
    session = _start(users['alice'], system_game)
    round_ = svc.record_round(db.session, users['alice'].id, session.id, {'prompt': {'seq': [4, 2]}})
    assert round_.round_number == 1
    assert round_.is_correct is False
    assert round_.score == 0
    assert round_.response is None
    assert round_.prompt == {'seq': [4, 2]}
    assert round_.created_at is not None


@pytest.mark.parametrize('status', ['completed', 'abandoned'])
def test_record_round_on_closed_session(users, system_game, status):
    session = _start(users['alice'], system_game)
    svc.complete_session(db.session, users['alice'].id, session.id, {'status': status})
    round_ = svc.record_round(
        db.session, users['alice'].id, session.id,
        {'prompt': ['cat', 'dog'], 'response': ['cat', 'dog'], 'is_correct': True, 'score': 2, 'round_number': 3},
    )
    assert round_.session_id == session.id
    assert round_.round_number == 3


def test_record_round_on_other_users_session(users, system_game):
    session = _start(users['alice'], system_game)
    with pytest.raises(NotFoundError):
        svc.record_round(db.session, users['bob'].id, session.id, {'prompt': [1]})
    assert db.session.query(MemoryRound).count() == 0


def test_get_session_returns_rounds_in_order(users, system_game):
    session = _start(users['alice'], system_game)
    for number in (2, 1, 3):
        svc.record_round(db.session, users['alice'].id, session.id, {'prompt': [number], 'round_number': number})
    found, rounds = svc.get_session(db.session, users['alice'].id, session.id)
    assert found.id == session.id
    assert [r.round_number for r in rounds] == [1, 2, 3]
    with pytest.raises(NotFoundError):
        svc.get_session(db.session, users['bob'].id, session.id)


def test_end_to_end_play_through(users):
    alice = users['alice']
    game = svc.create_game(db.session, alice.id, {'name': 'Recall', 'game_type': 'sequence'})
    session = svc.start_session(db.session, alice.id, {'game_id': game.id})
    svc.record_round(
        db.session, alice.id, session.id,
        {'prompt': {'seq': [1, 2, 3]}, 'is_correct': True, 'score': 10},
    )
    done = svc.complete_session(db.session, alice.id, session.id, {'total_score': 10})
    assert done.status == 'completed'
    assert done.total_score == 10
    assert done.ended_at is not None


def test_start_session_goes_through_access_policy(users, system_game, monkeypatch):
    from app.services.memory import sessions
    seen = []

    def deny(game, user_id):
        seen.append((game.id, user_id))
        return None

    monkeypatch.setattr(sessions, 'game_access', deny)
    with pytest.raises(NotFoundError):
        svc.start_session(db.session, users['alice'].id, {'game_id': system_game.id})
    assert seen == [(system_game.id, users['alice'].id)]

import os
import sys
import pytest

# Ensure the backend root (containing the `app` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from app import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'DEBUG'
    SEED_SYSTEM_GAMES = True
    CORS_ORIGINS = ['http://localhost:5173']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import app.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def users(flask_app):
    from app.models import User
    created = {}
    for name in ('alice', 'bob'):
        user = User(username=name)
        user.set_password('password')
        db.session.add(user)
        created[name] = user
    db.session.commit()
    return created


@pytest.fixture()
def system_game(flask_app):
    from app.models import MemoryGame
    game = MemoryGame(owner_id=None, name='Number Recall', game_type='sequence')
    db.session.add(game)
    db.session.commit()
    return game


@pytest.fixture()
def login(client, users):
    def _login(username):
        res = client.post('/login', json={'username': username, 'password': 'password'})
        assert res.status_code == 200
        return res.get_json()['user']
    return _login


class RecordingStore:
    """Store handle that forwards to the real session and records writes."""

    def __init__(self, inner):
        self.inner = inner
        self.writes = []

    def query(self, *args, **kwargs):
        return self.inner.query(*args, **kwargs)

    def add(self, obj):
        self.writes.append(('add', obj))
        self.inner.add(obj)

    def commit(self):
        self.writes.append(('commit', None))
        self.inner.commit()


@pytest.fixture()
def recording_store(flask_app):
    return RecordingStore(db.session)

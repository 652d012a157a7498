import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()

SYSTEM_GAMES = [
    {'name': 'Number Recall', 'game_type': 'sequence',
     'description': 'Repeat a growing sequence of digits.',
     'difficulty_levels': {'easy': {'length': 4}, 'medium': {'length': 6}, 'hard': {'length': 9}}},
    {'name': 'Pattern Match', 'game_type': 'pattern',
     'description': 'Reproduce a highlighted grid pattern.',
     'difficulty_levels': {'easy': {'grid': 3}, 'medium': {'grid': 4}, 'hard': {'grid': 5}}},
    {'name': 'Word Sequence', 'game_type': 'words',
     'description': 'Recall a list of words in order.',
     'difficulty_levels': {'easy': {'words': 5}, 'medium': {'words': 8}, 'hard': {'words': 12}}},
]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=flask_app.config.get('CORS_ORIGINS', []))

    from app.main import main
    flask_app.register_blueprint(main)

    from app.api.memory import memory
    flask_app.register_blueprint(memory, url_prefix='/api/memory')

    from app.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Flask-Login user loader
    from app.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        from app.errors import UnauthorizedError
        raise UnauthorizedError()

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from app.models import User, MemoryGame
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            users = ['testuser1', 'testuser2', 'testuser3']
            for u in users:
                user = User(username=u)
                user.set_password('password')
                db.session.add(user)

            if flask_app.config.get('SEED_SYSTEM_GAMES'):
                for seed in SYSTEM_GAMES:
                    db.session.add(MemoryGame(owner_id=None, **seed))

            db.session.commit()
            click.echo('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app

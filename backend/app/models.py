from app import db, bcrypt
from flask_login import UserMixin
from datetime import datetime, timezone

SESSION_STATUSES = ('in_progress', 'completed', 'abandoned')


def utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class MemoryGame(db.Model):
    """A reusable memory activity: "Number Recall", "Pattern Match", ...

    owner_id is NULL for system-owned games shared with every user.
    """
    __tablename__ = 'memory_game'
    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True, index=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)
    game_type = db.Column(db.String(64), nullable=False)  # sequence, pattern, words, ...
    difficulty_levels = db.Column(db.JSON, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    sessions = db.relationship('MemorySession', back_populates='game', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'owner_id': self.owner_id,
            'name': self.name,
            'description': self.description,
            'game_type': self.game_type,
            'difficulty_levels': self.difficulty_levels,
            'is_active': self.is_active,
            'created_at': _iso(self.created_at),
        }


class MemorySession(db.Model):
    __tablename__ = 'memory_session'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('memory_game.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    status = db.Column(db.String(32), default='in_progress', nullable=False)  # in_progress, completed, abandoned
    total_score = db.Column(db.Integer, default=0, nullable=False)
    difficulty = db.Column(db.String(64), nullable=True)
    started_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    ended_at = db.Column(db.DateTime(timezone=True), nullable=True)
    meta = db.Column(db.JSON, nullable=True)

    game = db.relationship('MemoryGame', back_populates='sessions')
    rounds = db.relationship('MemoryRound', back_populates='session', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'user_id': self.user_id,
            'status': self.status,
            'total_score': self.total_score,
            'difficulty': self.difficulty,
            'started_at': _iso(self.started_at),
            'ended_at': _iso(self.ended_at),
            'meta': self.meta,
        }


class MemoryRound(db.Model):
    __tablename__ = 'memory_round'
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey('memory_session.id'), nullable=False, index=True)
    round_number = db.Column(db.Integer, default=1, nullable=False)
    prompt = db.Column(db.JSON, nullable=False)  # the challenge: sequence, pattern, word list
    response = db.Column(db.JSON, nullable=True)  # the user's attempt
    is_correct = db.Column(db.Boolean, default=False, nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    session = db.relationship('MemorySession', back_populates='rounds')

    def to_dict(self):
        return {
            'id': self.id,
            'session_id': self.session_id,
            'round_number': self.round_number,
            'prompt': self.prompt,
            'response': self.response,
            'is_correct': self.is_correct,
            'score': self.score,
            'created_at': _iso(self.created_at),
        }


class MemoryPerformance(db.Model):
    """Caller-supplied aggregate stats per (user, game).

    One row per pair is kept by the upsert operation, not by a unique index.
    """
    __tablename__ = 'memory_performance'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey('memory_game.id'), nullable=False, index=True)
    total_sessions = db.Column(db.Integer, default=0, nullable=False)
    average_score = db.Column(db.Float, default=0, nullable=False)
    best_score = db.Column(db.Float, default=0, nullable=False)
    difficulty_preference = db.Column(db.String(64), nullable=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'game_id': self.game_id,
            'total_sessions': self.total_sessions,
            'average_score': self.average_score,
            'best_score': self.best_score,
            'difficulty_preference': self.difficulty_preference,
            'updated_at': _iso(self.updated_at),
        }

from flask import Blueprint, jsonify, request
from flask_login import current_user
from app import db
from app.api import validation
from app.services import memory as svc

memory = Blueprint('memory', __name__)


def _caller_id():
    """Resolved user id, or None for anonymous requests (rejected by the operations)."""
    if current_user.is_authenticated:
        return current_user.id
    return None


def _body(model):
    svc.require_user(_caller_id())
    return validation.validate(request.get_json(silent=True), model)


@memory.route('/games', methods=['POST'])
def create_game():
    data = _body(validation.CreateGameRequest)
    game = svc.create_game(db.session, _caller_id(), data)
    return jsonify({'game': game.to_dict()}), 201


@memory.route('/games/<int:game_id>', methods=['PATCH'])
def update_game(game_id):
    data = _body(validation.UpdateGameRequest)
    game = svc.update_game(db.session, _caller_id(), game_id, data)
    return jsonify({'game': game.to_dict()})


@memory.route('/games', methods=['GET'])
def list_my_games():
    include_inactive = validation.parse_flag(request.args.get('include_inactive'))
    games = svc.list_my_games(db.session, _caller_id(), include_inactive=include_inactive)
    return jsonify({'games': [g.to_dict() for g in games]})


@memory.route('/sessions', methods=['POST'])
def start_session():
    data = _body(validation.StartSessionRequest)
    session = svc.start_session(db.session, _caller_id(), data)
    return jsonify({'session': session.to_dict()}), 201


@memory.route('/sessions/<int:session_id>', methods=['GET'])
def get_session(session_id):
    session, rounds = svc.get_session(db.session, _caller_id(), session_id)
    return jsonify({'session': session.to_dict(), 'rounds': [r.to_dict() for r in rounds]})


@memory.route('/sessions/<int:session_id>/complete', methods=['POST'])
def complete_session(session_id):
    data = _body(validation.CompleteSessionRequest)
    session = svc.complete_session(db.session, _caller_id(), session_id, data)
    return jsonify({'session': session.to_dict()})


@memory.route('/sessions/<int:session_id>/rounds', methods=['POST'])
def record_round(session_id):
    data = _body(validation.RecordRoundRequest)
    round_ = svc.record_round(db.session, _caller_id(), session_id, data)
    return jsonify({'round': round_.to_dict()}), 201


@memory.route('/performance/<int:game_id>', methods=['PUT'])
def upsert_performance(game_id):
    data = _body(validation.UpsertPerformanceRequest)
    performance = svc.upsert_performance(db.session, _caller_id(), game_id, data)
    return jsonify({'performance': performance.to_dict()})


@memory.route('/performance/<int:game_id>', methods=['GET'])
def get_performance(game_id):
    performance = svc.get_performance(db.session, _caller_id(), game_id)
    return jsonify({'performance': performance.to_dict()})

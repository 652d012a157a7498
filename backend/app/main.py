from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from app import db
from app.errors import ConflictError, InputInvalidError, UnauthorizedError
from app.models import User

main = Blueprint('main', __name__)


def _credentials():
    data = request.get_json(silent=True) or {}
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not username:
        raise InputInvalidError('username is required', field='username')
    if not isinstance(password, str) or not password:
        raise InputInvalidError('password is required', field='password')
    return username, password


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the memory trainer!'})


@main.route('/register', methods=['POST'])
def register():
    username, password = _credentials()
    if User.query.filter_by(username=username).first():
        raise ConflictError('Username already exists')

    new_user = User(username=username)
    new_user.set_password(password)
    db.session.add(new_user)
    db.session.commit()
    login_user(new_user)
    return jsonify({'user': new_user.to_dict()}), 201


@main.route('/login', methods=['POST'])
def login():
    username, password = _credentials()
    user = User.query.filter_by(username=username).first()
    if user and user.check_password(password):
        login_user(user, remember=True)
        return jsonify({'user': user.to_dict()})
    raise UnauthorizedError('Invalid username or password')


@main.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})


@main.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully.'})

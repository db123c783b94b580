# routes/auth.py
from flask import Blueprint, jsonify
import logging

from models import User
from schemas.auth_schemas import RegisterRequest, LoginRequest
from utils.auth import token_required, generate_token
from utils.errors import ConflictError, AuthenticationError
from utils.validation import parse_body

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')
logger = logging.getLogger(__name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    payload = parse_body(RegisterRequest)

    if User.objects(email=payload.email).first():
        raise ConflictError('User already exists')

    user = User(name=payload.name, email=payload.email)
    user.set_password(payload.password)
    user.save()
    logger.info(f"Registered user {user.id}")

    return jsonify({
        'message': 'Registration successful',
        'token': generate_token(user.id),
        'user': user.to_json()
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    payload = parse_body(LoginRequest)

    user = User.objects(email=payload.email).first()
    if not user or not user.check_password(payload.password):
        logger.warning(f"Failed login attempt for {payload.email}")
        raise AuthenticationError('Invalid email or password')

    return jsonify({
        'token': generate_token(user.id),
        'user': user.to_json()
    })


@auth_bp.route('/profile', methods=['GET'])
@token_required
def get_profile(current_user):
    return jsonify({'user': current_user.to_json()})

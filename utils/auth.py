# utils/auth.py
import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from bson import ObjectId
from bson.errors import InvalidId
from flask import request, current_app
import logging

from models.user import User
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'


def generate_token(user_id):
    """Generate a JWT token for a user"""
    expiration = datetime.now(timezone.utc) + timedelta(hours=current_app.config['JWT_EXPIRATION_HOURS'])
    return jwt.encode(
        {
            'sub': str(user_id),
            'exp': expiration
        },
        current_app.config['JWT_SECRET'],
        algorithm=JWT_ALGORITHM
    )


def decode_token(token):
    try:
        data = jwt.decode(token, current_app.config['JWT_SECRET'], algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired.")
        raise AuthenticationError('Token has expired')
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        raise AuthenticationError('Invalid token')
    return data['sub']


def _bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        raise AuthenticationError('Token is required')

    parts = auth_header.split(' ')
    if len(parts) != 2 or parts[0] != 'Bearer' or not parts[1]:
        raise AuthenticationError('Invalid token format')
    return parts[1]


def token_required(f):
    """Decorator to protect routes with JWT; passes the authenticated User as first argument."""
    @wraps(f)
    def decorated(*args, **kwargs):
        user_id = decode_token(_bearer_token())
        try:
            current_user = User.objects(id=ObjectId(user_id)).first()
        except (InvalidId, TypeError):
            current_user = None

        if current_user is None:
            logger.warning(f"Token subject {user_id} does not match a user")
            raise AuthenticationError('User not found for token')

        return f(current_user, *args, **kwargs)

    return decorated

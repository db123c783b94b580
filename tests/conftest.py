"""Shared fixtures: an app bound to an in-memory mongomock database, users and auth headers."""
import mongomock
import pytest
from mongoengine.connection import get_connection

from app import create_app
from config import Config
from database import close_db
from models import User
from utils.auth import generate_token


class TestConfig(Config):
    TESTING = True
    MONGODB_URI = 'mongodb://localhost'
    MONGODB_DB = 'bible_study_test'
    MONGO_CLIENT_CLASS = mongomock.MongoClient
    JWT_SECRET = 'test-secret'
    JWT_EXPIRATION_HOURS = 1
    LOG_LEVEL = 'WARNING'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    get_connection().drop_database(TestConfig.MONGODB_DB)
    close_db()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, name='Reader'):
    user = User(name=name, email=email)
    user.set_password('secret123')
    user.save()
    return user


def headers_for(app, user):
    with app.app_context():
        token = generate_token(user.id)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def user(app):
    return make_user('reader@example.com')


@pytest.fixture
def other_user(app):
    return make_user('other@example.com', name='Other')


@pytest.fixture
def auth_headers(app, user):
    return headers_for(app, user)


@pytest.fixture
def other_headers(app, other_user):
    return headers_for(app, other_user)

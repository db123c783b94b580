from datetime import datetime, timedelta, timezone

import jwt
from bson import ObjectId

from models import User


def register(client, **fields):
    body = {'name': 'New Reader', 'email': 'New@Example.com', 'password': 'secret123'}
    body.update(fields)
    return client.post('/api/auth/register', json=body)


def test_register(client):
    response = register(client)
    assert response.status_code == 201
    data = response.get_json()
    assert data['user']['email'] == 'new@example.com'
    assert data['user']['streak'] == {'current': 0, 'longest': 0, 'lastDate': None}
    assert data['token']

    profile = client.get('/api/auth/profile', headers={'Authorization': f"Bearer {data['token']}"})
    assert profile.get_json()['user']['id'] == data['user']['id']


def test_register_validation_and_duplicates(client):
    assert register(client, email='not-an-email').status_code == 400
    assert register(client, password='123').status_code == 400
    register(client)
    assert register(client, email='new@example.com').status_code == 409


def test_password_is_hashed(client):
    register(client)
    user = User.objects(email='new@example.com').first()
    assert user.password_hash != 'secret123'
    assert user.check_password('secret123')
    assert not user.check_password('wrong')


def test_login(client, user):
    response = client.post('/api/auth/login', json={'email': 'Reader@example.com', 'password': 'secret123'})
    assert response.status_code == 200
    assert response.get_json()['user']['id'] == str(user.id)

    response = client.post('/api/auth/login', json={'email': 'reader@example.com', 'password': 'nope'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid email or password'


def test_expired_and_forged_tokens(client, app, user):
    expired = jwt.encode(
        {'sub': str(user.id), 'exp': datetime.now(timezone.utc) - timedelta(minutes=1)},
        app.config['JWT_SECRET'],
        algorithm='HS256'
    )
    response = client.get('/api/auth/profile', headers={'Authorization': f'Bearer {expired}'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Token has expired'

    forged = jwt.encode({'sub': str(user.id)}, 'wrong-secret', algorithm='HS256')
    response = client.get('/api/auth/profile', headers={'Authorization': f'Bearer {forged}'})
    assert response.get_json()['error'] == 'Invalid token'


def test_token_for_deleted_user(client, app):
    token = jwt.encode({'sub': str(ObjectId())}, app.config['JWT_SECRET'], algorithm='HS256')
    response = client.get('/api/auth/profile', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'User not found for token'


def test_email_rejected_by_document_validation_is_a_400(client):
    response = register(client, email='user@example.c')
    assert response.status_code == 400
    body = response.get_json()
    assert body['error'].startswith('email:')
    assert body['details'][0]['field'] == 'email'
    assert User.objects(email='user@example.c').count() == 0


def test_password_longer_than_bcrypt_limit_is_rejected(client):
    assert register(client, password='x' * 100).status_code == 400
    # Multi-byte characters count by encoded length
    assert register(client, password='é' * 40).status_code == 400
    assert register(client, password='x' * 72).status_code == 201

def test_health(client, monkeypatch):
    monkeypatch.setattr('app.ping', lambda: 'bible_study_test')
    response = client.get('/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'healthy'
    assert data['database'] == 'bible_study_test'


def test_health_reports_database_failure(client, monkeypatch):
    def fail():
        raise ConnectionError('no server')

    monkeypatch.setattr('app.ping', fail)
    response = client.get('/health')
    assert response.status_code == 500
    assert response.get_json()['status'] == 'unhealthy'


def test_unknown_route_is_json(client):
    response = client.get('/api/nowhere')
    assert response.status_code == 404
    assert 'error' in response.get_json()


def test_unexpected_errors_are_hidden(client, auth_headers, monkeypatch):
    from utils import reading

    def boom(*args, **kwargs):
        raise RuntimeError('database exploded')

    monkeypatch.setattr(reading, 'get_progress', boom)
    response = client.get('/api/progress/', headers=auth_headers)
    assert response.status_code == 500
    assert response.get_json() == {'error': 'An internal server error occurred'}

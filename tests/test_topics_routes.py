import pytest
from mongoengine.errors import NotUniqueError

from models import Topic, MAX_TOPIC_VERSES
from utils.verse_range import VerseRange


def verse(book='Genesis', chapter=1, start=1, count=1):
    return {'bookId': book, 'chapter': chapter, 'verseStart': start, 'verseCount': count}


def create(client, headers, name='Creation', verses=None, **fields):
    body = {'name': name, 'verses': verses or []}
    body.update(fields)
    return client.post('/api/topics/', json=body, headers=headers)


def test_create_topic(client, auth_headers):
    response = create(client, auth_headers, verses=[verse(), verse(start=2, count=3), verse()], description='In the beginning')
    assert response.status_code == 201
    topic = response.get_json()['topic']
    assert topic['name'] == 'Creation'
    assert len(topic['verses']) == 2
    assert topic['totalVerses'] == 4
    assert topic['uniqueBooks'] == 1


def test_duplicate_name_is_a_conflict(client, auth_headers, other_headers):
    create(client, auth_headers)
    assert create(client, auth_headers).status_code == 409
    assert create(client, other_headers).status_code == 201


def test_add_and_remove_verses(client, auth_headers):
    topic = create(client, auth_headers, verses=[verse()]).get_json()['topic']
    url = f"/api/topics/{topic['id']}/verses"

    response = client.post(url, json={'verses': [verse(), verse(book='John', chapter=1, start=1)]}, headers=auth_headers)
    data = response.get_json()
    assert response.status_code == 200
    assert data['added'] == 1
    assert data['skipped'] == 1
    assert data['topic']['uniqueBooks'] == 2

    response = client.delete(url, json={'verses': [verse()]}, headers=auth_headers)
    assert response.get_json()['removed'] == 1
    assert [v['bookId'] for v in response.get_json()['topic']['verses']] == ['John']

    assert client.post(url, json={'verses': []}, headers=auth_headers).status_code == 400


def test_verse_cap(client, auth_headers, user):
    topic = Topic(user=user, name='Everything')
    topic.add_verses(VerseRange('Psalms', 119, n) for n in range(1, MAX_TOPIC_VERSES + 1))
    topic.save()

    response = client.post(f'/api/topics/{topic.id}/verses', json={'verses': [verse(book='Psalms', chapter=120)]}, headers=auth_headers)
    assert response.status_code == 400

    # Re-adding an existing entry does not count against the cap
    response = client.post(f'/api/topics/{topic.id}/verses', json={'verses': [verse(book='Psalms', chapter=119)]}, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['skipped'] == 1


def test_find_topics_by_verse(client, auth_headers):
    create(client, auth_headers, name='Love', verses=[verse(book='John', chapter=3, start=16, count=2)])
    create(client, auth_headers, name='Light', verses=[verse(book='John', chapter=1, start=5)])

    response = client.get('/api/topics/verse?bookId=John&chapter=3&verseStart=17', headers=auth_headers)
    data = response.get_json()
    assert data['count'] == 1
    assert data['topics'][0]['name'] == 'Love'

    response = client.get('/api/topics/verse?bookId=John&chapter=3&verseStart=18', headers=auth_headers)
    assert response.get_json()['count'] == 0


def test_list_search_and_sort(client, auth_headers):
    create(client, auth_headers, name='Alpha', verses=[verse(count=5)])
    create(client, auth_headers, name='Beta', verses=[verse(count=1)])
    create(client, auth_headers, name='Gamma', verses=[verse(count=3)])

    response = client.get('/api/topics/?sort=name&order=asc', headers=auth_headers)
    assert [t['name'] for t in response.get_json()['data']] == ['Alpha', 'Beta', 'Gamma']

    response = client.get('/api/topics/?sort=totalVerses&order=desc&limit=2', headers=auth_headers)
    data = response.get_json()
    assert [t['name'] for t in data['data']] == ['Alpha', 'Gamma']
    assert data['pagination']['totalItems'] == 3

    response = client.get('/api/topics/?search=amm', headers=auth_headers)
    assert [t['name'] for t in response.get_json()['data']] == ['Gamma']

    assert client.get('/api/topics/?sort=color', headers=auth_headers).status_code == 400


def test_stats(client, auth_headers):
    create(client, auth_headers, name='One', verses=[verse(count=2), verse(book='John', chapter=1, start=1)])
    create(client, auth_headers, name='Two', verses=[verse(start=10, count=3)])

    stats = client.get('/api/topics/stats', headers=auth_headers).get_json()
    assert stats['totalTopics'] == 2
    assert stats['totalVerses'] == 6
    assert stats['averageVersesPerTopic'] == 3
    assert stats['mostUsedBooks'][0] == {'bookId': 'Genesis', 'count': 5}


def test_update_and_delete(client, auth_headers):
    create(client, auth_headers, name='Taken')
    topic = create(client, auth_headers, name='Original').get_json()['topic']
    url = f"/api/topics/{topic['id']}"

    assert client.put(url, json={'name': 'Taken'}, headers=auth_headers).status_code == 409
    response = client.put(url, json={'name': 'Renamed', 'description': 'New'}, headers=auth_headers)
    assert response.get_json()['topic']['name'] == 'Renamed'
    assert response.get_json()['topic']['description'] == 'New'

    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.get(url, headers=auth_headers).status_code == 404


def test_name_is_unique_per_user_in_the_database(client, auth_headers, user, monkeypatch):
    Topic(user=user, name='Grace').save()
    with pytest.raises(NotUniqueError):
        Topic(user=user, name='Grace').save()

    # A request that slipped past the lookup still answers 409
    monkeypatch.setattr('routes.topics._ensure_unique_name', lambda *args, **kwargs: None)
    assert create(client, auth_headers, name='Grace').status_code == 409

    other = create(client, auth_headers, name='Mercy').get_json()['topic']
    response = client.put(f"/api/topics/{other['id']}", json={'name': 'Grace'}, headers=auth_headers)
    assert response.status_code == 409

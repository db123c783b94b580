from models import Bookmark, Note, Progress, Topic, User


def seed(client, headers):
    client.post('/api/bookmarks/', json={'bookId': 'Genesis', 'chapter': 1, 'verseStart': 1}, headers=headers)
    client.post('/api/bookmarks/', json={'bookId': 'Genesis', 'chapter': 1, 'verseStart': 2}, headers=headers)
    client.post('/api/notes/', json={'bookId': 'Genesis', 'chapter': 1, 'verseStart': 1, 'content': 'note'}, headers=headers)
    client.post('/api/topics/', json={'name': 'Topic'}, headers=headers)
    client.post('/api/progress/log-reading', json={'bookId': 'Genesis', 'chapter': 1, 'verse': 1}, headers=headers)


def test_delete_all_data(client, auth_headers, other_headers, user):
    seed(client, auth_headers)
    seed(client, other_headers)

    response = client.delete('/api/data/all', headers=auth_headers)
    data = response.get_json()
    assert response.status_code == 200
    assert data['deletedCount'] == 5
    assert data['collections'] == {'bookmarks': 2, 'notes': 1, 'highlights': 0, 'progress': 1, 'topics': 1}

    assert Bookmark.objects(user=user).count() == 0
    assert Bookmark.objects.count() == 2
    assert Note.objects.count() == 1
    assert Progress.objects.count() == 1
    assert Topic.objects.count() == 1
    # The account itself survives
    assert User.objects(id=user.id).count() == 1


def test_delete_by_type(client, auth_headers):
    seed(client, auth_headers)
    response = client.delete('/api/data/bookmarks', headers=auth_headers)
    assert response.get_json() == {'message': 'Bookmarks deleted successfully', 'deletedCount': 2}
    assert Note.objects.count() == 1


def test_unknown_type(client, auth_headers):
    response = client.delete('/api/data/friends', headers=auth_headers)
    assert response.status_code == 400


def test_type_is_case_insensitive(client, auth_headers):
    seed(client, auth_headers)
    response = client.delete('/api/data/Bookmarks', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json() == {'message': 'Bookmarks deleted successfully', 'deletedCount': 2}

# routes/topics.py
from flask import Blueprint, request, jsonify, current_app
import logging
from mongoengine.errors import NotUniqueError

from models import Topic, MAX_TOPIC_VERSES
from schemas.topic_schemas import TopicCreate, TopicUpdate, TopicVerses, TopicListQuery
from schemas.verse_schemas import VerseRangeQuery
from utils.auth import token_required
from utils.errors import ConflictError, ValidationError
from utils.pagination import parse_pagination, paginate, pagination_meta
from utils.validation import parse_body, parse_args, get_owned_or_404

logger = logging.getLogger(__name__)
topics_bp = Blueprint('topics', __name__, url_prefix='/api/topics')

SORT_FIELDS = {
    'name': 'name',
    'createdAt': 'created_at',
}


def _ensure_unique_name(current_user, name, exclude_id=None):
    existing = Topic.objects(user=current_user, name=name).first()
    if existing and existing.id != exclude_id:
        raise ConflictError(f'Topic "{name}" already exists')


def _save_topic(topic):
    # The unique (user, name) index catches a rename or create that raced past the check
    try:
        topic.save()
    except NotUniqueError:
        raise ConflictError(f'Topic "{topic.name}" already exists')


@topics_bp.route('/', methods=['POST'])
@token_required
def create_topic(current_user):
    payload = parse_body(TopicCreate)
    _ensure_unique_name(current_user, payload.name)

    topic = Topic(user=current_user, name=payload.name, description=payload.description)
    topic.add_verses(v.to_range() for v in payload.verses)
    _save_topic(topic)
    logger.info(f"Created topic {topic.id} '{topic.name}' with {len(topic.verses)} verse entries for user {current_user.id}")
    return jsonify({'topic': topic.to_json()}), 201


@topics_bp.route('/', methods=['GET'])
@token_required
def get_topics(current_user):
    query = parse_args(TopicListQuery)
    page, limit, skip = parse_pagination(request.args, current_app.config['DEFAULT_PAGE_SIZE'], current_app.config['MAX_PAGE_SIZE'])

    queryset = Topic.objects(user=current_user)
    if query.search:
        queryset = queryset.filter(name__icontains=query.search.strip())

    if query.sort == 'totalVerses':
        # Derived value, sorted in Python
        topics = sorted(queryset, key=lambda t: t.total_verses, reverse=(query.order == 'desc'))
        pagination = pagination_meta(len(topics), page, limit)
        topics = topics[skip:skip + limit]
    else:
        prefix = '-' if query.order == 'desc' else ''
        topics, pagination = paginate(queryset.order_by(prefix + SORT_FIELDS[query.sort]), page, limit)

    return jsonify({
        'data': [t.to_json() for t in topics],
        'pagination': pagination
    })


@topics_bp.route('/stats', methods=['GET'])
@token_required
def get_topic_stats(current_user):
    return jsonify(Topic.get_stats(current_user))


@topics_bp.route('/verse', methods=['GET'])
@token_required
def get_topics_by_verse(current_user):
    """Topics that contain the given verse or any verse of the given span."""
    query = parse_args(VerseRangeQuery)
    topics = Topic.find_by_verse(current_user, query.book_id, query.chapter, query.verse_start, query.verse_end)
    return jsonify({
        'topics': [t.to_json() for t in topics],
        'count': len(topics)
    })


@topics_bp.route('/<topic_id>', methods=['GET'])
@token_required
def get_topic(current_user, topic_id):
    topic = get_owned_or_404(Topic, topic_id, current_user, 'Topic')
    return jsonify({'topic': topic.to_json()})


@topics_bp.route('/<topic_id>', methods=['PUT'])
@token_required
def update_topic(current_user, topic_id):
    payload = parse_body(TopicUpdate)
    topic = get_owned_or_404(Topic, topic_id, current_user, 'Topic')

    if payload.name is not None and payload.name != topic.name:
        _ensure_unique_name(current_user, payload.name, exclude_id=topic.id)
        topic.name = payload.name
    if payload.description is not None:
        topic.description = payload.description

    _save_topic(topic)
    return jsonify({'topic': topic.to_json()})


@topics_bp.route('/<topic_id>', methods=['DELETE'])
@token_required
def delete_topic(current_user, topic_id):
    topic = get_owned_or_404(Topic, topic_id, current_user, 'Topic')
    topic.delete()
    return jsonify({'message': 'Topic deleted successfully'})


@topics_bp.route('/<topic_id>/verses', methods=['POST'])
@token_required
def add_verses(current_user, topic_id):
    payload = parse_body(TopicVerses)
    topic = get_owned_or_404(Topic, topic_id, current_user, 'Topic')

    new_ranges = [v.to_range() for v in payload.verses]
    pending = {r for r in new_ranges if not topic.has_reference(r)}
    if len(topic.verses) + len(pending) > MAX_TOPIC_VERSES:
        raise ValidationError(f'Topic cannot contain more than {MAX_TOPIC_VERSES} verses')

    added = topic.add_verses(new_ranges)
    topic.save()
    return jsonify({
        'topic': topic.to_json(),
        'added': added,
        'skipped': len(new_ranges) - added
    })


@topics_bp.route('/<topic_id>/verses', methods=['DELETE'])
@token_required
def remove_verses(current_user, topic_id):
    payload = parse_body(TopicVerses)
    topic = get_owned_or_404(Topic, topic_id, current_user, 'Topic')

    removed = topic.remove_verses(v.to_range() for v in payload.verses)
    topic.save()
    return jsonify({
        'topic': topic.to_json(),
        'removed': removed
    })

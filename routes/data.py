# routes/data.py
from flask import Blueprint, jsonify
import logging

from models import Bookmark, Note, Highlight, Progress, Topic
from utils.auth import token_required
from utils.errors import ValidationError

data_bp = Blueprint('data', __name__, url_prefix='/api/data')
logger = logging.getLogger(__name__)

COLLECTIONS = {
    'bookmarks': Bookmark,
    'notes': Note,
    'highlights': Highlight,
    'progress': Progress,
    'topics': Topic,
}


@data_bp.route('/all', methods=['DELETE'])
@token_required
def delete_all_user_data(current_user):
    """Delete everything the user has created, keeping the account itself."""
    counts = {name: model.objects(user=current_user).delete() for name, model in COLLECTIONS.items()}
    logger.info(f"Deleted all data for user {current_user.id}: {counts}")
    return jsonify({
        'message': 'All user data deleted successfully',
        'deletedCount': sum(counts.values()),
        'collections': counts
    })


@data_bp.route('/<data_type>', methods=['DELETE'])
@token_required
def delete_user_data_by_type(current_user, data_type):
    data_type = data_type.lower()
    model = COLLECTIONS.get(data_type)
    if model is None:
        raise ValidationError(f"Invalid data type. Must be one of: {', '.join(COLLECTIONS)}")

    deleted = model.objects(user=current_user).delete()
    logger.info(f"Deleted {deleted} {data_type} for user {current_user.id}")
    return jsonify({
        'message': f'{data_type.capitalize()} deleted successfully',
        'deletedCount': deleted
    })

# routes/progress.py
from flask import Blueprint, jsonify, current_app
import logging

from schemas.progress_schemas import LogReadingRequest
from schemas.verse_schemas import clean_book_id
from utils import reading
from utils.auth import token_required
from utils.errors import ValidationError
from utils.streak import effective_current
from utils.validation import parse_body

progress_bp = Blueprint('progress', __name__, url_prefix='/api/progress')
logger = logging.getLogger(__name__)


@progress_bp.route('/log-reading', methods=['POST'])
@token_required
def log_reading(current_user):
    payload = parse_body(LogReadingRequest)
    result = reading.log_reading(
        current_user, payload.book_id, payload.chapter, payload.verse,
        attempts=current_app.config['PROGRESS_WRITE_ATTEMPTS']
    )
    return jsonify({
        'message': 'Reading progress logged successfully',
        **result
    }), 200


@progress_bp.route('/', methods=['GET'])
@token_required
def get_progress(current_user):
    return jsonify({
        'progress': reading.get_progress(current_user),
        'streak': reading.get_streak(current_user).to_json()
    })


@progress_bp.route('/streak', methods=['GET'])
@token_required
def get_streak(current_user):
    streak = reading.get_streak(current_user)
    data = streak.to_json()
    # What the streak would be today, without waiting for the next reading to reset it
    data['active'] = effective_current(streak)
    return jsonify({'streak': data})


@progress_bp.route('/book/<book_id>', methods=['GET'])
@progress_bp.route('/<book_id>', methods=['GET'])
@token_required
def get_book_progress(current_user, book_id):
    try:
        book_id = clean_book_id(book_id)
    except ValueError as e:
        raise ValidationError(str(e))
    return jsonify(reading.get_book_progress(current_user, book_id))

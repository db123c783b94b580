from flask import Blueprint, request, jsonify, current_app
import logging

from models import Note, NOTE_VISIBILITY
from schemas.note_schemas import NoteCreate, NoteUpdate
from schemas.verse_schemas import VerseRangeQuery
from utils.auth import token_required
from utils.errors import ConflictError, ValidationError
from utils.pagination import parse_pagination, paginate
from utils.validation import parse_body, parse_args, get_owned_or_404, chapter_filter

notes_bp = Blueprint('notes', __name__, url_prefix='/api/notes')
logger = logging.getLogger(__name__)


@notes_bp.route('/', methods=['GET'])
@token_required
def get_notes(current_user):
    page, limit, _ = parse_pagination(request.args, current_app.config['DEFAULT_PAGE_SIZE'], current_app.config['MAX_PAGE_SIZE'])
    filters = chapter_filter(request.args)
    visibility = request.args.get('visibility')
    if visibility:
        if visibility not in NOTE_VISIBILITY:
            raise ValidationError('visibility must be either "private" or "public"')
        filters['visibility'] = visibility

    queryset = Note.objects(user=current_user, **filters).order_by('-created_at')
    notes, pagination = paginate(queryset, page, limit)
    return jsonify({
        'data': [note.to_json() for note in notes],
        'pagination': pagination
    })


@notes_bp.route('/search', methods=['GET'])
@token_required
def search_notes(current_user):
    term = (request.args.get('q') or '').strip()
    if not term:
        raise ValidationError('Search term (q) is required')

    notes = Note.search_by_content(current_user, term)
    return jsonify({
        'notes': [note.to_json() for note in notes],
        'count': notes.count()
    })


@notes_bp.route('/range', methods=['GET'])
@token_required
def get_notes_in_range(current_user):
    query = parse_args(VerseRangeQuery)
    notes = Note.find_by_verse_range(current_user, query.book_id, query.chapter, query.verse_start, query.verse_end)
    return jsonify({
        'notes': [note.to_json() for note in notes],
        'count': len(notes)
    })


@notes_bp.route('/<note_id>', methods=['GET'])
@token_required
def get_note(current_user, note_id):
    note = get_owned_or_404(Note, note_id, current_user, 'Note')
    return jsonify({'note': note.to_json()})


@notes_bp.route('/', methods=['POST'])
@token_required
def create_note(current_user):
    payload = parse_body(NoteCreate)
    verse_range = payload.to_range()

    if Note.find_same_range(current_user, verse_range):
        raise ConflictError('Note already exists for this verse range')

    overlapping = Note.find_overlapping_range(current_user, verse_range)

    note = Note(user=current_user, content=payload.content, visibility=payload.visibility)
    note.apply_range(verse_range)
    note.save()
    logger.info(f"Created note {note.id} ({note.verse_reference}) for user {current_user.id}")

    return jsonify({
        'message': 'Note created successfully',
        'note': note.to_json(),
        'overlapping': [str(n.id) for n in overlapping]
    }), 201


@notes_bp.route('/<note_id>', methods=['PUT'])
@token_required
def update_note(current_user, note_id):
    payload = parse_body(NoteUpdate)
    note = get_owned_or_404(Note, note_id, current_user, 'Note')

    new_range = payload.merge_range(note.verse_range)
    if new_range != note.verse_range:
        if Note.find_same_range(current_user, new_range, exclude_id=note.id):
            raise ConflictError('Note already exists for this verse range')
        note.apply_range(new_range)
    if payload.content is not None:
        note.content = payload.content
    if payload.visibility is not None:
        note.visibility = payload.visibility

    note.save()
    return jsonify({
        'message': 'Note updated successfully',
        'note': note.to_json()
    })


@notes_bp.route('/<note_id>', methods=['DELETE'])
@token_required
def delete_note(current_user, note_id):
    note = get_owned_or_404(Note, note_id, current_user, 'Note')
    note.delete()
    return jsonify({
        'message': 'Note deleted successfully'
    })

# routes/highlight.py
from flask import Blueprint, request, jsonify, current_app
import logging

from models import Highlight, HIGHLIGHT_COLORS
from schemas.highlight_schemas import HighlightCreate, HighlightUpdate
from schemas.verse_schemas import VerseRangeQuery
from utils.auth import token_required
from utils.errors import ConflictError, ValidationError
from utils.pagination import parse_pagination, paginate
from utils.validation import parse_body, parse_args, get_owned_or_404, chapter_filter

logger = logging.getLogger(__name__)

highlight_bp = Blueprint('highlight_bp', __name__, url_prefix='/api/highlights')


def _reject_overlaps(current_user, verse_range, exclude_id=None):
    """A verse carries at most one highlight, so any overlap is a conflict."""
    conflicts = Highlight.find_overlapping_range(current_user, verse_range, exclude_id=exclude_id)
    if conflicts:
        raise ConflictError(
            "Highlight already exists for this verse range",
            details={"conflicts": [str(h.id) for h in conflicts]}
        )


@highlight_bp.route("/", methods=['GET'])
@token_required
def get_highlights(current_user):
    page, limit, _ = parse_pagination(request.args, current_app.config['DEFAULT_PAGE_SIZE'], current_app.config['MAX_PAGE_SIZE'])
    filters = chapter_filter(request.args)
    color = request.args.get('color')
    if color:
        if color not in HIGHLIGHT_COLORS:
            raise ValidationError(f"color must be one of: {', '.join(HIGHLIGHT_COLORS)}")
        filters['color'] = color

    queryset = Highlight.objects(user=current_user, **filters).order_by('-created_at')
    highlights, pagination = paginate(queryset, page, limit)
    return jsonify({
        "data": [h.to_json() for h in highlights],
        "pagination": pagination
    }), 200


@highlight_bp.route("/stats", methods=['GET'])
@token_required
def get_highlight_stats(current_user):
    return jsonify({"stats": Highlight.get_stats(current_user)}), 200


@highlight_bp.route("/range", methods=['GET'])
@token_required
def get_highlights_in_range(current_user):
    """Fetches the user's highlights overlapping a verse or verse span."""
    query = parse_args(VerseRangeQuery)
    logger.debug(f"Fetching highlights for user {current_user.id} in {query.to_range().reference}")
    highlights = Highlight.find_by_verse_range(current_user, query.book_id, query.chapter, query.verse_start, query.verse_end)
    return jsonify({
        "highlights": [h.to_json() for h in highlights],
        "count": len(highlights)
    }), 200


@highlight_bp.route("/<highlight_id>", methods=['GET'])
@token_required
def get_highlight(current_user, highlight_id):
    highlight = get_owned_or_404(Highlight, highlight_id, current_user, "Highlight")
    return jsonify({"highlight": highlight.to_json()}), 200


@highlight_bp.route("/", methods=['POST'])
@token_required
def create_highlight(current_user):
    payload = parse_body(HighlightCreate)
    verse_range = payload.to_range()
    _reject_overlaps(current_user, verse_range)

    highlight = Highlight(user=current_user, color=payload.color)
    highlight.apply_range(verse_range)
    highlight.save()
    logger.info(f"Created {highlight.color} highlight {highlight.id} ({highlight.verse_reference}) for user {current_user.id}")
    return jsonify({"highlight": highlight.to_json()}), 201


@highlight_bp.route("/<highlight_id>", methods=['PUT'])
@token_required
def update_highlight(current_user, highlight_id):
    payload = parse_body(HighlightUpdate)
    highlight = get_owned_or_404(Highlight, highlight_id, current_user, "Highlight")

    new_range = payload.merge_range(highlight.verse_range)
    if new_range != highlight.verse_range:
        _reject_overlaps(current_user, new_range, exclude_id=highlight.id)
        highlight.apply_range(new_range)
    if payload.color is not None:
        highlight.color = payload.color

    highlight.save()
    return jsonify({"highlight": highlight.to_json()}), 200


@highlight_bp.route("/<highlight_id>", methods=['DELETE'])
@token_required
def delete_highlight(current_user, highlight_id):
    highlight = get_owned_or_404(Highlight, highlight_id, current_user, "Highlight")
    highlight.delete()
    return jsonify({"message": "Highlight deleted successfully"}), 200

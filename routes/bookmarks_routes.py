# routes/bookmarks_routes.py
from flask import Blueprint, request, jsonify, current_app
import logging

from models import Bookmark
from schemas.bookmark_schemas import BookmarkCreate, BookmarkUpdate
from schemas.verse_schemas import VerseRangeQuery
from utils.auth import token_required
from utils.errors import ConflictError
from utils.pagination import parse_pagination, paginate
from utils.validation import parse_body, parse_args, get_owned_or_404, chapter_filter

logger = logging.getLogger(__name__)
bookmarks_bp = Blueprint('bookmarks_bp', __name__, url_prefix='/api/bookmarks')


@bookmarks_bp.route("/", methods=['GET'])
@token_required
def get_bookmarks(current_user):
    page, limit, _ = parse_pagination(request.args, current_app.config['DEFAULT_PAGE_SIZE'], current_app.config['MAX_PAGE_SIZE'])
    queryset = Bookmark.objects(user=current_user, **chapter_filter(request.args)).order_by('-created_at')
    bookmarks, pagination = paginate(queryset, page, limit)
    return jsonify({
        "data": [b.to_json() for b in bookmarks],
        "pagination": pagination
    }), 200


@bookmarks_bp.route("/range", methods=['GET'])
@token_required
def get_bookmarks_in_range(current_user):
    """Bookmarks overlapping a verse or verse span, newest first."""
    query = parse_args(VerseRangeQuery)
    bookmarks = Bookmark.find_by_verse_range(current_user, query.book_id, query.chapter, query.verse_start, query.verse_end)
    return jsonify({
        "bookmarks": [b.to_json() for b in bookmarks],
        "count": len(bookmarks)
    }), 200


@bookmarks_bp.route("/<bookmark_id>", methods=['GET'])
@token_required
def get_bookmark(current_user, bookmark_id):
    bookmark = get_owned_or_404(Bookmark, bookmark_id, current_user, "Bookmark")
    return jsonify({"bookmark": bookmark.to_json()}), 200


@bookmarks_bp.route("/", methods=['POST'])
@token_required
def create_bookmark(current_user):
    payload = parse_body(BookmarkCreate)
    verse_range = payload.to_range()

    # Same user, same exact range is a duplicate
    if Bookmark.find_same_range(current_user, verse_range):
        raise ConflictError("Bookmark already exists for this verse range")

    overlapping = Bookmark.find_overlapping_range(current_user, verse_range)

    bookmark = Bookmark(user=current_user)
    bookmark.apply_range(verse_range)
    bookmark.save()
    logger.info(f"Created bookmark {bookmark.id} ({bookmark.verse_reference}) for user {current_user.id}")
    return jsonify({
        "bookmark": bookmark.to_json(),
        "overlapping": [str(b.id) for b in overlapping]
    }), 201


@bookmarks_bp.route("/<bookmark_id>", methods=['PUT'])
@token_required
def update_bookmark(current_user, bookmark_id):
    payload = parse_body(BookmarkUpdate)
    bookmark = get_owned_or_404(Bookmark, bookmark_id, current_user, "Bookmark")

    new_range = payload.merge_range(bookmark.verse_range)
    if new_range != bookmark.verse_range:
        if Bookmark.find_same_range(current_user, new_range, exclude_id=bookmark.id):
            raise ConflictError("Bookmark already exists for this verse range")
        bookmark.apply_range(new_range)
        bookmark.save()

    return jsonify({"bookmark": bookmark.to_json()}), 200


@bookmarks_bp.route("/<bookmark_id>", methods=['DELETE'])
@token_required
def delete_bookmark(current_user, bookmark_id):
    bookmark = get_owned_or_404(Bookmark, bookmark_id, current_user, "Bookmark")
    data = bookmark.to_json()
    bookmark.delete()
    return jsonify({"message": "Bookmark deleted successfully", "bookmark": data}), 200

# utils/validation.py
from bson import ObjectId
from flask import request
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError, NotFoundError


def parse_body(schema):
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise ValidationError("Invalid JSON payload")
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)


def parse_args(schema):
    try:
        return schema.model_validate(request.args.to_dict())
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)


def get_owned_or_404(model, object_id, user, label):
    """Fetch a document by id that belongs to the user; anything else is a 404."""
    if not ObjectId.is_valid(object_id):
        raise NotFoundError(f"{label} not found")
    document = model.objects(id=object_id, user=user).first()
    if document is None:
        raise NotFoundError(f"{label} not found")
    return document


def chapter_filter(args):
    """Optional bookId/chapter list filters shared by the verse-anchored collections."""
    filters = {}
    if args.get('bookId'):
        filters['book_id'] = args['bookId']
    if args.get('chapter'):
        try:
            filters['chapter'] = int(args['chapter'])
        except ValueError:
            raise ValidationError("chapter must be an integer")
    return filters

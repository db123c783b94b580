from pydantic import AfterValidator, Field
from typing import Annotated, Literal, Optional

from .verse_schemas import VerseRangeIn, VerseRangeUpdate

Visibility = Literal['private', 'public']


def clean_content(value):
    value = value.strip()
    if not value:
        raise ValueError('content must be a non-empty string')
    return value


NoteContent = Annotated[str, Field(max_length=10000), AfterValidator(clean_content)]


class NoteCreate(VerseRangeIn):
    content: NoteContent
    visibility: Visibility = 'private'


class NoteUpdate(VerseRangeUpdate):
    content: Optional[NoteContent] = None
    visibility: Optional[Visibility] = None

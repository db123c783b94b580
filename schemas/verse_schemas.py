from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from typing import Annotated, Optional

from utils.verse_range import VerseRange


def clean_book_id(value):
    value = value.strip()
    if not value:
        raise ValueError('bookId must not be empty')
    # Book ids become part of MongoDB map keys ("{bookId}:{chapter}")
    if '.' in value or value.startswith('$'):
        raise ValueError("bookId must not contain '.' or start with '$'")
    return value


BookId = Annotated[str, Field(max_length=100), AfterValidator(clean_book_id)]
PositiveInt = Annotated[int, Field(ge=1, strict=True)]


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class VerseRangeIn(CamelModel):
    book_id: BookId = Field(..., alias='bookId')
    chapter: PositiveInt
    verse_start: PositiveInt = Field(..., alias='verseStart')
    verse_count: PositiveInt = Field(1, alias='verseCount')

    def to_range(self):
        return VerseRange(self.book_id, self.chapter, self.verse_start, self.verse_count)


class VerseRangeUpdate(CamelModel):
    book_id: Optional[BookId] = Field(None, alias='bookId')
    chapter: Optional[PositiveInt] = None
    verse_start: Optional[PositiveInt] = Field(None, alias='verseStart')
    verse_count: Optional[PositiveInt] = Field(None, alias='verseCount')

    def merge_range(self, current):
        """Overlay the provided fields on an existing VerseRange."""
        return VerseRange(
            book_id=self.book_id if self.book_id is not None else current.book_id,
            chapter=self.chapter if self.chapter is not None else current.chapter,
            verse_start=self.verse_start if self.verse_start is not None else current.verse_start,
            verse_count=self.verse_count if self.verse_count is not None else current.verse_count,
        )


class VerseRangeQuery(CamelModel):
    """Query-string form of a verse or verse span lookup."""
    book_id: BookId = Field(..., alias='bookId')
    chapter: int = Field(..., ge=1)
    verse_start: int = Field(..., alias='verseStart', ge=1)
    verse_end: Optional[int] = Field(None, alias='verseEnd', ge=1)

    @model_validator(mode='after')
    def check_order(self):
        if self.verse_end is not None and self.verse_end < self.verse_start:
            raise ValueError('verseEnd must not be before verseStart')
        return self

    def to_range(self):
        return VerseRange.spanning(self.book_id, self.chapter, self.verse_start, self.verse_end)

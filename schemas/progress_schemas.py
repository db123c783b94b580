from pydantic import Field
from typing import Optional

from .verse_schemas import BookId, CamelModel, PositiveInt


class LogReadingRequest(CamelModel):
    book_id: BookId = Field(..., alias='bookId')
    chapter: PositiveInt
    verse: Optional[PositiveInt] = None

from typing import Literal, Optional

from .verse_schemas import VerseRangeIn, VerseRangeUpdate

HighlightColor = Literal['yellow', 'green', 'blue', 'pink', 'purple', 'orange', 'red']


class HighlightCreate(VerseRangeIn):
    color: HighlightColor = 'yellow'


class HighlightUpdate(VerseRangeUpdate):
    color: Optional[HighlightColor] = None

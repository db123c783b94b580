from .verse_schemas import VerseRangeIn, VerseRangeUpdate


class BookmarkCreate(VerseRangeIn):
    pass


class BookmarkUpdate(VerseRangeUpdate):
    pass

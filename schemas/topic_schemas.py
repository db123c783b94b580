from pydantic import AfterValidator, Field
from typing import Annotated, List, Literal, Optional

from models.topic import MAX_TOPIC_VERSES
from .verse_schemas import CamelModel, VerseRangeIn


def clean_name(value):
    value = value.strip()
    if not value:
        raise ValueError('name must not be empty')
    return value


TopicName = Annotated[str, Field(max_length=100), AfterValidator(clean_name)]


class TopicCreate(CamelModel):
    name: TopicName
    description: Optional[str] = Field(None, max_length=500)
    verses: List[VerseRangeIn] = Field(default_factory=list, max_length=MAX_TOPIC_VERSES)


class TopicUpdate(CamelModel):
    name: Optional[TopicName] = None
    description: Optional[str] = Field(None, max_length=500)


class TopicVerses(CamelModel):
    verses: List[VerseRangeIn] = Field(..., min_length=1, max_length=MAX_TOPIC_VERSES)


class TopicListQuery(CamelModel):
    search: Optional[str] = None
    sort: Literal['name', 'createdAt', 'totalVerses'] = 'createdAt'
    order: Literal['asc', 'desc'] = 'desc'

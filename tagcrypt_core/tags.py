# tagcrypt_core/tags.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List
from .constants import ID_PREFIX, CREATED_PREFIX, ALL_TAG


class TagKind(str, Enum):
    ID = "id"
    CREATED = "created"
    ALL = "all"
    PLAIN = "plain"


@dataclass(frozen=True)
class Tag:
    """
    A plain (human-side) tag.

    Convention tags are kept as (kind, value) pairs and only turned into
    their literal form ("id:<uuid>", "created:<ts>", "all") by str().
    """
    kind: TagKind
    value: str = ""

    def __str__(self) -> str:
        if self.kind is TagKind.ID:
            return ID_PREFIX + self.value
        if self.kind is TagKind.CREATED:
            return CREATED_PREFIX + self.value
        if self.kind is TagKind.ALL:
            return ALL_TAG
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Tag":
        if text == ALL_TAG:
            return cls.all()
        if text.startswith(ID_PREFIX):
            return cls.id(text[len(ID_PREFIX):])
        if text.startswith(CREATED_PREFIX):
            return cls.created(text[len(CREATED_PREFIX):])
        return cls.plain(text)

    @classmethod
    def id(cls, value: str) -> "Tag":
        return cls(TagKind.ID, value)

    @classmethod
    def created(cls, value: str) -> "Tag":
        return cls(TagKind.CREATED, value)

    @classmethod
    def all(cls) -> "Tag":
        return cls(TagKind.ALL)

    @classmethod
    def plain(cls, value: str) -> "Tag":
        return cls(TagKind.PLAIN, value)


def parse_tags(texts: Iterable[str]) -> List[Tag]:
    return [Tag.parse(t) for t in texts]


def render_tags(tags: Iterable[Tag]) -> List[str]:
    return [str(t) for t in tags]

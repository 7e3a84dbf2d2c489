# tagcrypt_core/tagpairs.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
import threading
import logging
from .errors import NoMatchingTagsError
from .logger import get_logger

log = get_logger("TagCrypt.TagPairs", level=logging.DEBUG)


@dataclass(frozen=True)
class TagPair:
    """One plaintext tag and the random token that stands in for it on the server."""
    plain: str
    random: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TagPair":
        return cls(plain=data["plain"], random=data["random"])


class TagPairs:
    """
    Client-held Tag Index.

    Lookups run over an immutable tuple snapshot, so any number of threads
    may query concurrently. add() swaps in a new snapshot under a lock.
    Where the index holds duplicates, the first pair in index order wins.
    """

    def __init__(self, pairs: Optional[Iterable[TagPair]] = None, debug: bool = False):
        self._pairs: Tuple[TagPair, ...] = tuple(pairs or ())
        self._lock = threading.Lock()
        self.debug = debug

    def add(self, *pairs: TagPair) -> None:
        with self._lock:
            self._pairs = self._pairs + tuple(pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[TagPair]:
        return iter(self._pairs)

    def __contains__(self, pair: object) -> bool:
        return pair in self._pairs

    def __repr__(self) -> str:
        return f"TagPairs({list(self._pairs)!r})"

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def with_all_random_tags(self, tokens: Iterable[str]) -> "TagPairs":
        """
        Pairs whose token appears in `tokens`, in index order. A token
        claimed by several pairs only matches the first of them.
        """
        wanted = set(tokens or ())
        seen = set()
        matches = []
        for pair in self._pairs:
            if pair.random not in wanted:
                continue
            if pair.random in seen:
                if self.debug:
                    log.debug(f"duplicate token in tag index, ignoring pair for plain tag `{pair.plain}`")
                continue
            seen.add(pair.random)
            matches.append(pair)

        if not matches:
            raise NoMatchingTagsError(
                f"No tag pairs match any of {len(wanted)} random tags", tokens=wanted
            )
        return TagPairs(matches, debug=self.debug)

    def with_random_tag(self, token: str) -> TagPair:
        pair = next((p for p in self._pairs if p.random == token), None)
        if pair is None:
            raise NoMatchingTagsError(f"No tag pair with random tag `{token}`", tokens=[token])
        return pair

    def with_plain_tags(self, plain_tags: Iterable[str]) -> "TagPairs":
        wanted = set(plain_tags or ())
        matches = [p for p in self._pairs if p.plain in wanted]
        if not matches:
            raise NoMatchingTagsError(
                f"No tag pairs match any of {len(wanted)} plain tags", plain_tags=wanted
            )
        return TagPairs(matches, debug=self.debug)

    def random_tags_for(self, plain_tags: Iterable[str]) -> List[str]:
        """Token for each plain tag, in the caller's order."""
        by_plain: Dict[str, str] = {}
        for pair in self._pairs:
            by_plain.setdefault(pair.plain, pair.random)

        tokens = []
        for plain in plain_tags:
            if plain not in by_plain:
                raise NoMatchingTagsError(
                    f"No tag pair for plain tag `{plain}`", plain_tags=[plain]
                )
            tokens.append(by_plain[plain])
        return tokens

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------
    def all_plain(self) -> List[str]:
        """Plain sides in index order; a repeated plain value is kept once."""
        plain = []
        for pair in self._pairs:
            if pair.plain in plain:
                if self.debug:
                    log.debug(f"plain tag `{pair.plain}` maps to more than one random tag")
                continue
            plain.append(pair.plain)
        return plain

    def all_random(self) -> List[str]:
        return [p.random for p in self._pairs]

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self._pairs]

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]], debug: bool = False) -> "TagPairs":
        return cls((TagPair.from_dict(d) for d in data), debug=debug)

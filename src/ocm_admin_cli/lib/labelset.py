"""Set of tokens stored in a single label value.

accounts_mgmt labels hold one flat string, so multi-valued data is kept
comma-joined. This module is the only place that knows about the encoding:
callers work with LabelSet and convert at the storage boundary with
decode() / encode().
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

DELIMITER = ","


@dataclass(frozen=True, slots=True)
class LabelSet:
    """Insertion-ordered set of non-empty tokens.

    Immutable: add() and remove() return a new LabelSet. An empty set
    encodes to None, meaning "no label".
    """

    tokens: tuple[str, ...] = ()

    @classmethod
    def of(cls, tokens: Iterable[str]) -> LabelSet:
        seen: dict[str, None] = {}
        for token in tokens:
            token = token.strip()
            if token:
                seen.setdefault(token, None)
        return cls(tuple(seen))

    @classmethod
    def decode(cls, value: str | None) -> LabelSet:
        if not value:
            return cls()
        return cls.of(value.split(DELIMITER))

    def encode(self) -> str | None:
        if not self.tokens:
            return None
        return DELIMITER.join(self.tokens)

    def add(self, token: str) -> LabelSet:
        return LabelSet.of((*self.tokens, token))

    def remove(self, token: str) -> LabelSet:
        return LabelSet(tuple(t for t in self.tokens if t != token))

    def __contains__(self, token: object) -> bool:
        return token in self.tokens

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)

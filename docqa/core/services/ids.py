"""Record id generation strategies."""

import hashlib
import itertools
import secrets
import string
import time
from abc import ABC, abstractmethod

_BASE36 = string.digits + string.ascii_lowercase


class IdGenerator(ABC):
    """Produces the record id for the ``index``-th chunk of a document."""

    @abstractmethod
    def new_id(self, index: int, text: str) -> str: ...


class TimestampIdGenerator(IdGenerator):
    """``chunk_{index}_{epoch_ms}_{random}`` ids, unique across requests."""

    def __init__(self, suffix_length: int = 9) -> None:
        self.suffix_length = suffix_length

    def new_id(self, index: int, text: str) -> str:
        suffix = "".join(secrets.choice(_BASE36) for _ in range(self.suffix_length))
        return f"chunk_{index}_{time.time_ns() // 1_000_000}_{suffix}"


class SequentialIdGenerator(IdGenerator):
    """Deterministic ``{prefix}_{n}`` ids from a counter; handy in tests."""

    def __init__(self, prefix: str = "chunk", start: int = 0) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def new_id(self, index: int, text: str) -> str:
        return f"{self.prefix}_{next(self._counter)}"


class ContentHashIdGenerator(IdGenerator):
    """Ids derived from chunk content, so re-indexing the same text overwrites."""

    def __init__(self, digest_length: int = 16) -> None:
        self.digest_length = digest_length

    def new_id(self, index: int, text: str) -> str:
        digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[: self.digest_length]
        return f"chunk_{index}_{digest}"

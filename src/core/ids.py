"""
Unique id generators for events and requests.
"""

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def new_id(self) -> str: ...


class UuidIdGenerator:
    """Random uuid4 hex ids (production default)."""

    def new_id(self) -> str:
        return uuid.uuid4().hex


class SequentialIdGenerator:
    """
    Deterministic ids: 'evt-1', 'evt-2', ...

    Used by tests and scripts where ids must be predictable.
    """

    def __init__(self, prefix: str = "evt"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def new_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"

"""Identifier generators for new wall cells."""

from __future__ import annotations

import uuid


class UuidIdGenerator:
    """Random UUID4 identifiers."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator:
    """Deterministic ``<prefix>-<n>`` identifiers, starting at 1."""

    def __init__(self, prefix: str = "cell", start: int = 1) -> None:
        self.prefix = prefix
        self._next = start

    def new_id(self) -> str:
        value = f"{self.prefix}-{self._next}"
        self._next += 1
        return value

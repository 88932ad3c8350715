# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Id generators for new FileTree nodes.

A generator only proposes candidates. The store checks each candidate
against the ids already present and asks again on collision, so a
generator does not need to know about the tree.

Example:
    >>> gen = CounterIdGenerator(start=100)
    >>> gen.next_id(), gen.next_id()
    (100, 101)
    >>> CounterIdGenerator(prefix='n')().startswith('n')
    True
"""

from __future__ import annotations

import itertools
import secrets
from abc import ABC, abstractmethod

from .node import NodeId


class IdGenerator(ABC):
    """Abstract base class for id generation strategies."""

    @abstractmethod
    def next_id(self) -> NodeId:
        """Return a new candidate id."""

    def __call__(self) -> NodeId:
        return self.next_id()


class CounterIdGenerator(IdGenerator):
    """Monotonic counter ids: 1, 2, 3... or 'prefix1', 'prefix2'..."""

    def __init__(self, start: int = 1, prefix: str | None = None) -> None:
        self._counter = itertools.count(start)
        self.prefix = prefix

    def next_id(self) -> NodeId:
        n = next(self._counter)
        if self.prefix is None:
            return n
        return f"{self.prefix}{n}"


class RandomIdGenerator(IdGenerator):
    """Random hex string ids."""

    def __init__(self, nbytes: int = 8) -> None:
        if nbytes < 1:
            raise ValueError(f"nbytes must be positive, got {nbytes}")
        self.nbytes = nbytes

    def next_id(self) -> NodeId:
        return secrets.token_hex(self.nbytes)

"""Scoped reentrancy guard for pool entry points."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from ..errors import ReentrantCallError
from ..state.pools import PairState


@contextmanager
def locked(state: PairState) -> Iterator[PairState]:
    """
    Hold the pool lock for the duration of the block.

    Raises ReentrantCallError if the pool is already locked. The lock is
    released on every exit path, including exceptions.
    """
    if not state.unlocked:
        raise ReentrantCallError()
    state.unlocked = False
    try:
        yield state
    finally:
        state.unlocked = True

"""
Enemy id generation.

Ids combine a coarse millisecond timestamp with a counter owned by the generator,
so two ids from the same generator can never collide even within one millisecond.
The generator is a service the caller owns and passes to create_enemy.
"""

import re
import time
from typing import Callable, Iterable

ID_PREFIX = "enemy"
_ID_PATTERN = re.compile(rf"^{ID_PREFIX}-\d+-(\d+)$")


class IdGenerator:
    """Hands out unique enemy ids: enemy-<millis>-<n>."""

    def __init__(self, clock: Callable[[], float] = time.time, start: int = 0):
        self._clock = clock
        self._next = start

    def next_id(self) -> str:
        millis = int(self._clock() * 1000)
        enemy_id = f"{ID_PREFIX}-{millis}-{self._next}"
        self._next += 1
        return enemy_id

    def seed_from(self, existing_ids: Iterable[str]) -> None:
        """Move the counter past any counter value found in already-issued ids (e.g. loaded from storage)."""
        for existing in existing_ids:
            match = _ID_PATTERN.match(existing or "")
            if match:
                self._next = max(self._next, int(match.group(1)) + 1)

    @property
    def issued(self) -> int:
        return self._next

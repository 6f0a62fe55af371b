"""Random selection over a shrinking pool of candidate tips."""

import logging
import random
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple

from tipjar.engine.models import TipSpec

logger = logging.getLogger(__name__)


class CandidatePool:
    """Tips that have not been ruled out yet during this process.

    The pool is seeded once and only ever shrinks: a tip found ineligible is
    discarded for good and never evaluated again by this pool.
    """

    def __init__(self, tips: Iterable[TipSpec], rng=None):
        self._tips: List[TipSpec] = list(tips)
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._tips)

    def __bool__(self) -> bool:
        return bool(self._tips)

    def ids(self) -> List[str]:
        return [tip.id for tip in self._tips]

    def draw(self) -> Tuple[int, TipSpec]:
        """Pick a candidate uniformly at random."""
        if not self._tips:
            raise IndexError("draw from an empty candidate pool")
        index = self._rng.randrange(len(self._tips))
        return index, self._tips[index]

    def discard(self, index: int) -> TipSpec:
        return self._tips.pop(index)

    def copy(self) -> "CandidatePool":
        """A pool with the same candidates and random source, shrinking independently."""
        return CandidatePool(self._tips, self._rng)


async def select(
    pool: CandidatePool,
    is_eligible: Callable[[TipSpec], Awaitable[bool]],
) -> Optional[TipSpec]:
    """Draw candidates until one is eligible; None once the pool is empty."""
    while pool:
        index, tip = pool.draw()
        if await is_eligible(tip):
            logger.info(f"Selected tip {tip.id} ({len(pool)} candidates left)")
            return tip
        pool.discard(index)
        logger.debug(f"Discarded tip {tip.id}, {len(pool)} candidates left")

    logger.info("No tips to show available anymore")
    return None

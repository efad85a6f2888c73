#!/usr/bin/env python3
"""
Entropy Module for Name Generation
===================================
Random sources for character selection.

Selectors only ever call `choice(seq)`, so any object with that method can
be injected:
- TrueRandom: OS entropy via secrets.SystemRandom (default)
- SeededRandom: reproducible Mersenne Twister stream for a given seed

No module-level generator is shared between calls; `get_rng()` returns a
fresh instance each time.
"""

import random as _random
import secrets
from typing import Any, Optional, Sequence


# =============================================================================
# Random Sources
# =============================================================================

class TrueRandom:
    """
    Cryptographically secure random choice backed by the OS entropy pool.
    """

    def __init__(self):
        self._rng = secrets.SystemRandom()

    def choice(self, seq: Sequence) -> Any:
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return self._rng.choice(seq)


class SeededRandom(TrueRandom):
    """Reproducible source: the same seed yields the same draws."""

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = _random.Random(seed)


def get_rng(seed: Optional[int] = None):
    """Fresh random source; seeded when `seed` is given."""
    if seed is None:
        return TrueRandom()
    return SeededRandom(seed)


__all__ = [
    'TrueRandom',
    'SeededRandom',
    'get_rng',
]

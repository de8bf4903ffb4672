#!/usr/bin/env python3
"""
Entropy Module for Name Generation
===================================
Provides the seeded random source every generation session draws from.

Features:
- Deterministic generator keyed by a seed string
- Seed derivation from hardware entropy when the caller supplies none
- Derived integer and choice operations built on a single float primitive
- Weighted selection with declared-order scanning

A single ``SeededRandom`` is one session. It is never shared through a module
global: callers create a handle per request and pass it explicitly into every
call that draws from it.
"""

import os
import math
import time
import random
import hashlib
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..errors import EmptyInputError, InvalidWeightError


# =============================================================================
# Seed Derivation
# =============================================================================

def derive_seed() -> str:
    """
    Build a fresh seed string from several entropy sources.

    Combines:
    - os.urandom() - system entropy pool
    - High-resolution time (nanoseconds)
    - Process ID and a memory address

    The result is a 16-character hex string, short enough to show to a user
    and type back in to reproduce a batch.
    """
    hw_entropy = int.from_bytes(os.urandom(8), 'big')
    time_entropy = time.time_ns()
    pid_entropy = os.getpid() << 48
    mem_entropy = id(object()) & 0xFFFFFFFF

    combined = hw_entropy ^ time_entropy ^ pid_entropy ^ mem_entropy
    digest = hashlib.sha256(combined.to_bytes(32, 'big')).hexdigest()
    return digest[:16]


# =============================================================================
# Seeded Random Number Generator
# =============================================================================

class SeededRandom:
    """
    Deterministic random number generator keyed by a seed string.

    ``next()`` is the only primitive; ``next_int``, ``choice`` and
    ``weighted_choice`` all consume exactly the ``next()`` calls documented
    on them, so a given seed replays the same sequence of draws for the same
    sequence of calls.

    The underlying generator is the Mersenne Twister seeded from the string
    (hashed with SHA-512), whose ``random()`` output for a string seed is
    stable across platforms and Python releases.
    """

    def __init__(self, seed: Optional[str] = None):
        if seed is None:
            seed = derive_seed()
        if not isinstance(seed, str):
            raise TypeError(f"seed must be a string, got {type(seed).__name__}")
        self._seed = seed
        self._rng = random.Random(seed)
        self._draws = 0

    @property
    def seed(self) -> str:
        """Seed this handle was created from (derived when none was given)."""
        return self._seed

    @property
    def draws(self) -> int:
        """Number of ``next()`` calls consumed so far."""
        return self._draws

    def next(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        self._draws += 1
        return self._rng.random()

    # Alias matching the random module's spelling
    random = next

    def next_int(self, low: int, high: int) -> int:
        """
        Return an integer N such that low <= N <= high.

        Consumes one ``next()`` call.
        """
        if high < low:
            raise ValueError(f"Empty range: [{low}, {high}]")
        return low + math.floor(self.next() * (high - low + 1))

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a uniformly chosen element. Consumes one ``next()`` call."""
        if not seq:
            raise EmptyInputError("Cannot choose from empty sequence")
        return seq[self.next_int(0, len(seq) - 1)]

    def weighted_choice(self, items: Iterable[Tuple[Any, float]]) -> Any:
        """Choose from (item, weight) pairs. See ``weighted_pick``."""
        return weighted_pick(items, self)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self._seed!r}, draws={self._draws})"


def create_rng(seed: Optional[str] = None) -> SeededRandom:
    """Create a new RNG handle; derives a seed when none is given."""
    return SeededRandom(seed)


# =============================================================================
# Weighted Selection
# =============================================================================

def _check_weight(weight: Any) -> float:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise InvalidWeightError(f"Weight must be a number, got {weight!r}")
    try:
        value = float(weight)
    except OverflowError:
        raise InvalidWeightError(f"Weight is too large: {weight!r}") from None
    if not math.isfinite(value) or value < 0:
        raise InvalidWeightError(f"Weight must be finite and >= 0, got {weight!r}")
    return value


def weighted_pick(items: Iterable[Tuple[Any, float]], rng: SeededRandom) -> Any:
    """
    Choose from items with weights.

    Args:
        items: (value, weight) pairs; scanned in the given order
        rng: Handle to draw from (exactly one ``next()`` call)

    Returns:
        The first value whose cumulative weight exceeds ``next() * total``

    Raises:
        InvalidWeightError: no items, a negative or non-finite weight, all
            weights zero, or a total that overflows a float
    """
    pairs: List[Tuple[Any, float]] = [(value, _check_weight(weight)) for value, weight in items]
    if not pairs:
        raise InvalidWeightError("Cannot choose from an empty set of weighted items")

    try:
        total = math.fsum(weight for _, weight in pairs)
    except OverflowError:
        raise InvalidWeightError("Sum of weights is too large to represent") from None
    if total <= 0:
        raise InvalidWeightError("Sum of weights must be greater than zero")

    r = rng.next() * total

    cumulative = 0.0
    for value, weight in pairs:
        cumulative += weight
        if cumulative > r:
            return value

    # Rounding left r at the very top; fall back to the last selectable item
    for value, weight in reversed(pairs):
        if weight > 0:
            return value
    raise InvalidWeightError("Sum of weights must be greater than zero")


__all__ = [
    'SeededRandom',
    'create_rng',
    'derive_seed',
    'weighted_pick',
]

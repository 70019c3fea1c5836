"""
neuroinfo.stats.common.streams
==============================

Random number streams for the bootstrap.

All randomness comes from `numpy.random.Generator` objects built on PCG64,
so results are reproducible from a seed. Independent replications get
statistically independent child streams via `SeedSequence.spawn`.

Examples
--------
>>> from neuroinfo.stats.common.streams import as_generator, spawn_generators
>>> a, b = as_generator(7), as_generator(7)
>>> int(a.integers(0, 100)) == int(b.integers(0, 100))
True
>>> len(spawn_generators(7, 3))
3
"""

from __future__ import annotations
from typing import List, Optional, Union

import numpy as np
from numpy.random import Generator, PCG64, SeedSequence

from neuroinfo.core.errors import InvalidArgumentError

RandomSource = Union[None, int, SeedSequence, Generator]


def as_generator(rng: RandomSource = None) -> Generator:
    """
    Coerce a seed-like value to a numpy Generator.

    Args:
        rng: None (fresh OS entropy), an int seed, a SeedSequence, or a
            Generator, which is returned unchanged so callers can share it

    Returns:
        numpy.random.Generator
    """
    if isinstance(rng, Generator):
        return rng
    if rng is None or isinstance(rng, SeedSequence):
        return Generator(PCG64(rng))
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        if rng < 0:
            raise InvalidArgumentError(f"seed must be non-negative, got {rng}")
        return Generator(PCG64(int(rng)))
    raise InvalidArgumentError(
        f"rng must be None, an int seed, a SeedSequence or a Generator, got {type(rng).__name__}"
    )


def spawn_generators(seed: Optional[Union[int, SeedSequence]], n: int) -> List[Generator]:
    """Return `n` independent generators derived from one seed."""
    if n < 1:
        raise InvalidArgumentError(f"n must be >= 1, got {n}")
    root = seed if isinstance(seed, SeedSequence) else SeedSequence(seed)
    return [Generator(PCG64(child)) for child in root.spawn(n)]

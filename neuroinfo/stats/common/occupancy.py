"""
neuroinfo.stats.common.occupancy
================================

Finite-sampling bias of entropy estimates from bin occupancy.

The plug-in entropy of a response distribution is biased downward when the
number of samples is limited. To first order the bias is (R - 1) / (2 N ln 2)
bits, where R is the number of bins with non-zero probability under the true
distribution. Counting only the bins seen in the sample underestimates R, so
R is extrapolated with the Bayesian procedure of Panzeri & Treves.

References:
    - S. Panzeri, A. Treves (1996) "Analytical estimates of limited sampling
      biases in different information measures", Network: Computation in
      Neural Systems 7, pp. 87-107.
    - G. Pola, S. Schultz, R. Petersen, S. Panzeri (2003) "A practical guide
      to information analysis of spike trains", Neuroscience Databases: A
      Practical Guide, pp. 139-153.

Examples
--------
>>> from neuroinfo.stats.common.occupancy import estimate_bias
>>> round(estimate_bias([5, 5], 10), 4)
0.0721
>>> 0 < estimate_bias([5, 5, 0, 0], 10) < 0.2164
True
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from neuroinfo.core.components import BiasCorrection, CountsLike
from neuroinfo.core.errors import InvalidArgumentError
from neuroinfo.core.names import BiasMethod
from neuroinfo.stats.common.validation import (
    check_count,
    check_counts_vector,
    check_positive_scalar,
)

logger = logging.getLogger(__name__)


def _expected_occupancy(
    p_nonzero: np.ndarray, n_samples: float, n_naive: int, n_bins: int
) -> float:
    """
    Expected number of occupied bins if the true occupancy were `n_bins`.

    The observed bins get Bayes-adjusted probabilities; the remaining
    `n_bins - n_naive` unobserved bins share the prior mass `gamma` uniformly.
    """
    n_unseen = n_bins - n_naive
    gamma = n_unseen * (1 - (n_samples / (n_samples + n_naive)) ** (1 / n_samples))

    p_bayes = (p_nonzero * n_samples + 1) / (n_samples + n_naive) * (1 - gamma)
    expected = float(np.sum(1 - np.power(1 - p_bayes, n_samples)))

    p_unseen = gamma / n_unseen
    expected += n_unseen * (1 - (1 - p_unseen) ** n_samples)
    return expected


def estimate_occupied_bins(
    counts: CountsLike, n_samples: float, total_bins: Optional[int] = None
) -> int:
    """
    Estimate the number of bins occupied under the true distribution.

    Args:
        counts: Observed count per bin (non-negative)
        n_samples: Total number of samples N (> 0)
        total_bins: Number of possible bins Rtot; defaults to len(counts)

    Returns:
        Estimated occupancy R with Rnaive <= R <= Rtot

    Raises:
        InvalidArgumentError: on non-positive N, negative or all-zero counts, or fewer
            possible bins than observed ones

    Algorithm:
        1. Rnaive = number of bins with a positive count
        2. If every possible bin was observed, R = Rtot
        3. Otherwise increase R from Rnaive while the expected occupancy of
           a sample of size N drawn from R bins gets closer to Rnaive
        4. Step back to the last R that still improved the match, unless
           the search stopped at Rtot while improving
    """
    n_samples = check_positive_scalar(n_samples, "n_samples")
    arr = check_counts_vector(counts)
    if total_bins is None:
        total_bins = arr.size
    total_bins = check_count(total_bins, "total_bins")

    p_nonzero = arr[arr > 0] / n_samples
    n_naive = int(p_nonzero.size)
    if n_naive == 0:
        raise InvalidArgumentError("counts must contain at least one observation")
    if n_naive > total_bins:
        raise InvalidArgumentError(
            f"total_bins must be >= the {n_naive} observed bins, got {total_bins}"
        )

    if n_naive == total_bins:
        return total_bins

    expected = n_naive - float(np.sum(np.power(1 - p_nonzero, n_samples)))
    delta_previous = float(total_bins)
    delta = abs(n_naive - expected)

    occupied = n_naive
    while delta < delta_previous and occupied < total_bins:
        occupied += 1
        expected = _expected_occupancy(p_nonzero, n_samples, n_naive, occupied)
        delta_previous = delta
        delta = abs(n_naive - expected)

    # Undo the last, non-improving step unless the search hit the ceiling
    # while still improving.
    occupied -= 1
    if delta < delta_previous:
        occupied += 1

    logger.debug(
        "occupancy search: Rnaive=%d Rtot=%d -> R=%d (delta=%.3g)",
        n_naive,
        total_bins,
        occupied,
        delta,
    )
    return occupied


def estimate_bias(
    counts: CountsLike, n_samples: float, total_bins: Optional[int] = None
) -> float:
    """
    Panzeri-Treves bias of the plug-in entropy, in bits.

    Args:
        counts: Observed count per bin (non-negative)
        n_samples: Total number of samples N (> 0)
        total_bins: Number of possible bins Rtot; defaults to len(counts)

    Returns:
        (R - 1) / (2 N ln 2) with R from `estimate_occupied_bins`

    Examples:
        >>> estimate_bias([1, 2, 3, 4], 10) == 3 / (20 * math.log(2))
        True
    """
    occupied = estimate_occupied_bins(counts, n_samples, total_bins)
    n_samples = float(n_samples)
    return (occupied - 1) / (2 * n_samples * math.log(2))


@dataclass(kw_only=True)
class PanzeriTrevesCorrection(BiasCorrection):
    """
    Panzeri-Treves bias correction as a reusable component.

    Examples:
        >>> correction = PanzeriTrevesCorrection()
        >>> correction.occupied_bins([1, 1, 0, 0, 0, 0], 2)
        4
    """

    method: Union[BiasMethod, str] = BiasMethod.PANZERI_TREVES

    def occupied_bins(
        self, counts: CountsLike, n_samples: float, total_bins: Optional[int] = None
    ) -> int:
        return estimate_occupied_bins(counts, n_samples, total_bins)

    def bias(
        self,
        counts: CountsLike,
        n_samples: float,
        total_bins: Optional[int] = None,
    ) -> float:
        return estimate_bias(counts, n_samples, total_bins)

"""
neuroinfo.core.components
=========================

Base classes for the estimator components.

Components are keyword-only dataclasses: their fields hold configuration,
and a single method performs one stateless computation. Concrete
implementations live in `neuroinfo.stats.common`.

Component Types:
- `BiasCorrection`: Estimate the finite-sampling bias of an entropy from bin counts
- `ResponseAggregator`: Reduce a response tensor grouped by stimulus to covariance matrices

Examples
--------
>>> class NoCorrection(BiasCorrection):
...     def bias(self, counts, n_samples, total_bins=None):
...         return 0.0
...
>>> NoCorrection().bias([3, 1], 4)
0.0
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Union, TYPE_CHECKING

from neuroinfo.core.names import BiasMethod

if TYPE_CHECKING:
    import numpy as np
    from neuroinfo.stats.common.covariance import CovarianceResult

# Type aliases
CountsLike = Union[Sequence[float], "np.ndarray"]
TrialCountsLike = Union[Sequence[int], "np.ndarray"]


@dataclass(kw_only=True)
class BiasCorrection(ABC):
    """
    Base class for entropy bias corrections.

    A correction maps the observed bin occupancy of one response
    distribution to a bias term in bits, to be subtracted from the naive
    plug-in entropy.
    """

    method: Union[BiasMethod, str] = "generic"

    @abstractmethod
    def bias(
        self,
        counts: CountsLike,
        n_samples: float,
        total_bins: Optional[int] = None,
    ) -> float:
        """Return the bias (bits) for the given occupancy counts."""
        pass


@dataclass(kw_only=True)
class ResponseAggregator(ABC):
    """
    Base class for response covariance aggregators.

    Aggregators read a `(channels, trial slots, stimuli)` tensor together
    with the number of valid trials per stimulus.
    """

    bootstrap: bool = False

    @abstractmethod
    def aggregate(
        self, responses: "np.ndarray", trial_counts: TrialCountsLike
    ) -> "CovarianceResult":
        """Run one accumulation pass and return the finalized matrices."""
        pass

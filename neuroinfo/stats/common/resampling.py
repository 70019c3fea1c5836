"""
neuroinfo.stats.common.resampling
=================================

Bootstrap null distributions of stimulus-conditional covariance.

Each replication is an independent `aggregate_covariance` pass with shuffled
stimulus labels, driven by its own random stream. Replications share no
state, so they can be computed in any order (or in separate processes) and
still reproduce from the plan's seed.

Examples
--------
>>> import numpy as np
>>> from neuroinfo.stats.common.resampling import BootstrapPlan, bootstrap_replications
>>> responses = np.arange(12, dtype=float).reshape(2, 3, 2)
>>> reps = bootstrap_replications(responses, [3, 3], BootstrapPlan(n_replications=4, seed=1))
>>> len(reps), all(r.bootstrap for r in reps)
(4, True)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np
from scipy.stats import percentileofscore

from neuroinfo.core.components import TrialCountsLike
from neuroinfo.core.errors import InvalidArgumentError
from neuroinfo.stats.common.covariance import CovarianceResult, aggregate_covariance
from neuroinfo.stats.common.streams import spawn_generators

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapPlan:
    """
    Configuration of a set of bootstrap replications.

    Attributes:
        n_replications: Number of shuffled passes (>= 1)
        seed: Root seed; None draws fresh OS entropy
    """

    n_replications: int
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.n_replications, bool) or not isinstance(
            self.n_replications, (int, np.integer)
        ):
            raise InvalidArgumentError(
                f"n_replications must be an integer, got {self.n_replications!r}"
            )
        if self.n_replications < 1:
            raise InvalidArgumentError(
                f"n_replications must be >= 1, got {self.n_replications}"
            )


def bootstrap_replications(
    responses: Any, trial_counts: TrialCountsLike, plan: BootstrapPlan
) -> List[CovarianceResult]:
    """
    Run `plan.n_replications` label-shuffled aggregation passes.

    Args:
        responses: (Nc, maxNt, Ns) response tensor
        trial_counts: Valid trials per stimulus
        plan: Number of replications and root seed

    Returns:
        One CovarianceResult per replication, in stream order
    """
    streams = spawn_generators(plan.seed, plan.n_replications)
    replications = [
        aggregate_covariance(responses, trial_counts, bootstrap=True, rng=stream)
        for stream in streams
    ]
    logger.debug("computed %d bootstrap replications", len(replications))
    return replications


def null_percentiles(
    observed: CovarianceResult, replications: Sequence[CovarianceResult]
) -> np.ndarray:
    """
    Locate observed per-stimulus variances within the bootstrap null.

    Args:
        observed: Result of the unshuffled pass
        replications: Shuffled passes over the same data

    Returns:
        (Ns, Nc) array of percentiles in [0, 100]: the share of bootstrap
        variances that are <= the observed variance

    Examples:
        >>> import numpy as np
        >>> from neuroinfo.stats.common.covariance import aggregate_covariance
        >>> responses = np.arange(8, dtype=float).reshape(1, 4, 2)
        >>> observed = aggregate_covariance(responses, [4, 4])
        >>> null_percentiles(observed, [observed, observed]).tolist()
        [[100.0], [100.0]]
    """
    if not replications:
        raise InvalidArgumentError("replications must not be empty")

    null = np.stack([r.per_stimulus_diag for r in replications])
    if null.shape[1:] != observed.per_stimulus_diag.shape:
        raise InvalidArgumentError(
            f"replication shape {null.shape[1:]} does not match observed "
            f"{observed.per_stimulus_diag.shape}"
        )

    n_stimuli, n_channels = observed.per_stimulus_diag.shape
    percentiles = np.empty((n_stimuli, n_channels))
    for s in range(n_stimuli):
        for c in range(n_channels):
            percentiles[s, c] = percentileofscore(
                null[:, s, c], observed.per_stimulus_diag[s, c], kind="weak"
            )
    return percentiles

"""
neuroinfo.stats.common.covariance
=================================

Per-stimulus and pooled response covariance in a single pass.

The responses of `Nc` channels are recorded over up to `maxNt` trials for
each of `Ns` stimuli. One pass over the valid trials accumulates, for every
stimulus, the raw sum of outer products and the linear sums of the
responses, and turns them into scatter matrices (sums of centered outer
products; divide by the degrees of freedom to get covariances).

Mean handling happens at two levels:

- a stimulus is demeaned with its own sample mean the moment its last trial
  has been accumulated;
- the pooled matrix collects the *raw* per-stimulus sums and is demeaned
  once, with the grand mean, after the last trial overall.

With `bootstrap=True` the stimulus labels are shuffled: trials are dealt to
stimuli uniformly at random while every stimulus still receives exactly
`Nt[s]` trials, which yields a null distribution for stimulus-dependent
covariance structure.

Examples
--------
>>> import numpy as np
>>> from neuroinfo.stats.common.covariance import aggregate_covariance
>>> responses = np.array([[1.0, 3.0], [2.0, 4.0]]).reshape(2, 1, 2)
>>> result = aggregate_covariance(responses, [1, 1])
>>> result.per_stimulus_cov[:, :, 0].tolist()
[[0.0, 0.0], [0.0, 0.0]]
>>> result.pooled_cov.tolist()
[[2.0, 2.0], [2.0, 2.0]]
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple

import numpy as np

from neuroinfo.core.components import ResponseAggregator, TrialCountsLike
from neuroinfo.core.names import StimulusIndex, UNASSIGNED
from neuroinfo.stats.common.streams import RandomSource, as_generator
from neuroinfo.stats.common.validation import (
    check_declared,
    check_response_tensor,
    check_trial_counts,
    check_valid_slots_finite,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CovarianceResult:
    """
    Finalized output of one aggregation pass.

    Attributes:
        per_stimulus_cov: (Nc, Nc, Ns) scatter matrix of each stimulus
        pooled_cov: (Nc, Nc) scatter matrix of all trials around the grand mean
        per_stimulus_diag: (Ns, Nc) diagonals of `per_stimulus_cov`
        pooled_diag: (Nc,) diagonal of `pooled_cov`
        assignment: (maxNt, Ns) stimulus each source trial slot was
            assigned to, -1 for slots beyond Nt[s]
        bootstrap: whether stimulus labels were shuffled
    """

    per_stimulus_cov: np.ndarray
    pooled_cov: np.ndarray
    per_stimulus_diag: np.ndarray
    pooled_diag: np.ndarray
    assignment: np.ndarray
    bootstrap: bool = False

    @property
    def n_channels(self) -> int:
        return int(self.pooled_cov.shape[0])

    @property
    def n_stimuli(self) -> int:
        return int(self.per_stimulus_cov.shape[2])

    def assigned_trials(self) -> np.ndarray:
        """Number of trials assigned to each stimulus."""
        valid = self.assignment[self.assignment != UNASSIGNED]
        return np.bincount(valid, minlength=self.n_stimuli)

    def as_tuple(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Return (per_stimulus_cov, pooled_cov, per_stimulus_diag, pooled_diag)."""
        return (
            self.per_stimulus_cov,
            self.pooled_cov,
            self.per_stimulus_diag,
            self.pooled_diag,
        )

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.as_tuple())


class StimulusAssigner:
    """
    Deals trials to stimuli at random without exceeding any stimulus's quota.

    The stimuli that still have free slots are kept in `candidates[0..end]`.
    Each draw picks a uniform position in that range; when the chosen
    stimulus becomes full, its position is overwritten with the last live
    entry and the range shrinks by one.

    Examples:
        >>> assigner = StimulusAssigner([2, 1], rng=0)
        >>> sorted(assigner.draw() for _ in range(3))
        [0, 0, 1]
        >>> assigner.exhausted
        True
    """

    def __init__(self, trial_counts: TrialCountsLike, rng: RandomSource = None) -> None:
        self.quota = np.asarray(trial_counts, dtype=np.int64)
        self.filled = np.zeros(self.quota.size, dtype=np.int64)
        self.candidates: List[int] = list(range(self.quota.size))
        self.end = self.quota.size - 1
        self._rng = as_generator(rng)

    @property
    def exhausted(self) -> bool:
        return self.end < 0

    def draw(self) -> StimulusIndex:
        """Assign one trial and return the stimulus it went to."""
        if self.exhausted:
            raise RuntimeError("All stimulus quotas are already filled")

        position = int(self._rng.integers(0, self.end + 1))
        target = self.candidates[position]
        self.filled[target] += 1

        if self.filled[target] == self.quota[target]:
            self.candidates[position] = self.candidates[self.end]
            self.end -= 1

        return StimulusIndex(target)


def _mirror_upper(matrix: np.ndarray) -> np.ndarray:
    """Copy the strict upper triangle onto the lower one."""
    upper = np.triu(matrix)
    return upper + np.triu(matrix, 1).T


def aggregate_covariance(
    responses: Any,
    trial_counts: TrialCountsLike,
    *,
    bootstrap: bool = False,
    rng: RandomSource = None,
    n_channels: Optional[int] = None,
    max_trials: Optional[int] = None,
    n_stimuli: Optional[int] = None,
    total_trials: Optional[int] = None,
) -> CovarianceResult:
    """
    Compute per-stimulus and pooled scatter matrices in one pass.

    Args:
        responses: (Nc, maxNt, Ns) array; responses[c, t, s] is channel c on
            trial t of stimulus s
        trial_counts: Number of valid trials Nt[s] per stimulus (each >= 1)
        bootstrap: Shuffle stimulus labels while preserving each Nt[s]
        rng: Seed or numpy Generator for the shuffle (ignored otherwise)
        n_channels, max_trials, n_stimuli, total_trials: Optional explicit
            dimensions; checked against the data when given

    Returns:
        CovarianceResult

    Raises:
        InvalidArgumentError: on malformed shapes or inconsistent trial counts

    Algorithm:
        For s = 0..Ns-1 and t = 0..Nt[s]-1:
        1. Pick the target stimulus (s itself, or a random one with free slots)
        2. Add the upper triangle of x x^T and the sums of x to the target
        3. If the target just reached its quota, add its raw matrix to the
           pooled sum and subtract its own mean outer product
        4. After the very last trial, subtract the grand mean outer product
           from the pooled sum
    """
    data = check_response_tensor(responses)
    nc, max_nt, ns = data.shape
    check_declared(n_channels, nc, "n_channels")
    check_declared(max_trials, max_nt, "max_trials")
    check_declared(n_stimuli, ns, "n_stimuli")
    quota, tot_nt = check_trial_counts(trial_counts, ns, max_nt)
    check_declared(total_trials, tot_nt, "total_trials")
    check_valid_slots_finite(data, quota)

    cov_prs = np.zeros((nc, nc, ns))
    cov_pr = np.zeros((nc, nc))
    diag_prs = np.zeros((ns, nc))
    diag_pr = np.zeros(nc)
    sum_prs = np.zeros((nc, ns))
    sum_pr = np.zeros(nc)
    filled = np.zeros(ns, dtype=np.int64)
    assignment = np.full((max_nt, ns), UNASSIGNED, dtype=np.int64)

    assigner = StimulusAssigner(quota, rng) if bootstrap else None
    upper = np.triu(np.ones((nc, nc), dtype=bool))

    for s in range(ns):
        for t in range(int(quota[s])):
            x = data[:, t, s]

            if assigner is not None:
                target = int(assigner.draw())
                filled[target] = assigner.filled[target]
            else:
                target = s
                filled[s] = t + 1
            assignment[t, s] = target

            cov_prs[:, :, target] += np.where(upper, np.outer(x, x), 0.0)
            sum_prs[:, target] += x
            sum_pr += x

            stimulus_complete = filled[target] == quota[target]
            last_trial = s == ns - 1 and t == quota[s] - 1

            if stimulus_complete:
                raw = cov_prs[:, :, target]
                cov_pr += raw
                mean_outer = np.outer(sum_prs[:, target], sum_prs[:, target])
                centered = _mirror_upper(raw - mean_outer / quota[target])
                cov_prs[:, :, target] = centered
                diag_prs[target, :] = np.diag(centered)

            if last_trial:
                cov_pr = _mirror_upper(cov_pr - np.outer(sum_pr, sum_pr) / tot_nt)
                diag_pr = np.diag(cov_pr).copy()

    logger.debug(
        "aggregated %d trials over %d stimuli and %d channels (bootstrap=%s)",
        tot_nt,
        ns,
        nc,
        bootstrap,
    )
    return CovarianceResult(
        per_stimulus_cov=cov_prs,
        pooled_cov=cov_pr,
        per_stimulus_diag=diag_prs,
        pooled_diag=diag_pr,
        assignment=assignment,
        bootstrap=bootstrap,
    )


@dataclass(kw_only=True)
class StimulusCovarianceAggregator(ResponseAggregator):
    """
    Covariance aggregation as a reusable component.

    Each call to `aggregate` is an independent pass. With `bootstrap=True`
    the shuffles of successive calls come from one generator seeded with
    `seed`, so a fixed seed reproduces the whole sequence of calls.
    """

    seed: Optional[int] = None
    _rng: np.random.Generator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._rng = as_generator(self.seed)

    def aggregate(
        self, responses: Any, trial_counts: TrialCountsLike
    ) -> CovarianceResult:
        return aggregate_covariance(
            responses, trial_counts, bootstrap=self.bootstrap, rng=self._rng
        )

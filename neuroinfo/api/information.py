"""
neuroinfo.api.information
=========================

Facade for the estimators used in information analysis of neural recordings.

This module exposes the numerical core with the vocabulary of the analysis:
sampling bias of a response distribution, stimulus-conditional response
covariance, and its label-shuffled null distribution.

Examples
--------
>>> import numpy as np
>>> from neuroinfo.api.information import sampling_bias, response_covariance
>>> round(sampling_bias([4, 4, 2], 10), 4)
0.1443
>>> responses = np.random.default_rng(0).normal(size=(3, 5, 2))
>>> response_covariance(responses, [5, 4]).pooled_cov.shape
(3, 3)
"""

from __future__ import annotations
from typing import Any, List, Optional, Union

from neuroinfo.core.components import BiasCorrection, CountsLike, TrialCountsLike
from neuroinfo.core.errors import InvalidArgumentError
from neuroinfo.core.names import BiasMethod
from neuroinfo.stats.common.covariance import CovarianceResult, aggregate_covariance
from neuroinfo.stats.common.occupancy import PanzeriTrevesCorrection
from neuroinfo.stats.common.resampling import BootstrapPlan, bootstrap_replications

_CORRECTIONS = {
    BiasMethod.PANZERI_TREVES: PanzeriTrevesCorrection,
}


def bias_correction(method: Union[BiasMethod, str] = "panzeri_treves") -> BiasCorrection:
    """
    Look up a bias correction by name.

    Parameters
    ----------
    method : BiasMethod or str, default="panzeri_treves"
        Name of the correction

    Returns
    -------
    BiasCorrection
    """
    try:
        key = BiasMethod(method)
    except ValueError:
        known = ", ".join(m.value for m in BiasMethod)
        raise InvalidArgumentError(f"Unknown bias method: {method!r} (known: {known})")
    return _CORRECTIONS[key]()


def sampling_bias(
    counts: CountsLike,
    n_samples: float,
    total_bins: Optional[int] = None,
    method: Union[BiasMethod, str] = "panzeri_treves",
) -> float:
    """
    Limited-sampling bias (bits) of the entropy of one response distribution.

    Parameters
    ----------
    counts : sequence of float
        Number of observations in each response bin
    n_samples : float
        Total number of observations
    total_bins : int, optional
        Number of possible response bins; defaults to len(counts)
    method : BiasMethod or str, default="panzeri_treves"
        Bias correction to apply

    Returns
    -------
    float
        Bias to subtract from the plug-in entropy
    """
    return bias_correction(method).bias(counts, n_samples, total_bins)


def response_covariance(
    responses: Any, trial_counts: TrialCountsLike
) -> CovarianceResult:
    """
    Stimulus-conditional and pooled response scatter matrices.

    Parameters
    ----------
    responses : array of shape (channels, trial slots, stimuli)
    trial_counts : sequence of int
        Valid trials per stimulus

    Returns
    -------
    CovarianceResult
    """
    return aggregate_covariance(responses, trial_counts, bootstrap=False)


def shuffled_response_covariance(
    responses: Any, trial_counts: TrialCountsLike, seed: Optional[int] = None
) -> CovarianceResult:
    """
    Same as `response_covariance` after shuffling the stimulus labels.

    Every stimulus keeps its number of trials; only which trials it gets
    is randomized.
    """
    return aggregate_covariance(responses, trial_counts, bootstrap=True, rng=seed)


def shuffled_null_distribution(
    responses: Any,
    trial_counts: TrialCountsLike,
    n_replications: int,
    seed: Optional[int] = None,
) -> List[CovarianceResult]:
    """
    Independent label-shuffled replications for a resampling test.

    Examples
    --------
    >>> import numpy as np
    >>> responses = np.ones((2, 3, 2))
    >>> len(shuffled_null_distribution(responses, [3, 2], n_replications=5, seed=0))
    5
    """
    plan = BootstrapPlan(n_replications=n_replications, seed=seed)
    return bootstrap_replications(responses, trial_counts, plan)

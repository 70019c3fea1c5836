"""
neuroinfo.api - User-Friendly Facade
====================================

This module provides an off-the-shelf usage interface for this package,
organized by what an analysis of neural recordings needs and worded in the
vocabulary of that domain. In terms of the design patterns, this is the
facade pattern.

Examples
--------
>>> # Limited-sampling bias of a response entropy
>>> from neuroinfo.api import sampling_bias
>>> bias = sampling_bias([3, 1, 0, 0], n_samples=4)
>>>
>>> # Stimulus-conditional covariance and its shuffled null distribution
>>> import numpy as np
>>> from neuroinfo.api import response_covariance, shuffled_null_distribution
>>> responses = np.random.default_rng(1).normal(size=(2, 4, 3))
>>> observed = response_covariance(responses, [4, 4, 3])
>>> null = shuffled_null_distribution(responses, [4, 4, 3], n_replications=10, seed=1)

Architecture
------------
This facade delegates to the underlying components:
- neuroinfo.core: Names, errors and component base classes
- neuroinfo.stats.common: The estimators themselves
- neuroinfo.reporting: Tabular views of the results
"""

from neuroinfo.api.information import (
    bias_correction,
    response_covariance,
    sampling_bias,
    shuffled_null_distribution,
    shuffled_response_covariance,
)

__all__ = [
    "bias_correction",
    "response_covariance",
    "sampling_bias",
    "shuffled_null_distribution",
    "shuffled_response_covariance",
]

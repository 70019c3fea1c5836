import numpy as np
import pytest
from numpy.testing import assert_array_equal

from neuroinfo.api import (
    bias_correction,
    response_covariance,
    sampling_bias,
    shuffled_null_distribution,
    shuffled_response_covariance,
)
from neuroinfo.core.errors import InvalidArgumentError
from neuroinfo.core.names import BiasMethod
from neuroinfo.stats.common.occupancy import PanzeriTrevesCorrection, estimate_bias


def test_sampling_bias_defaults_to_panzeri_treves():
    counts = [3, 1, 0, 0, 0]
    assert sampling_bias(counts, 4) == estimate_bias(counts, 4)
    assert sampling_bias(counts, 4, method=BiasMethod.PANZERI_TREVES) == estimate_bias(counts, 4)


def test_bias_correction_lookup():
    assert isinstance(bias_correction("panzeri_treves"), PanzeriTrevesCorrection)
    with pytest.raises(InvalidArgumentError, match="Unknown bias method"):
        bias_correction("quadratic_extrapolation")


def test_response_covariance_is_unshuffled(responses, trial_counts):
    result = response_covariance(responses, trial_counts)
    assert result.bootstrap is False
    assert_array_equal(result.assigned_trials(), trial_counts)


def test_shuffled_response_covariance_reproduces_with_seed(responses, trial_counts):
    a = shuffled_response_covariance(responses, trial_counts, seed=12)
    b = shuffled_response_covariance(responses, trial_counts, seed=12)

    assert a.bootstrap
    assert_array_equal(a.assignment, b.assignment)


def test_shuffled_null_distribution_length(responses, trial_counts):
    null = shuffled_null_distribution(responses, trial_counts, n_replications=3, seed=0)
    assert len(null) == 3
    assert all(r.bootstrap for r in null)


def test_facade_propagates_invalid_arguments():
    with pytest.raises(InvalidArgumentError):
        sampling_bias([1, 2], 0)
    with pytest.raises(InvalidArgumentError):
        response_covariance(np.zeros((2, 2, 2)), [0, 2])

import numpy as np
import pytest


@pytest.fixture
def trial_counts():
    return np.array([5, 3, 4])


@pytest.fixture
def responses(trial_counts):
    """(3 channels, 5 slots, 3 stimuli) tensor with NaN in the unused slots."""
    rng = np.random.default_rng(1234)
    data = rng.normal(size=(3, 5, 3))
    data[1, :, 0] += 2.0
    data[:, :, 2] *= 3.0
    for s, n in enumerate(trial_counts):
        data[:, n:, s] = np.nan
    return data

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from neuroinfo.core.errors import InvalidArgumentError
from neuroinfo.stats.common.covariance import (
    CovarianceResult,
    StimulusAssigner,
    StimulusCovarianceAggregator,
    aggregate_covariance,
)

from helpers import scatter


def test_worked_example_single_trial_per_stimulus():
    # Stimulus 0 evokes (1, 2), stimulus 1 evokes (3, 4).
    responses = np.array([[1.0, 3.0], [2.0, 4.0]]).reshape(2, 1, 2)
    result = aggregate_covariance(responses, [1, 1])

    assert_array_equal(result.per_stimulus_cov, np.zeros((2, 2, 2)))
    assert_array_equal(result.per_stimulus_diag, np.zeros((2, 2)))
    assert_array_equal(result.pooled_cov, [[2.0, 2.0], [2.0, 2.0]])
    assert_array_equal(result.pooled_diag, [2.0, 2.0])


def test_per_stimulus_matrices_are_scatter_matrices(responses, trial_counts):
    result = aggregate_covariance(responses, trial_counts)

    for s, n in enumerate(trial_counts):
        assert_allclose(result.per_stimulus_cov[:, :, s], scatter(responses[:, :n, s]))


def test_pooled_matrix_is_centered_on_grand_mean(responses, trial_counts):
    result = aggregate_covariance(responses, trial_counts)

    pooled = np.concatenate(
        [responses[:, :n, s] for s, n in enumerate(trial_counts)], axis=1
    )
    assert_allclose(result.pooled_cov, scatter(pooled))


def test_pooled_matrix_is_not_the_sum_of_per_stimulus_matrices(responses, trial_counts):
    result = aggregate_covariance(responses, trial_counts)

    within = result.per_stimulus_cov.sum(axis=2)
    # Pooled = within-stimulus + between-stimulus scatter.
    assert np.all(np.diag(result.pooled_cov) > np.diag(within))


@pytest.mark.parametrize("bootstrap", [False, True])
def test_outputs_are_symmetric_with_consistent_diagonals(responses, trial_counts, bootstrap):
    result = aggregate_covariance(responses, trial_counts, bootstrap=bootstrap, rng=3)

    assert_array_equal(result.pooled_cov, result.pooled_cov.T)
    assert_array_equal(result.pooled_diag, np.diag(result.pooled_cov))
    for s in range(len(trial_counts)):
        cov = result.per_stimulus_cov[:, :, s]
        assert_array_equal(cov, cov.T)
        assert_array_equal(result.per_stimulus_diag[s], np.diag(cov))


def test_output_shapes(responses, trial_counts):
    cov_prs, cov_pr, diag_prs, diag_pr = aggregate_covariance(responses, trial_counts)

    assert cov_prs.shape == (3, 3, 3)
    assert cov_pr.shape == (3, 3)
    assert diag_prs.shape == (3, 3)
    assert diag_pr.shape == (3,)


def test_non_bootstrap_is_reproducible(responses, trial_counts):
    first = aggregate_covariance(responses, trial_counts)
    second = aggregate_covariance(responses, trial_counts)

    for a, b in zip(first, second):
        assert_array_equal(a, b)
    assert_array_equal(first.assignment, second.assignment)


def test_unused_slots_are_never_read(responses, trial_counts):
    zero_padded = np.nan_to_num(responses, nan=0.0)
    padded = aggregate_covariance(responses, trial_counts)
    zeroed = aggregate_covariance(zero_padded, trial_counts)

    for a, b in zip(padded, zeroed):
        assert_array_equal(a, b)


def test_non_bootstrap_assignment_is_identity(responses, trial_counts):
    result = aggregate_covariance(responses, trial_counts)

    for s, n in enumerate(trial_counts):
        assert_array_equal(result.assignment[:n, s], np.full(n, s))
        assert_array_equal(result.assignment[n:, s], np.full(5 - n, -1))
    assert result.bootstrap is False


@pytest.mark.parametrize("seed", [0, 1, 2, 17, 123])
def test_bootstrap_preserves_trial_quotas(responses, trial_counts, seed):
    result = aggregate_covariance(responses, trial_counts, bootstrap=True, rng=seed)

    assert_array_equal(result.assigned_trials(), trial_counts)
    for s, n in enumerate(trial_counts):
        assert np.all(result.assignment[n:, s] == -1)


def test_bootstrap_is_reproducible_with_seed(responses, trial_counts):
    first = aggregate_covariance(responses, trial_counts, bootstrap=True, rng=99)
    second = aggregate_covariance(responses, trial_counts, bootstrap=True, rng=99)

    for a, b in zip(first, second):
        assert_array_equal(a, b)
    assert_array_equal(first.assignment, second.assignment)


def test_bootstrap_matrices_match_assigned_trials(responses, trial_counts):
    result = aggregate_covariance(responses, trial_counts, bootstrap=True, rng=5)

    for target in range(len(trial_counts)):
        slots, sources = np.nonzero(result.assignment == target)
        trials = responses[:, slots, sources]
        assert_allclose(result.per_stimulus_cov[:, :, target], scatter(trials))


def test_bootstrap_leaves_pooled_matrix_unchanged(responses, trial_counts):
    plain = aggregate_covariance(responses, trial_counts)
    shuffled = aggregate_covariance(responses, trial_counts, bootstrap=True, rng=8)

    assert_allclose(shuffled.pooled_cov, plain.pooled_cov)
    assert_allclose(shuffled.pooled_diag, plain.pooled_diag)


def test_bootstrap_with_one_stimulus_matches_plain_pass():
    responses = np.random.default_rng(0).normal(size=(2, 6, 1))
    plain = aggregate_covariance(responses, [6])
    shuffled = aggregate_covariance(responses, [6], bootstrap=True, rng=0)

    for a, b in zip(plain, shuffled):
        assert_array_equal(a, b)


def test_bootstrap_accepts_shared_generator(responses, trial_counts):
    rng = np.random.default_rng(4)
    state = rng.bit_generator.state
    aggregate_covariance(responses, trial_counts, bootstrap=True, rng=rng)
    assert rng.bit_generator.state != state


def test_explicit_dimensions_are_checked(responses, trial_counts):
    result = aggregate_covariance(
        responses,
        trial_counts,
        n_channels=3,
        max_trials=5,
        n_stimuli=3,
        total_trials=12,
    )
    assert isinstance(result, CovarianceResult)

    for kwargs in (
        {"n_channels": 2},
        {"max_trials": 6},
        {"n_stimuli": 4},
        {"total_trials": 11},
        {"total_trials": 0},
    ):
        with pytest.raises(InvalidArgumentError):
            aggregate_covariance(responses, trial_counts, **kwargs)


@pytest.mark.parametrize(
    "counts",
    [[5, 0, 4], [5, 3, 6], [5, 3], [5, 3, 4, 1], [5, 2.5, 4], [[5, 3, 4]]],
)
def test_rejects_inconsistent_trial_counts(responses, counts):
    with pytest.raises(InvalidArgumentError):
        aggregate_covariance(responses, counts)


@pytest.mark.parametrize(
    "responses",
    [np.zeros((3, 5)), np.zeros((0, 5, 3)), np.zeros((3, 5, 3, 1)), "abc"],
)
def test_rejects_malformed_responses(responses):
    with pytest.raises(InvalidArgumentError):
        aggregate_covariance(responses, [1, 1, 1])


def test_rejects_non_finite_valid_slot(responses, trial_counts):
    responses = responses.copy()
    responses[0, 2, 1] = np.nan
    with pytest.raises(InvalidArgumentError, match="finite"):
        aggregate_covariance(responses, trial_counts)


def test_assigner_fills_every_quota_exactly():
    assigner = StimulusAssigner([3, 1, 2], rng=11)
    draws = [assigner.draw() for _ in range(6)]

    assert sorted(draws) == [0, 0, 0, 1, 2, 2]
    assert_array_equal(assigner.filled, [3, 1, 2])
    assert assigner.exhausted
    with pytest.raises(RuntimeError):
        assigner.draw()


def test_assigner_only_draws_from_open_stimuli():
    assigner = StimulusAssigner([1, 4], rng=0)
    draws = [assigner.draw() for _ in range(5)]

    assert draws.count(0) == 1
    # Once stimulus 0 is full, only stimulus 1 remains a candidate.
    first_zero = draws.index(0)
    assert all(d == 1 for d in draws[first_zero + 1 :])
    assert assigner.end == -1


def test_aggregator_component_reproduces_sequence_of_calls(responses, trial_counts):
    a = StimulusCovarianceAggregator(bootstrap=True, seed=21)
    b = StimulusCovarianceAggregator(bootstrap=True, seed=21)

    for _ in range(3):
        ra = a.aggregate(responses, trial_counts)
        rb = b.aggregate(responses, trial_counts)
        assert_array_equal(ra.assignment, rb.assignment)
        assert_array_equal(ra.per_stimulus_cov, rb.per_stimulus_cov)


def test_aggregator_component_defaults_to_plain_pass(responses, trial_counts):
    result = StimulusCovarianceAggregator().aggregate(responses, trial_counts)
    expected = aggregate_covariance(responses, trial_counts)

    assert_array_equal(result.pooled_cov, expected.pooled_cov)
    assert result.bootstrap is False

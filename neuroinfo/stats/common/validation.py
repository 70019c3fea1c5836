"""
neuroinfo.stats.common.validation
=================================

Precondition checks shared by the estimators.

Each helper either returns a normalized numpy view of its input or raises
`InvalidArgumentError`. Estimators call them before any accumulation, so a
rejected call never produces partial output.
"""

from __future__ import annotations
import math
from typing import Any, Optional, Tuple

import numpy as np

from neuroinfo.core.errors import InvalidArgumentError
from neuroinfo.core.names import RESPONSE_AXES


def _is_integral(value: Any) -> bool:
    try:
        return float(value) == math.floor(float(value))
    except (TypeError, ValueError):
        return False


def check_positive_scalar(value: Any, name: str) -> float:
    """Return `value` as a float, requiring it to be finite and > 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")
    return number


def check_count(value: Any, name: str, minimum: int = 1) -> int:
    """Return `value` as an int, requiring it to be integral and >= minimum."""
    if isinstance(value, bool) or not _is_integral(value):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    count = int(value)
    if count < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got {count}")
    return count


def check_counts_vector(counts: Any) -> np.ndarray:
    """
    Validate bin occupancy counts.

    Returns:
        1-D float64 array of the counts

    Raises:
        InvalidArgumentError: if counts are not a non-empty 1-D array of
            finite, non-negative numbers
    """
    try:
        arr = np.asarray(counts, dtype=np.float64)
    except (TypeError, ValueError):
        raise InvalidArgumentError("counts must be a sequence of numbers")
    if arr.ndim != 1 or arr.size == 0:
        raise InvalidArgumentError(
            f"counts must be a non-empty 1-D sequence, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError("counts must be finite")
    if np.any(arr < 0):
        raise InvalidArgumentError(
            f"counts must be non-negative, got minimum {arr.min()}"
        )
    return arr


def check_response_tensor(responses: Any) -> np.ndarray:
    """Validate a `(channels, trial slots, stimuli)` response tensor."""
    try:
        arr = np.asarray(responses, dtype=np.float64)
    except (TypeError, ValueError):
        raise InvalidArgumentError("responses must be a numeric array")
    if arr.ndim != 3:
        raise InvalidArgumentError(
            f"responses must be 3-D {RESPONSE_AXES}, got {arr.ndim}-D"
        )
    for axis, size in zip(RESPONSE_AXES, arr.shape):
        if size < 1:
            raise InvalidArgumentError(f"responses has an empty {axis} axis")
    return arr


def check_trial_counts(
    trial_counts: Any, n_stimuli: int, max_trials: int
) -> Tuple[np.ndarray, int]:
    """
    Validate per-stimulus trial counts against the tensor dimensions.

    Every stimulus needs at least one trial: a stimulus without trials
    would never be finalized.

    Returns:
        Tuple of (int64 trial counts, total number of trials)
    """
    try:
        raw = np.asarray(trial_counts, dtype=np.float64)
    except (TypeError, ValueError):
        raise InvalidArgumentError("trial_counts must be a sequence of integers")
    if raw.ndim != 1 or raw.size != n_stimuli:
        raise InvalidArgumentError(
            f"trial_counts must have one entry per stimulus ({n_stimuli}), "
            f"got shape {raw.shape}"
        )
    if not np.all(np.isfinite(raw)) or np.any(raw != np.floor(raw)):
        raise InvalidArgumentError("trial_counts must be integers")
    counts = raw.astype(np.int64)
    if np.any(counts < 1):
        empty = np.flatnonzero(counts < 1).tolist()
        raise InvalidArgumentError(
            f"every stimulus needs at least one trial, got none for stimuli {empty}"
        )
    if np.any(counts > max_trials):
        raise InvalidArgumentError(
            f"trial_counts cannot exceed the {max_trials} available trial slots, "
            f"got {int(counts.max())}"
        )
    return counts, int(counts.sum())


def check_valid_slots_finite(data: np.ndarray, trial_counts: np.ndarray) -> None:
    """Require finite responses in the first Nt[s] trial slots of every stimulus.

    Slots beyond Nt[s] are never read and may hold padding such as NaN.
    """
    valid = np.arange(data.shape[1])[:, None] < trial_counts[None, :]
    if not np.all(np.isfinite(data[:, valid])):
        raise InvalidArgumentError("responses must be finite in every valid trial slot")


def check_declared(declared: Optional[Any], actual: int, name: str) -> None:
    """Check an explicitly passed dimension against the one found in the data."""
    if declared is None:
        return
    value = check_count(declared, name)
    if value != actual:
        raise InvalidArgumentError(f"{name}={value} does not match the data ({actual})")

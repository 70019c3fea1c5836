"""Reference computations shared by the tests."""

import numpy as np


def scatter(x):
    """Sum of centered outer products of the columns of x (channels x trials)."""
    centered = x - x.mean(axis=1, keepdims=True)
    return centered @ centered.T

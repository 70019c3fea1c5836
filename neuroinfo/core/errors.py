"""
neuroinfo.core.errors
=====================

Exceptions raised by neuroinfo.

Every estimator checks its preconditions before touching the data, so a
call either fails with `InvalidArgumentError` or returns a complete result.

Examples
--------
>>> from neuroinfo.core.errors import InvalidArgumentError
>>> issubclass(InvalidArgumentError, ValueError)
True
"""


class InvalidArgumentError(ValueError):
    """Raised when an input violates an estimator's preconditions.

    Covers malformed shapes, non-positive sample sizes and inconsistent
    trial counts.
    """

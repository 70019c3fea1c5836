"""
neuroinfo: numerical primitives for information analysis of neural recordings.

Information-theoretic analyses of multi-channel, multi-trial, multi-stimulus
recordings rest on a few estimators that must be exact and fast:

- the Panzeri-Treves correction of the limited-sampling bias of entropies,
  which extrapolates how many response bins the true distribution occupies;
- stimulus-conditional and pooled response covariance, computed in one pass
  over the trials, optionally with stimulus labels shuffled under a
  quota-preserving bootstrap to build a null distribution.

Each estimator is a stateless function over numpy arrays. Invalid input is
rejected with `InvalidArgumentError` before any work is done, and all
randomness is drawn from injectable, seedable numpy Generators.

The package logs through the standard `logging` module under the
``neuroinfo`` logger and stays silent unless the application configures
logging.

Example
-------
>>> import neuroinfo
>>> assert hasattr(neuroinfo, "api")
>>> assert hasattr(neuroinfo, "stats")
"""

import logging

from neuroinfo import api, core, reporting, stats
from neuroinfo.core.errors import InvalidArgumentError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = ["api", "core", "reporting", "stats", "InvalidArgumentError"]

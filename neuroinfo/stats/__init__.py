"""
Statistical estimators for information analysis.

1. **Common** (neuroinfo.stats.common):
   Generic estimators that are independent of the information measure they
   feed: the limited-sampling bias of entropies, single-pass response
   covariance, and the bootstrap machinery around it.

Example:
--------
>>> from neuroinfo.stats.common.occupancy import estimate_bias
>>> from neuroinfo.stats.common.covariance import aggregate_covariance
"""

from neuroinfo.stats import common

__all__ = ["common"]

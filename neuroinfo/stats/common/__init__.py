"""
neuroinfo.stats.common
======================

Common statistical methods and utilities.

This package contains the estimators consumed by higher-level information
measures:

- `occupancy`: Panzeri-Treves bias from bin occupancy
- `covariance`: per-stimulus and pooled response covariance
- `resampling`: bootstrap replications and null percentiles
- `streams`: seedable random streams
- `validation`: shared precondition checks
"""

from neuroinfo.stats.common.covariance import (
    CovarianceResult,
    StimulusAssigner,
    StimulusCovarianceAggregator,
    aggregate_covariance,
)
from neuroinfo.stats.common.occupancy import (
    PanzeriTrevesCorrection,
    estimate_bias,
    estimate_occupied_bins,
)
from neuroinfo.stats.common.resampling import (
    BootstrapPlan,
    bootstrap_replications,
    null_percentiles,
)
from neuroinfo.stats.common.streams import as_generator, spawn_generators

__all__ = [
    "CovarianceResult",
    "StimulusAssigner",
    "StimulusCovarianceAggregator",
    "aggregate_covariance",
    "PanzeriTrevesCorrection",
    "estimate_bias",
    "estimate_occupied_bins",
    "BootstrapPlan",
    "bootstrap_replications",
    "null_percentiles",
    "as_generator",
    "spawn_generators",
]

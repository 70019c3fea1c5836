"""
neuroinfo.reporting.covariance
==============================

Tabular (long-format) views of covariance results as Polars DataFrames.

Only the upper triangle (c1 <= c2) of each symmetric matrix is reported.

Examples
--------
>>> import numpy as np
>>> from neuroinfo.stats.common.covariance import aggregate_covariance
>>> from neuroinfo.reporting.covariance import CovarianceReporter
>>> result = aggregate_covariance(np.arange(12.0).reshape(2, 3, 2), [3, 3])
>>> rep = CovarianceReporter(result)
>>> rep.pooled_table().columns
['c1', 'c2', 'value']
>>> rep.per_stimulus_table().height
6
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import polars as pl

from neuroinfo.core.errors import InvalidArgumentError
from neuroinfo.stats.common.covariance import CovarianceResult


def _upper_pairs(n_channels: int) -> tuple[np.ndarray, np.ndarray]:
    return np.triu_indices(n_channels)


@dataclass
class CovarianceReporter:
    """Long-format tables for one aggregation pass."""

    result: CovarianceResult

    def pooled_table(self) -> pl.DataFrame:
        """One row per channel pair of the pooled matrix."""
        c1, c2 = _upper_pairs(self.result.n_channels)
        return pl.DataFrame(
            {
                "c1": c1.astype(np.int64),
                "c2": c2.astype(np.int64),
                "value": self.result.pooled_cov[c1, c2],
            }
        )

    def per_stimulus_table(self) -> pl.DataFrame:
        """One row per (stimulus, channel pair)."""
        c1, c2 = _upper_pairs(self.result.n_channels)
        frames = [
            pl.DataFrame(
                {
                    "stimulus": np.full(c1.size, s, dtype=np.int64),
                    "c1": c1.astype(np.int64),
                    "c2": c2.astype(np.int64),
                    "value": self.result.per_stimulus_cov[c1, c2, s],
                }
            )
            for s in range(self.result.n_stimuli)
        ]
        return pl.concat(frames)

    def variance_table(self) -> pl.DataFrame:
        """
        Channel variances per stimulus, followed by the pooled ones.

        Pooled rows have a null `stimulus`.
        """
        n_stimuli, n_channels = self.result.per_stimulus_diag.shape
        channels = np.arange(n_channels, dtype=np.int64)
        per_stimulus = pl.DataFrame(
            {
                "stimulus": np.repeat(np.arange(n_stimuli, dtype=np.int64), n_channels),
                "channel": np.tile(channels, n_stimuli),
                "variance": self.result.per_stimulus_diag.ravel(),
            }
        )
        pooled = pl.DataFrame(
            {
                "stimulus": pl.Series([None] * n_channels, dtype=pl.Int64),
                "channel": channels,
                "variance": self.result.pooled_diag,
            }
        )
        return pl.concat([per_stimulus, pooled])


def replication_summary(replications: Sequence[CovarianceResult]) -> pl.DataFrame:
    """
    Summarize bootstrap per-stimulus variances across replications.

    Returns:
        DataFrame with columns stimulus, channel, mean, std, q025, q975,
        one row per (stimulus, channel), sorted by both

    Examples:
        >>> import numpy as np
        >>> from neuroinfo.stats.common.resampling import BootstrapPlan, bootstrap_replications
        >>> reps = bootstrap_replications(np.arange(12.0).reshape(2, 3, 2), [3, 3],
        ...                               BootstrapPlan(n_replications=5, seed=0))
        >>> replication_summary(reps).columns
        ['stimulus', 'channel', 'mean', 'std', 'q025', 'q975']
    """
    if not replications:
        raise InvalidArgumentError("replications must not be empty")

    frames = []
    for result in replications:
        table = CovarianceReporter(result).variance_table()
        frames.append(table.drop_nulls("stimulus"))

    return (
        pl.concat(frames)
        .group_by(["stimulus", "channel"])
        .agg(
            pl.col("variance").mean().alias("mean"),
            pl.col("variance").std().alias("std"),
            pl.col("variance").quantile(0.025, interpolation="linear").alias("q025"),
            pl.col("variance").quantile(0.975, interpolation="linear").alias("q975"),
        )
        .sort(["stimulus", "channel"])
    )

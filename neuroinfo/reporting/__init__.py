"""
neuroinfo.reporting
===================

Polars views of estimator results for inspection and plotting.
"""

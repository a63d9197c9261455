"""Aggregation engine: joins executives with industry benchmarks.

Pure and synchronous; never touches the network.
"""

from execomp.engine.compensation_filter import (
    DEFAULT_MULTIPLE,
    benchmark_map,
    filter_by_benchmark,
)

__all__ = ["DEFAULT_MULTIPLE", "benchmark_map", "filter_by_benchmark"]

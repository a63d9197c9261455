"""Compensation filter — executives vs. their industry's benchmark.

An executive is reported when their total compensation is at least
``multiple`` times the average compensation of their industry:

    total >= multiple * benchmark[industry]

Executives with an empty industry, or an industry without a benchmark,
are skipped. An executive listed at several companies is reported once
per listing.
"""

import logging
from collections.abc import Iterable, Mapping

from execomp.models import ExecutiveCompensation, ExecutiveRecord, IndustryBenchmark

logger = logging.getLogger(__name__)

# At least 10% above the industry average
DEFAULT_MULTIPLE = 1.10


def benchmark_map(benchmarks: Iterable[IndustryBenchmark | None]) -> dict[str, float]:
    """Index present benchmarks by industry title.

    Absent benchmarks (None) and benchmarks with an empty title are left out.

    Args:
        benchmarks: Benchmark lookups, one per industry

    Returns:
        Mapping of industry title -> average compensation
    """
    return {
        b.industry_title: b.average_compensation
        for b in benchmarks
        if b is not None and b.industry_title
    }


def filter_by_benchmark(
    executives: Iterable[ExecutiveRecord],
    benchmark_by_industry: Mapping[str, float],
    multiple: float = DEFAULT_MULTIPLE,
) -> list[ExecutiveCompensation]:
    """Keep executives paid at least ``multiple`` times their industry benchmark.

    Args:
        executives: Executive records, in the order results should follow
        benchmark_by_industry: Industry title -> average compensation
        multiple: Threshold multiple of the benchmark (default: 1.10)

    Returns:
        One ExecutiveCompensation per qualifying record, in input order
    """
    results: list[ExecutiveCompensation] = []
    skipped = 0
    for executive in executives:
        industry = executive.industry_title
        average = benchmark_by_industry.get(industry) if industry else None
        if average is None:
            skipped += 1
            continue
        if executive.total_compensation >= multiple * average:
            results.append(ExecutiveCompensation(
                name_and_position=executive.name_and_position,
                compensation=executive.total_compensation,
                average_industry_compensation=average,
            ))

    logger.debug(
        "Filter kept %d executives (%d without benchmark, multiple=%.2f)",
        len(results), skipped, multiple,
    )
    return results

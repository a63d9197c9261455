"""Screening pipeline — provider → cache → fan-out → filter.

Components:
- Coordinator: runs listings → executives → benchmarks → filter
- Fetcher: admission-gated, contract-checked provider calls
"""

from execomp.pipeline.coordinator import Coordinator, build_coordinator
from execomp.pipeline.fetcher import Fetcher

__all__ = ["Coordinator", "Fetcher", "build_coordinator"]

"""Distributor price optimization: allocator, search-mode resolution, package builder."""

from rxreturns.optimization.allocator import (
    DEFAULT_STALE_AFTER,
    build_recommendations,
    compare_strategies,
    group_candidates,
    recommend_line,
)
from rxreturns.optimization.packages import build_packages
from rxreturns.optimization.search import resolve_search_lines

__all__ = [
    "DEFAULT_STALE_AFTER",
    "build_recommendations",
    "compare_strategies",
    "group_candidates",
    "recommend_line",
    "build_packages",
    "resolve_search_lines",
]

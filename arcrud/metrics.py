"""Prometheus metric definitions for arcrud."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# --- Façade dispatch ---

dispatch_total = Counter(
    "arcrud_dispatch_total",
    "Active Record operations dispatched to the session",
    labelnames=["entity", "operation"],
)

select_one_multiple_results_total = Counter(
    "arcrud_select_one_multiple_results_total",
    "select_one calls whose condition matched more than one row",
    labelnames=["entity"],
)

# --- Session ---

statement_duration_seconds = Histogram(
    "arcrud_statement_duration_seconds",
    "Time spent executing a mapped statement",
    labelnames=["command"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5),
)

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics - single source of truth for all metric objects.
Updated by the service layer only.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── Cache Metrics ──
CACHE_HITS = Counter(
    "availability_cache_hits_total",
    "Fetches served from a fresh cache entry",
    ["resource"],
)
CACHE_MISSES = Counter(
    "availability_cache_misses_total",
    "Fetches that required an underlying call",
    ["resource"],
)
FETCH_ATTEMPTS = Counter(
    "availability_fetch_attempts_total",
    "Underlying fetch attempts, including retries",
    ["resource"],
)
FETCH_FAILURES = Counter(
    "availability_fetch_failures_total",
    "Fetches that exhausted every retry attempt",
    ["resource"],
)
FETCH_RETRIES = Counter(
    "availability_fetch_retries_total",
    "Retry attempts after a failed fetch",
    ["resource", "attempt"],
)
FETCH_LATENCY = Histogram(
    "availability_fetch_duration_seconds",
    "Latency of successful underlying fetches",
    ["resource"],
)

# ── Directory Metrics ──
DIRECTORY_QUERIES = Counter(
    "availability_directory_queries_total",
    "Total available-near queries",
    ["outcome"],
)
ROSTER_SIZE = Gauge(
    "availability_roster_size",
    "Participants in the most recently fetched roster",
)
AVAILABLE_PARTICIPANTS = Histogram(
    "availability_available_participants",
    "Participants returned per query",
    buckets=(0, 1, 2, 5, 10, 25, 50, 100),
)

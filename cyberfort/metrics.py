from prometheus_client import Counter, Histogram

CHECKS_TOTAL = Counter(
    "cyberfort_checks_total", "Total number of completed checks", ["kind", "source"]
)
FALLBACKS_TOTAL = Counter(
    "cyberfort_fallbacks_total",
    "Checks answered by local heuristics after a remote failure",
    ["kind"],
)
REMOTE_DURATION = Histogram(
    "cyberfort_remote_duration_seconds",
    "Time spent waiting for remote reputation services",
    ["service"],
)

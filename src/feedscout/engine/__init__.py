"""Discovery engine: bounded-concurrency validation of candidate URIs."""

from feedscout.engine.discover import (
    DiscoveryRun,
    build_methods_plan,
    discover,
    normalize_input,
)
from feedscout.engine.executor import process_concurrently

__all__ = [
    "DiscoveryRun",
    "build_methods_plan",
    "discover",
    "normalize_input",
    "process_concurrently",
]

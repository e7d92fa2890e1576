"""exhaustigen: exhaustive enumeration of bounded choices for tests.

A test body runs inside a loop whose head asks the enumerator whether
enumeration is finished; inside the loop the body asks for bounded integers
and higher-level values built from them. Across iterations every
combination of choices is produced exactly once.

Primary API:
    Gen - The enumerator (primitives, basic and sequence combinators)
    exhaust() - Run a body once per combination and summarize
    exhaustive() - Decorator for exhaustive test functions
    EnumerationConfig - Run budget, progress logging, trace recording

Example:
    from exhaustigen import Gen

    g = Gen()
    while not g.done():
        perm = list(g.gen_perm([1, 2, 3]))
        assert sorted(perm) == [1, 2, 3]
"""

from __future__ import annotations

from exhaustigen import logging
from exhaustigen._version import __version__
from exhaustigen.config import DEFAULT_CONFIG, EnumerationConfig
from exhaustigen.gen import Gen
from exhaustigen.runner import EnumerationResult, exhaust, exhaustive, iter_runs
from exhaustigen.tree import build_choice_tree, count_runs
from exhaustigen.types import Choice, ChoiceTrace, Frame

__all__ = [
    # Version
    "__version__",
    # Enumerator
    "Gen",
    "Frame",
    "Choice",
    "ChoiceTrace",
    # Drivers
    "exhaust",
    "exhaustive",
    "iter_runs",
    "EnumerationResult",
    # Configuration
    "EnumerationConfig",
    "DEFAULT_CONFIG",
    # Choice-tree export (NetworkX)
    "build_choice_tree",
    "count_runs",
    # Utilities
    "logging",
]

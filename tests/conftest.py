"""Global pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any, Callable, List

import pytest

from exhaustigen.gen import Gen


@pytest.fixture
def g() -> Gen:
    """Fresh enumerator for a single test."""
    return Gen()


def _collect_runs(body: Callable[[Gen], Any]) -> List[Any]:
    gen = Gen()
    results = []
    while not gen.done():
        results.append(body(gen))
    return results


@pytest.fixture
def run_all() -> Callable[[Callable[[Gen], Any]], List[Any]]:
    """Drive a body with a fresh enumerator and return its result per run."""
    return _collect_runs

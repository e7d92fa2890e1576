"""Loop drivers for exhaustive enumeration.

Wraps the ``while not g.done()`` idiom for callers that prefer a function or
decorator:

- `iter_runs`: generator over run indices for a given enumerator.
- `exhaust`: run a body once per combination and collect an
  `EnumerationResult`.
- `exhaustive`: decorator turning a test function that takes an enumerator
  into one that runs the body exhaustively.

When the body raises, the exception propagates unchanged except for an added
note naming the failing run and the choices it made. Failing cases are not
minimized.
"""

from __future__ import annotations

import functools
import inspect
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from exhaustigen.config import DEFAULT_CONFIG, EnumerationConfig
from exhaustigen.gen import Gen
from exhaustigen.logging import get_logger, set_level
from exhaustigen.types import ChoiceTrace

logger = get_logger(__name__)


@dataclass
class EnumerationResult:
    """Summary of one exhaustive enumeration.

    Attributes:
        runs: Number of runs executed.
        completed: False when the run budget stopped enumeration early.
        max_depth: Largest number of choice points visited by a single run.
        elapsed_seconds: Wall-clock duration of the enumeration.
        paths: Choice trace of every run, in run order. Only populated when
            ``EnumerationConfig.record_paths`` is set.
    """

    runs: int
    completed: bool
    max_depth: int
    elapsed_seconds: float
    paths: List[ChoiceTrace] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "runs": self.runs,
            "completed": self.completed,
            "max_depth": self.max_depth,
            "elapsed_seconds": self.elapsed_seconds,
            "paths": [[list(choice) for choice in trace] for trace in self.paths],
        }


def format_trace(trace: ChoiceTrace) -> str:
    """Render a choice trace as ``[value/bound, ...]``."""
    return "[" + ", ".join(f"{value}/{bound}" for value, bound in trace) + "]"


def iter_runs(g: Gen, config: Optional[EnumerationConfig] = None) -> Iterator[int]:
    """Yield the zero-based index of each run until enumeration finishes.

    Equivalent to ``while not g.done(): ...`` with progress logging and an
    optional run budget.

    Args:
        g: Enumerator to drive.
        config: Enumeration settings. Defaults to `DEFAULT_CONFIG`.

    Yields:
        Index of the run about to execute.
    """
    config = config or DEFAULT_CONFIG
    completed = 0
    while not g.done():
        yield completed
        completed += 1

        if config.should_report(completed):
            logger.debug("Completed %d runs (path depth %d)", completed, g.depth)

        if config.limit_reached(completed):
            if not g.peek_done():
                logger.warning(
                    "Stopping after max_runs=%d runs; enumeration is incomplete",
                    config.max_runs,
                )
            return


def exhaust(
    body: Callable[[Gen], Any],
    config: Optional[EnumerationConfig] = None,
) -> EnumerationResult:
    """Run ``body`` once for every combination of its choices.

    Args:
        body: Test body. Receives a fresh `Gen` shared by all runs and asks
            it for values.
        config: Enumeration settings. Defaults to `DEFAULT_CONFIG`.

    Returns:
        EnumerationResult describing the enumeration.

    Raises:
        Exception: Whatever ``body`` raises, annotated with the run index and
            the choices the failing run made.
    """
    config = config or DEFAULT_CONFIG
    if config.log_level is None:
        return _exhaust(body, config)

    previous = set_level(config.log_level)
    try:
        return _exhaust(body, config)
    finally:
        set_level(previous)


def _exhaust(
    body: Callable[[Gen], Any], config: EnumerationConfig
) -> EnumerationResult:
    name = getattr(body, "__qualname__", repr(body))
    g = Gen()
    paths: List[ChoiceTrace] = []
    max_depth = 0

    logger.info("Starting exhaustive enumeration of %s", name)
    start = time.perf_counter()

    runs = 0
    for run_index in iter_runs(g, config):
        try:
            body(g)
        except Exception as exc:
            exc.add_note(
                f"exhaustigen: {name} failed on run {run_index} "
                f"with choices {format_trace(g.trace())}"
            )
            raise
        runs = run_index + 1
        max_depth = max(max_depth, g.cursor)
        if config.record_paths:
            paths.append(g.trace())

    elapsed = time.perf_counter() - start
    result = EnumerationResult(
        runs=runs,
        completed=g.finished,
        max_depth=max_depth,
        elapsed_seconds=elapsed,
        paths=paths,
    )
    logger.info(
        "Finished enumeration of %s: %d runs, max depth %d, %.3fs",
        name,
        result.runs,
        result.max_depth,
        elapsed,
    )
    return result


def exhaustive(
    config: Optional[EnumerationConfig] = None,
    arg: str = "g",
) -> Callable[[Callable[..., Any]], Callable[..., None]]:
    """Decorate a test function so its body runs exhaustively.

    The decorated function receives the enumerator through parameter
    ``arg``; that parameter is hidden from the wrapper's signature so pytest
    fixtures for the remaining parameters keep working. Arguments given to
    the wrapper, positional or keyword, bind to the remaining parameters.

    Example:
        @exhaustive()
        def test_sorted_is_idempotent(g):
            xs = list(g.gen_elts(4, 3))
            assert sorted(sorted(xs)) == sorted(xs)

    Args:
        config: Enumeration settings passed to `exhaust`.
        arg: Name of the parameter receiving the enumerator.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., None]:
        sig = inspect.signature(func)
        if arg not in sig.parameters:
            raise ValueError(
                f"{func.__qualname__} has no parameter named '{arg}' for the enumerator"
            )
        params = [p for name, p in sig.parameters.items() if name != arg]
        wrapper_sig = sig.replace(parameters=params)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            given = wrapper_sig.bind(*args, **kwargs).arguments

            def body(g: Gen) -> None:
                call = sig.bind_partial()
                call.arguments.update(given)
                call.arguments[arg] = g
                func(*call.args, **call.kwargs)

            body.__qualname__ = func.__qualname__
            exhaust(body, config=config)

        wrapper.__signature__ = wrapper_sig  # type: ignore[attr-defined]
        return wrapper

    return decorator

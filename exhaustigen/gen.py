"""Exhaustive enumerator of bounded choices.

`Gen` drives a test body through every combination of bounded choices it can
make. The body is wrapped in a loop whose head calls `Gen.done()`; inside the
loop the body asks the enumerator for values. Across iterations every
reachable combination of values is produced exactly once, including bodies
whose later bounds depend on earlier choices.

Example:
    >>> from exhaustigen import Gen
    >>> g = Gen()
    >>> seen = []
    >>> while not g.done():
    ...     seen.append(list(g.gen_subset("ab")))
    >>> seen
    [[], ['b'], ['a'], ['a', 'b']]

Layers:
    Primitives: `done` and `gen` maintain a backtracking odometer over the
    choice tree discovered so far.
    Basic combinators: `flip` and `pick`, built on `gen`.
    Sequence combinators: `gen_fixed_by`, `gen_bound_by`, `gen_elts`, the
    `gen_*_comb` family, `gen_perm` and `gen_subset`, built on the layers
    above. They return lazy single-use iterators; a fresh iterator must be
    requested in every run.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterator, List, Sequence, Tuple, TypeVar

from exhaustigen.logging import get_logger
from exhaustigen.types import ChoiceTrace, Frame

logger = get_logger(__name__)

T = TypeVar("T")


def _require_items(seq: Sequence[T], operation: str) -> None:
    """Raise ValueError when ``seq`` has no elements to choose from."""
    if len(seq) == 0:
        raise ValueError(f"{operation}() requires a non-empty sequence")


def _require_non_negative(value: int, name: str) -> None:
    """Raise ValueError when a bound or length ``value`` is below zero."""
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


class Gen:
    """Stateful exhaustive enumerator.

    Usage:
        g = Gen()
        while not g.done():
            xs = list(g.gen_elts(3, 4))
            check(xs)

    The enumerator keeps one `Frame` per choice point visited in the most
    recent run and a cursor to the next frame to read. `done` advances the
    rightmost frame that still has unexplored values and drops every frame
    after it, like incrementing a mixed-radix counter whose digit radices are
    discovered as the body runs.
    """

    def __init__(self) -> None:
        self._started = False
        self._path: List[Frame] = []
        self._cursor = 0
        self._runs = 0
        self._finished = False

    def __repr__(self) -> str:
        frames = ", ".join(f"{f.current}/{f.bound}" for f in self._path)
        return f"Gen(runs={self._runs}, cursor={self._cursor}, path=[{frames}])"

    @property
    def started(self) -> bool:
        """False only before the first call to `done`."""
        return self._started

    @property
    def cursor(self) -> int:
        """Index of the next frame read or written by `gen`."""
        return self._cursor

    @property
    def path(self) -> Tuple[Frame, ...]:
        """Copies of the frames recorded along the most recent run."""
        return tuple(replace(frame) for frame in self._path)

    @property
    def depth(self) -> int:
        """Number of frames currently recorded."""
        return len(self._path)

    @property
    def runs(self) -> int:
        """Number of runs started so far."""
        return self._runs

    @property
    def finished(self) -> bool:
        """True once `done` has reported the end of enumeration."""
        return self._finished

    def trace(self) -> ChoiceTrace:
        """Return the ``(value, bound)`` choices made so far in the current run."""
        return tuple(frame.as_choice() for frame in self._path[: self._cursor])

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def done(self) -> bool:
        """Return True when every range implied by calls to `gen` is finished.

        Otherwise restarts the innermost incomplete range, continuing the
        exhaustive scan. Call this in the head of a ``while`` loop enclosing
        the test to repeat.

        Returns:
            False while another run remains, True once enumeration is over.
        """
        if not self._started:
            self._started = True
            self._cursor = 0
            self._runs = 1
            return False

        # Frames past the cursor were not visited by the last run.
        del self._path[self._cursor :]

        for i in range(len(self._path) - 1, -1, -1):
            frame = self._path[i]
            if not frame.exhausted:
                frame.current += 1
                del self._path[i + 1 :]
                self._cursor = 0
                self._runs += 1
                return False

        self._mark_finished()
        return True

    def peek_done(self) -> bool:
        """Return what `done` would return, without starting another run.

        Only the choice points visited by the run in progress are considered,
        matching `done`. A True result marks the enumerator `finished`.
        """
        if not self._started:
            return False
        if any(not frame.exhausted for frame in self._path[: self._cursor]):
            return False
        self._mark_finished()
        return True

    def _mark_finished(self) -> None:
        if not self._finished:
            self._finished = True
            logger.debug("Enumeration finished after %d runs", self._runs)

    def gen(self, bound: int) -> int:
        """Return a value (eventually every value) in ``[0, bound]``.

        Every other value-producing method funnels into this one, which opens
        and steps through ranges of the state space in concert with `done`.

        Args:
            bound: Inclusive upper bound. ``0`` always yields ``0``.

        Returns:
            The value for this choice point in the current run.

        Raises:
            ValueError: If ``bound`` is negative, or if the choice point was
                already advanced past ``bound`` by an earlier run that made
                the same preceding choices (the body is not deterministic).
        """
        _require_non_negative(bound, "bound")

        if self._cursor == len(self._path):
            frame = Frame(current=0, bound=bound)
            self._path.append(frame)
        else:
            frame = self._path[self._cursor]
            if frame.current > bound:
                raise ValueError(
                    f"Choice point {self._cursor} requested bound {bound} but "
                    f"value {frame.current} was already produced; the choices "
                    f"made before it must lead to the same bounds in every run"
                )
            frame.bound = bound

        self._cursor += 1
        return frame.current

    # ------------------------------------------------------------------
    # Basic combinators
    # ------------------------------------------------------------------

    def flip(self) -> bool:
        """Return False, then True."""
        return self.gen(1) == 1

    def pick(self, seq: Sequence[T]) -> T:
        """Select an element (eventually every element) from ``seq``.

        Raises:
            ValueError: If ``seq`` is empty.
        """
        _require_items(seq, "pick")
        return seq[self.gen(len(seq) - 1)]

    # ------------------------------------------------------------------
    # Sequence combinators
    # ------------------------------------------------------------------

    def gen_fixed_by(self, fixed: int, f: Callable[["Gen"], T]) -> Iterator[T]:
        """Yield exactly ``fixed`` results of ``f(self)``, computed on demand.

        Args:
            fixed: Number of elements to produce.
            f: Callback producing one element; receives this enumerator.
        """
        _require_non_negative(fixed, "fixed")
        return (f(self) for _ in range(fixed))

    def gen_bound_by(self, bound: int, f: Callable[["Gen"], T]) -> Iterator[T]:
        """Yield between 0 and ``bound`` results of ``f(self)``.

        The length is itself a choice point and is chosen immediately, before
        the iterator is returned.
        """
        return self.gen_fixed_by(self.gen(bound), f)

    def gen_elts(self, len_bound: int, elt_bound: int) -> Iterator[int]:
        """Yield up to ``len_bound`` integers, each in ``[0, elt_bound]``."""
        _require_non_negative(elt_bound, "elt_bound")
        return self.gen_bound_by(len_bound, lambda g: g.gen(elt_bound))

    def gen_comb(self, seq: Sequence[T]) -> Iterator[T]:
        """Yield a combination with repetition of up to ``len(seq)`` elements.

        Equivalent to ``gen_bound_comb(len(seq), seq)``.
        """
        return self.gen_bound_comb(len(seq), seq)

    def gen_bound_comb(self, bound: int, seq: Sequence[T]) -> Iterator[T]:
        """Yield a combination with repetition of up to ``bound`` elements.

        Equivalent to ``gen_fixed_comb(self.gen(bound), seq)``.
        """
        _require_items(seq, "gen_bound_comb")
        return self.gen_fixed_comb(self.gen(bound), seq)

    def gen_fixed_comb(self, fixed: int, seq: Sequence[T]) -> Iterator[T]:
        """Yield exactly ``fixed`` independent picks from ``seq``.

        Elements may repeat.
        """
        _require_items(seq, "gen_fixed_comb")
        return self.gen_fixed_by(fixed, lambda g: g.pick(seq))

    def gen_perm(self, seq: Sequence[T]) -> Iterator[T]:
        """Yield every element of ``seq`` exactly once, in some order.

        Each step removes one of the remaining positions, so the ``n!``
        orderings are produced in the lexicographic order of removal choices.
        """
        remaining = list(range(len(seq)))
        return self.gen_fixed_by(
            len(seq), lambda g: seq[remaining.pop(g.gen(len(remaining) - 1))]
        )

    def gen_subset(self, seq: Sequence[T]) -> Iterator[T]:
        """Yield the elements of ``seq`` kept by one `flip` per element."""
        return (item for item in seq if self.flip())

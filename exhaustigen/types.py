"""Core data types for exhaustive enumeration.

Defines the mutable frame record kept by the enumerator for each choice point
and the aliases used for per-run choice traces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

#: One visited choice point in a run: (chosen value, bound in effect).
Choice = Tuple[int, int]

#: Ordered choices made by a single run, from the first choice point onward.
ChoiceTrace = Tuple[Choice, ...]


@dataclass
class Frame:
    """State of one choice point along the most recent run.

    The enumerator treats the list of frames as a mixed-radix odometer: each
    frame is a digit whose radix is ``bound + 1``. ``bound`` is rewritten
    every time the choice point is visited, so the radix may change when an
    earlier choice changes.

    Attributes:
        current: Value returned for this choice point in the current run.
        bound: Inclusive upper bound requested at this choice point.
    """

    current: int
    bound: int

    @property
    def exhausted(self) -> bool:
        """True when every value in ``[0, bound]`` has been produced."""
        return self.current >= self.bound

    def as_choice(self) -> Choice:
        """Return the frame as an immutable ``(current, bound)`` pair."""
        return (self.current, self.bound)

# crucible/core/policy.py
#!/usr/bin/env python3
"""
Move policies: which directions may follow a (facing, run length) pair.

Two variants:
- BOUNDED_RUN: never reverse; after max_run straight moves a turn is forced.
- BOUNDED_RUN_WITH_MINIMUM: as above, and until min_run straight moves have
  been made the only legal move is straight ahead. Arrival at the goal only
  counts once the final run has reached min_run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from crucible.core.types import ALL_DIRECTIONS, Direction


class PolicyVariant(Enum):
    BOUNDED_RUN = "bounded"
    BOUNDED_RUN_WITH_MINIMUM = "minimum"


# (min_run, max_run) per variant
PRESETS = {
    PolicyVariant.BOUNDED_RUN: (0, 3),
    PolicyVariant.BOUNDED_RUN_WITH_MINIMUM: (4, 10),
}


@dataclass(frozen=True)
class MovePolicy:
    max_run: int
    min_run: int = 0
    variant: PolicyVariant = PolicyVariant.BOUNDED_RUN

    def __post_init__(self):
        if self.max_run < 1:
            raise ValueError(f"max_run must be >= 1, got {self.max_run}")
        if self.min_run < 0:
            raise ValueError(f"min_run must be >= 0, got {self.min_run}")
        if self.min_run > self.max_run:
            raise ValueError(f"min_run {self.min_run} exceeds max_run {self.max_run}")

    @classmethod
    def for_variant(cls, variant: PolicyVariant, max_run: Optional[int] = None,
                    min_run: Optional[int] = None) -> "MovePolicy":
        lo, hi = PRESETS[variant]
        if variant is PolicyVariant.BOUNDED_RUN:
            if min_run:
                raise ValueError(f"policy {variant.value!r} has no minimum run; got min_run={min_run}")
        elif min_run is not None:
            lo = min_run
        if max_run is not None:
            hi = max_run
        return cls(max_run=hi, min_run=lo, variant=variant)

    def legal_directions(self, facing: Direction, run: int) -> List[Direction]:
        """Directions allowed for the next move, in a fixed order."""
        if run < self.min_run:
            return [facing]
        out: List[Direction] = []
        for d in ALL_DIRECTIONS:
            if d is facing.opposite:
                continue
            if d is facing and run >= self.max_run:
                continue
            out.append(d)
        return out

    def is_terminal(self, run: int) -> bool:
        return run >= self.min_run


BOUNDED_RUN = MovePolicy.for_variant(PolicyVariant.BOUNDED_RUN)
BOUNDED_RUN_WITH_MINIMUM = MovePolicy.for_variant(PolicyVariant.BOUNDED_RUN_WITH_MINIMUM)

# crucible/core/search.py
#!/usr/bin/env python3
"""
Dijkstra over (cell, facing, run length) states, one expansion per step().

Same lifecycle as the other grid engines:
- init(grid) - reset() - step() -> StepResult, plus run() to finish in one go.

Superseded heap entries are not removed; they are skipped when popped
(the state is already closed, or its popped cost is above the best known).
The frontier is drained completely and the answer is the cheapest closed
state on the goal cell whose run length the policy accepts as an arrival.

Tie-breaking in the PQ: (g, seq, state), lower g first, then FIFO by seq.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional
import heapq
import logging
from math import inf

from crucible.core.errors import NoPathFound
from crucible.core.policy import MovePolicy, BOUNDED_RUN
from crucible.core.types import Cell, Direction, Grid, SearchState, StepResult

log = logging.getLogger("crucible.search")

START_FACINGS = (Direction.RIGHT, Direction.DOWN)


@dataclass
class CrucibleSearch:
    policy: MovePolicy = BOUNDED_RUN
    name: str = "Crucible"

    # Internal state
    grid: Optional[Grid] = None
    open_pq: List[Tuple[int, int, SearchState]] = field(default_factory=list)  # (g, seq, state)
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    g: Dict[SearchState, int] = field(default_factory=dict)
    parent: Dict[SearchState, SearchState] = field(default_factory=dict)
    popped_count: int = 0
    stale_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_cell: Optional[Cell] = None
    best_state: Optional[SearchState] = None
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Initialize on a given grid."""
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the two start states."""
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.stale_count = 0
        self.done = False
        self.no_path = False
        self.goal_cell = self.grid.goal
        self.best_state = None
        self.seq = 0

        for facing in START_FACINGS:
            s = SearchState(self.grid.start, facing, 0)
            self.g[s] = 0
            heapq.heappush(self.open_pq, (0, self._bump(), s))
            self.open_set.add(s)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _successors(self, u: SearchState) -> List[SearchState]:
        out: List[SearchState] = []
        for d in self.policy.legal_directions(u.facing, u.run):
            n = self.grid.step(u.pos, d)
            if n is None:
                continue
            run = u.run + 1 if d is u.facing else 1
            out.append(SearchState(n, d, run))
        return out

    def _is_stale(self, g_u: int, u: SearchState) -> bool:
        return u in self.closed_set or g_u > self.g.get(u, inf)

    def _state_chain(self) -> List[SearchState]:
        chain: List[SearchState] = []
        cur = self.best_state
        while cur is not None:
            chain.append(cur)
            cur = self.parent.get(cur)
        chain.reverse()
        return chain

    def path(self) -> List[Cell]:
        """Cells of the cheapest accepted route, start first. Empty until found."""
        return [s.pos for s in self._state_chain()]

    def moves(self) -> List[Direction]:
        """Directions taken along the cheapest accepted route."""
        return [s.facing for s in self._state_chain() if s.run > 0]

    def best_cost(self) -> int:
        if not (self.done or self.no_path):
            raise RuntimeError("search has not finished")
        if self.best_state is None:
            raise NoPathFound(
                f"no route to {self.goal_cell} under max_run={self.policy.max_run}, "
                f"min_run={self.policy.min_run}"
            )
        return self.g[self.best_state]

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion step:
          - Pop the lowest-g state, skipping stale entries.
          - Close it; remember it if it is an accepted arrival.
          - Relax every successor the policy allows, edge cost = cost of the entered cell.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self.path()
            return StepResult(status="done", path=path, metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            return self._finish()

        g_u, _, u = heapq.heappop(self.open_pq)

        if self._is_stale(g_u, u):
            self.stale_count += 1
            log.debug("stale entry %s at g=%d (best %s)", u, g_u, self.g.get(u))
            return StepResult(status="running", current=u, metrics=self._metrics())

        # Finalize u
        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)

        if u.pos == self.goal_cell and self.policy.is_terminal(u.run):
            if self.best_state is None or g_u < self.g[self.best_state]:
                self.best_state = u

        opened_now: List[SearchState] = []
        for v in self._successors(u):
            alt = g_u + self.grid.cost_at(v.pos)
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                heapq.heappush(self.open_pq, (alt, self._bump(), v))
                if v not in self.closed_set and v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def run(self) -> StepResult:
        """Step until the frontier is exhausted."""
        res = self.step()
        while res.status == "running":
            res = self.step()
        return res

    def _finish(self) -> StepResult:
        if self.best_state is None:
            self.no_path = True
            log.info("%s: frontier exhausted after %d pops, no accepted arrival at %s",
                     self.name, self.popped_count, self.goal_cell)
            return StepResult(status="no_path", metrics=self._metrics())

        self.done = True
        path = self.path()
        log.info("%s: cost %d, %d pops, %d stale, %d states",
                 self.name, self.g[self.best_state], self.popped_count, self.stale_count, len(self.g))
        return StepResult(status="done", path=path, metrics=self._metrics(path_len=len(path)))

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "stale": self.stale_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.g[self.best_state] if self.done else None,
        }


def min_heat_loss(grid: Grid, policy: MovePolicy = BOUNDED_RUN) -> int:
    """Minimum total entry cost from the top-left to the bottom-right cell."""
    search = CrucibleSearch(policy=policy)
    search.init(grid)
    search.run()
    return search.best_cost()


def format_path(grid: Grid, moves: List[Direction]) -> str:
    """Grid as text with each visited cell replaced by the arrow of the move into it."""
    rows = [[str(v) for v in row] for row in grid.rows]
    pos = grid.start
    for d in moves:
        pos = grid.step(pos, d)
        if pos is None:
            raise ValueError(f"move {d.name} leaves the grid")
        rows[pos[0]][pos[1]] = d.arrow
    return "\n".join("".join(r) for r in rows)

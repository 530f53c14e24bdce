import logging
import sys
from typing import Generic, List, Optional, TypeVar

from stepstar.search.expanded_set import ExpandedSet
from stepstar.search.frontier import Frontier
from stepstar.search.node_arena import NodeArena
from stepstar.search.search_config import AStarConfig
from stepstar.search.search_node import NodeSnapshot, SearchNode
from stepstar.search.search_status import SearchStatus
from stepstar.search_state.search_state import SearchState, SuccessorEnumerationError

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=SearchState)

UNDEFINED_COST = sys.float_info.max


class SearchUsageError(Exception):
    """
    Raised when an ``AStarSearch`` is driven out of order, e.g., initialized twice.
    """


class AStarSearch(Generic[S]):
    """
    A stepwise A* search over states implementing ``SearchState``.

    The search is driven by the caller: ``initialize`` sets the start and goal, and
    each call to ``step`` pops the best frontier node and either finishes the search
    or expands that node. This lets an application spread a search over several
    ticks of its own loop, calling ``step`` a bounded number of times per tick.

    Ordinary outcomes are reported through the returned ``SearchStatus``, never
    through exceptions. Every node lives in a ``NodeArena``; once the search ends,
    the only nodes left are those of the solution path, which are kept until
    ``release_solution`` is called.

    An engine searches once. Use a new engine for each search, and drive each engine
    from a single thread.

    :param config: Configuration of the search.
    """

    def __init__(self, config: AStarConfig = AStarConfig()):
        self.config = config
        self._arena: NodeArena[S] = NodeArena(config.max_nodes)
        self._frontier = Frontier()
        self._expanded = ExpandedSet()
        self._candidates: List[int] = []
        self._status = SearchStatus.NOT_INITIALIZED
        self._start: Optional[int] = None
        self._goal: Optional[int] = None
        self._cursor: Optional[int] = None
        self._frontier_cursor = _SnapshotCursor()
        self._expanded_cursor = _SnapshotCursor()
        self._steps = 0
        self._solution_cost = UNDEFINED_COST
        self._solution_released = False
        self.failure_reason: Optional[BaseException] = None

    def initialize(self, start: S, goal: S):
        """
        Set the start and goal states and begin searching.

        :raises SearchUsageError: If the search was already initialized.
        """
        if self._status is not SearchStatus.NOT_INITIALIZED:
            raise SearchUsageError("An AStarSearch can only be initialized once.")
        start_node = self._arena.allocate(start)
        goal_node = self._arena.allocate(goal)
        start_node.set_costs(0.0, start.estimate_remaining_cost(goal))
        self._start, self._goal = start_node.handle, goal_node.handle
        self._frontier.push(start_node, start.state_key())
        self._steps = 0
        self._status = SearchStatus.SEARCHING
        logger.debug("Searching from %r to %r (h=%s)", start, goal, start_node.h)

    def step(self) -> SearchStatus:
        """
        Advance the search by one node.

        Does nothing before ``initialize`` or once the search has succeeded or
        failed; the current status is returned in all cases.
        """
        if self._status is not SearchStatus.SEARCHING:
            return self._status
        if not self._frontier:
            logger.debug("Frontier exhausted after %d steps", self._steps)
            self._fail()
            return self._status

        self._steps += 1
        current = self._arena[self._frontier.pop()]
        goal = self._arena[self._goal]
        if current.state.is_goal(goal.state):
            self._succeed(current)
            return self._status

        # filed before relaxation so that a successor equal to the current state
        # is found (and discarded) rather than duplicated
        self._expanded.add(current.handle, current.state.state_key())
        try:
            self._collect_candidates(current)
        except (SuccessorEnumerationError, MemoryError) as e:
            logger.warning("Abandoning expansion of %r: %s", current.state, e)
            self.failure_reason = e
            self._free_candidates()
            self._fail()
            return self._status
        except BaseException:
            # the search stays usable; the caller may cancel it
            self._free_candidates()
            raise

        relaxed = 0
        try:
            for handle in self._candidates:
                self._relax(current, self._arena[handle], goal)
                relaxed += 1
        finally:
            # candidates that were not relaxed are still owned by the buffer
            del self._candidates[:relaxed]
            self._free_candidates()
        logger.debug(
            "Step %d expanded %r (f=%s): frontier=%d expanded=%d",
            self._steps,
            current.state,
            current.f,
            len(self._frontier),
            len(self._expanded),
        )
        return self._status

    def run(self, max_steps: Optional[int] = None) -> SearchStatus:
        """
        Call ``step`` until the search ends or ``max_steps`` steps have been taken.

        :param max_steps: Maximum number of steps to take. If None, no limit is applied.
        """
        taken = 0
        while self._status is SearchStatus.SEARCHING:
            if max_steps is not None and taken >= max_steps:
                break
            self.step()
            taken += 1
        return self._status

    def cancel_search(self):
        """
        Abandon a search in progress, freeing every node it holds. The search ends
        as ``FAILED``. Has no effect unless the search is in progress.
        """
        if self._status is not SearchStatus.SEARCHING:
            return
        logger.debug("Search cancelled after %d steps", self._steps)
        self._fail()

    def release_solution(self):
        """
        Free the nodes of the solution path once the caller is done with it.
        Releasing an already released solution does nothing.

        :raises SearchUsageError: If the search has not succeeded.
        """
        if self._status is not SearchStatus.SUCCEEDED:
            raise SearchUsageError(
                f"Cannot release the solution of a search that is {self._status.value}"
            )
        if self._solution_released:
            return
        start = self._arena[self._start]
        if start.child is None:
            # the start state was the goal, there is no chain between them
            self._arena.free(self._start)
        else:
            handle = self._start
            while handle != self._goal:
                next_handle = self._arena[handle].child
                self._arena.free(handle)
                handle = next_handle
        self._arena.free(self._goal)
        self._start = self._goal = self._cursor = None
        self._solution_released = True

    # Solution traversal

    def solution_start(self) -> Optional[S]:
        """
        Move the solution cursor to the start node and return its state.
        """
        self._cursor = self._start
        return self._cursor_state()

    def solution_next(self) -> Optional[S]:
        """
        Move the solution cursor one node towards the goal and return its state, or
        return None if the cursor is at the end of the path.
        """
        return self._move_cursor(lambda node: node.child)

    def solution_end(self) -> Optional[S]:
        """
        Move the solution cursor to the goal node and return its state.
        """
        self._cursor = self._goal
        return self._cursor_state()

    def solution_prev(self) -> Optional[S]:
        """
        Move the solution cursor one node towards the start and return its state,
        or return None if the cursor is at the start of the path.
        """
        return self._move_cursor(lambda node: node.parent)

    def solution_path(self) -> List[S]:
        """
        The states of the solution from start to goal, or an empty list if there is
        no solution (or it was released). Does not move the solution cursor.

        When the start state is itself the goal, the path is just the start state.
        """
        if self._status is not SearchStatus.SUCCEEDED or self._solution_released:
            return []
        path = []
        handle = self._start
        while handle is not None:
            node = self._arena[handle]
            path.append(node.state)
            handle = node.child
        return path

    def solution_cost(self) -> float:
        """
        The cost of the solution, or ``UNDEFINED_COST`` if the search has not
        succeeded. Check the status before trusting this value.
        """
        if self._status is SearchStatus.SUCCEEDED:
            return self._solution_cost
        return UNDEFINED_COST

    # Diagnostics

    def frontier_start(self) -> Optional[NodeSnapshot[S]]:
        """
        Reset the frontier cursor and return the first frontier node, if any.
        """
        return self._frontier_cursor.start(self.frontier_snapshot())

    def frontier_next(self) -> Optional[NodeSnapshot[S]]:
        """
        Advance the frontier cursor and return the node it lands on, or None once
        every node listed by ``frontier_start`` has been returned.
        """
        return self._frontier_cursor.next()

    def expanded_start(self) -> Optional[NodeSnapshot[S]]:
        """
        Reset the expanded cursor and return the first expanded node, if any.
        """
        return self._expanded_cursor.start(self.expanded_snapshot())

    def expanded_next(self) -> Optional[NodeSnapshot[S]]:
        """
        Advance the expanded cursor and return the node it lands on, or None once
        every node listed by ``expanded_start`` has been returned.
        """
        return self._expanded_cursor.next()

    def frontier_snapshot(self) -> List[NodeSnapshot[S]]:
        """
        Snapshots of the frontier nodes. The first has the lowest ``f``; the order of
        the rest is unspecified.
        """
        return [self._arena[handle].snapshot() for handle in self._frontier]

    def expanded_snapshot(self) -> List[NodeSnapshot[S]]:
        """
        Snapshots of the expanded nodes, in the order they were expanded.
        """
        return [self._arena[handle].snapshot() for handle in self._expanded]

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def step_count(self) -> int:
        """
        Number of steps that advanced the search since ``initialize``.
        """
        return self._steps

    @property
    def frontier_size(self) -> int:
        return len(self._frontier)

    @property
    def expanded_size(self) -> int:
        return len(self._expanded)

    @property
    def allocated_node_count(self) -> int:
        return self._arena.allocated_count

    @property
    def freed_node_count(self) -> int:
        return self._arena.freed_count

    @property
    def outstanding_nodes(self) -> int:
        """
        Nodes allocated and not yet freed.
        """
        return self._arena.outstanding

    # Internals

    def _collect_candidates(self, current: SearchNode[S]):
        self._candidates.clear()
        parent_state = None
        if current.parent is not None:
            parent_state = self._arena[current.parent].state
        for state in current.state.successors(parent_state):
            self._candidates.append(self._arena.allocate(state).handle)

    def _relax(
        self, current: SearchNode[S], candidate: SearchNode[S], goal: SearchNode[S]
    ):
        new_g = current.g + current.state.step_cost(candidate.state)
        key = candidate.state.state_key()

        on_frontier = self._same_state(self._frontier.lookup(key), candidate)
        if on_frontier is not None and self._arena[on_frontier].g <= new_g:
            self._arena.free(candidate.handle)
            return
        on_expanded = self._same_state(self._expanded.lookup(key), candidate)
        if on_expanded is not None and self._arena[on_expanded].g <= new_g:
            self._arena.free(candidate.handle)
            return

        candidate.parent = current.handle
        candidate.set_costs(new_g, candidate.state.estimate_remaining_cost(goal.state))

        if on_expanded is not None:
            node = self._arena[on_expanded]
            node.copy_bookkeeping_from(candidate)
            self._arena.free(candidate.handle)
            self._expanded.remove(key)
            self._frontier.push(node, key)
            logger.debug("Reopened %r with g=%s", node.state, node.g)
        elif on_frontier is not None:
            node = self._arena[on_frontier]
            node.copy_bookkeeping_from(candidate)
            self._arena.free(candidate.handle)
            self._frontier.reprioritize(node)
            logger.debug("Relaxed %r to g=%s", node.state, node.g)
        else:
            self._frontier.push(candidate, key)

    def _same_state(
        self, handle: Optional[int], candidate: SearchNode[S]
    ) -> Optional[int]:
        """
        Confirm that the node found under the candidate's key holds the same state.

        :raises SearchUsageError: If the states share a key but are not the same.
        """
        if handle is None:
            return None
        known = self._arena[handle].state
        if not known.is_same_state(candidate.state):
            raise SearchUsageError(
                f"{candidate.state!r} and {known!r} share a state_key but are not "
                "the same state"
            )
        return handle

    def _succeed(self, current: SearchNode[S]):
        goal = self._arena[self._goal]
        goal.parent = current.parent
        goal.set_costs(current.g, current.h)

        if current.handle != self._start:
            self._arena.free(current.handle)
            child, parent = goal.handle, goal.parent
            while child != self._start:
                parent_node = self._arena[parent]
                parent_node.child = child
                child, parent = parent, parent_node.parent

        self._free_unused_nodes()
        self._solution_cost = goal.g
        self._status = SearchStatus.SUCCEEDED
        logger.debug("Found solution of cost %s in %d steps", goal.g, self._steps)

    def _fail(self):
        self._free_candidates()
        for handle in self._frontier.drain() + self._expanded.drain():
            self._arena.free(handle)
        self._arena.free(self._goal)
        self._start = self._goal = self._cursor = None
        self._status = SearchStatus.FAILED
        logger.debug("Search failed after %d steps", self._steps)

    def _free_unused_nodes(self):
        for handle in self._frontier.drain() + self._expanded.drain():
            if self._arena[handle].child is None:
                self._arena.free(handle)

    def _free_candidates(self):
        for handle in self._candidates:
            self._arena.free(handle)
        self._candidates.clear()

    def _cursor_state(self) -> Optional[S]:
        if self._cursor is None:
            return None
        return self._arena[self._cursor].state

    def _move_cursor(self, follow) -> Optional[S]:
        if self._cursor is None:
            return None
        following = follow(self._arena[self._cursor])
        if following is None:
            return None
        self._cursor = following
        return self._arena[following].state


class _SnapshotCursor:
    """
    Cursor over a list of node snapshots taken when the cursor was started.
    """

    def __init__(self):
        self._snapshots: List[NodeSnapshot] = []
        self._index = 0

    def start(self, snapshots: List[NodeSnapshot]) -> Optional[NodeSnapshot]:
        self._snapshots = snapshots
        self._index = 0
        return self._current()

    def next(self) -> Optional[NodeSnapshot]:
        if self._index < len(self._snapshots):
            self._index += 1
        return self._current()

    def _current(self) -> Optional[NodeSnapshot]:
        if self._index < len(self._snapshots):
            return self._snapshots[self._index]
        return None

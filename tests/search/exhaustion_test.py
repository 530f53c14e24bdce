import unittest

from parameterized import parameterized

import stepstar as ss

from ..utils import WeightedGraph, live_nodes, search


class TestResourceExhaustion(unittest.TestCase):
    @parameterized.expand([(2,), (3,), (4,)])
    def test_node_budget(self, max_nodes):
        g = WeightedGraph([("A", "B", 1), ("A", "C", 1), ("A", "D", 1), ("D", "E", 1)])
        engine = search(g, "A", "E", config=ss.AStarConfig(max_nodes=max_nodes))
        self.assertEqual(engine.step(), ss.SearchStatus.FAILED)
        self.assertIsInstance(engine.failure_reason, ss.NodeBudgetExceededError)
        self.assertIsInstance(engine.failure_reason, MemoryError)
        self.assertEqual(engine.outstanding_nodes, 0)
        self.assertEqual(engine.allocated_node_count, engine.freed_node_count)
        self.assertEqual(engine.solution_cost(), ss.UNDEFINED_COST)

    def test_node_budget_large_enough(self):
        g = WeightedGraph([("A", "B", 1), ("A", "C", 1), ("A", "D", 1), ("D", "E", 1)])
        engine = search(g, "A", "E", config=ss.AStarConfig(max_nodes=6))
        self.assertEqual(engine.run(), ss.SearchStatus.SUCCEEDED)
        self.assertEqual(engine.solution_cost(), 2)

    def test_budget_counts_outstanding_nodes(self):
        # discarded successors are freed, so their slots can be reused
        g = WeightedGraph(
            [("A", "B", 1), ("B", "A", 1), ("B", "C", 1), ("C", "B", 1), ("C", "D", 1)]
        )
        engine = search(g, "A", "D", config=ss.AStarConfig(max_nodes=6))
        self.assertEqual(engine.run(), ss.SearchStatus.SUCCEEDED)
        self.assertGreater(engine.allocated_node_count, 6)

    def test_budget_must_cover_start_and_goal(self):
        with self.assertRaises(AssertionError):
            ss.AStarConfig(max_nodes=1)

    @parameterized.expand(
        [
            ("enumeration_error", ss.SuccessorEnumerationError),
            ("memory_error", MemoryError),
        ]
    )
    def test_successor_enumeration_failure(self, _, error):
        g = WeightedGraph(
            [("A", "B", 1), ("B", "C", 1), ("B", "D", 1), ("C", "E", 1)],
            fail_after={"B"},
            error=error,
        )
        engine = search(g, "A", "E")
        self.assertEqual(engine.step(), ss.SearchStatus.SEARCHING)
        self.assertEqual(engine.step(), ss.SearchStatus.FAILED)
        self.assertIsInstance(engine.failure_reason, error)
        # C and D were allocated before the failure and must be freed too
        self.assertEqual(engine.allocated_node_count, 5)
        self.assertEqual(engine.outstanding_nodes, 0)
        self.assertEqual(engine.step(), ss.SearchStatus.FAILED)
        self.assertEqual(engine.step_count, 2)

    def test_other_errors_propagate(self):
        g = WeightedGraph([("A", "B", 1)], fail_after={"A"}, error=KeyError)
        engine = search(g, "A", "B")
        with self.assertRaises(KeyError):
            engine.step()
        self.assertEqual(live_nodes(engine), engine.outstanding_nodes)
        engine.cancel_search()
        self.assertEqual(engine.status, ss.SearchStatus.FAILED)
        self.assertEqual(engine.outstanding_nodes, 0)
        self.assertEqual(engine.allocated_node_count, engine.freed_node_count)

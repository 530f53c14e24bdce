import unittest

import stepstar as ss

from ..utils import WeightedGraph, names

chain = WeightedGraph([(str(i), str(i + 1), 1) for i in range(10)])


class TestStepwiseAStar(unittest.TestCase):
    def test_search_yields_path(self):
        path = list(ss.StepwiseAStar().search(chain.state("0"), chain.state("10")))
        self.assertEqual(names(path), [str(i) for i in range(11)])

    def test_solve(self):
        result = ss.StepwiseAStar().solve(chain.state("0"), chain.state("10"))
        self.assertTrue(result.succeeded)
        self.assertEqual(result.status, ss.SearchStatus.SUCCEEDED)
        self.assertEqual(result.cost, 10)
        self.assertEqual(result.steps, 11)
        self.assertIsNone(result.failure_reason)

    def test_step_budget(self):
        result = ss.StepwiseAStar(max_steps=5).solve(
            chain.state("0"), chain.state("10")
        )
        self.assertFalse(result.succeeded)
        # the engine was still searching when it was cut off
        self.assertEqual(result.status, ss.SearchStatus.SEARCHING)
        self.assertEqual(result.path, ())
        self.assertEqual(result.cost, ss.UNDEFINED_COST)
        self.assertEqual(result.steps, 5)

    def test_exact_step_budget(self):
        result = ss.StepwiseAStar(max_steps=11).solve(
            chain.state("0"), chain.state("10")
        )
        self.assertTrue(result.succeeded)

    def test_unreachable(self):
        result = ss.StepwiseAStar().solve(chain.state("5"), chain.state("0"))
        self.assertEqual(result.status, ss.SearchStatus.FAILED)
        self.assertEqual(result.path, ())
        path = ss.StepwiseAStar().search(chain.state("5"), chain.state("0"))
        self.assertEqual(list(path), [])

    def test_resource_exhaustion_reported(self):
        result = ss.StepwiseAStar(config=ss.AStarConfig(max_nodes=2)).solve(
            chain.state("0"), chain.state("10")
        )
        self.assertEqual(result.status, ss.SearchStatus.FAILED)
        self.assertIsInstance(result.failure_reason, ss.NodeBudgetExceededError)

    def test_verbose(self):
        result = ss.StepwiseAStar(max_steps=100, verbose=True).solve(
            chain.state("0"), chain.state("10")
        )
        self.assertEqual(result.cost, 10)

    def test_zero_budget_rejected(self):
        with self.assertRaises(AssertionError):
            ss.StepwiseAStar(max_steps=0)

    def test_is_search_strategy(self):
        self.assertIsInstance(ss.StepwiseAStar(), ss.search.SearchStrategy)

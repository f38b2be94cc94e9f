import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.algo.base import State
from gridmaze.algo.dfs import RandomizedDFSGenerator
from gridmaze.algo.reconcile import PathReconciler
from gridmaze.algo.solvers import DFSSolver
from gridmaze.core.errors import PreconditionNotMetError
from gridmaze.core.grid import Grid, Status


def carved(rows, cols, passages):
    grid = Grid(rows, cols)
    gen = RandomizedDFSGenerator(grid)
    for a, b in passages:
        grid.open_passage(a, b)
    gen.state = State.DONE
    return grid, gen


def solved(grid, gen):
    solver = DFSSolver(grid, gen)
    solver.start()
    solver.run_to_completion()
    return solver, PathReconciler(grid, solver)


class TestReconciler(unittest.TestCase):
    def test_requires_finished_solver(self):
        grid, gen = carved(1, 3, [((0, 0), (0, 1)), ((0, 1), (0, 2))])
        solver = DFSSolver(grid, gen)
        reconciler = PathReconciler(grid, solver)

        with self.assertRaises(PreconditionNotMetError):
            reconciler.run()

        solver.start()
        solver.step()
        with self.assertRaises(PreconditionNotMetError):
            reconciler.run()

    def test_promotes_branch_point(self):
        # Path (0,0) (1,0) (1,1) (2,1) (2,2); the solver first wanders into
        # the arm (1,2) (0,2) (0,1) and labels the branch point (1,1) BACKTRACKED
        grid, gen = carved(3, 3, [
            ((0, 0), (1, 0)),
            ((1, 0), (1, 1)),
            ((1, 1), (2, 1)),
            ((2, 1), (2, 2)),
            ((1, 1), (1, 2)),
            ((1, 2), (0, 2)),
            ((0, 2), (0, 1)),
            ((1, 0), (2, 0)),
        ])
        solver, reconciler = solved(grid, gen)
        self.assertEqual(grid.status((1, 1)), Status.BACKTRACKED)

        promoted = reconciler.run()

        self.assertEqual(promoted, 1)
        self.assertEqual(grid.status((1, 1)), Status.VISITED)
        for pos in [(1, 2), (0, 2), (0, 1)]:
            self.assertEqual(grid.status(pos), Status.BACKTRACKED, pos)
        self.assertEqual(solver.path(), [(0, 0), (1, 0), (1, 1), (2, 1), (2, 2)])

    def test_single_pass_heuristic(self):
        # Two consecutive branch points (1,0) and (2,0), each leading first
        # into a dead end. The single most-recent-first pass fixes both but
        # also promotes the dead end (2,1): a known limit of the heuristic.
        grid, gen = carved(4, 2, [
            ((0, 0), (1, 0)),
            ((1, 0), (2, 0)),
            ((2, 0), (3, 0)),
            ((3, 0), (3, 1)),
            ((1, 0), (1, 1)),
            ((2, 0), (2, 1)),
            ((0, 1), (1, 1)),
        ])
        solver, reconciler = solved(grid, gen)
        self.assertEqual(solver.visited_order,
                         [(0, 0), (1, 0), (1, 1), (0, 1), (2, 0), (2, 1), (3, 0)])

        promoted = reconciler.run()

        self.assertEqual(promoted, 3)
        self.assertEqual(grid.status((1, 0)), Status.VISITED)
        self.assertEqual(grid.status((2, 0)), Status.VISITED)
        self.assertEqual(grid.status((2, 1)), Status.VISITED)
        self.assertEqual(grid.status((1, 1)), Status.BACKTRACKED)
        self.assertEqual(grid.status((0, 1)), Status.BACKTRACKED)

    def test_idempotent(self):
        for seed in range(10):
            grid = Grid(20, 20)
            gen = RandomizedDFSGenerator(grid, seed=seed)
            gen.start()
            gen.run_to_completion()
            solver, reconciler = solved(grid, gen)

            reconciler.run()
            after_first = grid.statuses.tobytes()
            self.assertEqual(reconciler.run(), 0)
            self.assertEqual(grid.statuses.tobytes(), after_first)

    def test_new_solver_run_reapplies(self):
        grid, gen = carved(3, 3, [
            ((0, 0), (1, 0)),
            ((1, 0), (1, 1)),
            ((1, 1), (2, 1)),
            ((2, 1), (2, 2)),
            ((1, 1), (1, 2)),
            ((1, 2), (0, 2)),
            ((0, 2), (0, 1)),
            ((1, 0), (2, 0)),
        ])
        solver, reconciler = solved(grid, gen)
        self.assertEqual(reconciler.run(), 1)

        solver.start()
        solver.run_to_completion()
        self.assertEqual(reconciler.run(), 1)

    def test_two_by_two_leaves_nothing_backtracked(self):
        for seed in range(10):
            grid = Grid(2, 2)
            gen = RandomizedDFSGenerator(grid, seed=seed)
            gen.start(origin=(0, 0))
            gen.run_to_completion()
            solver, reconciler = solved(grid, gen)
            reconciler.run()

            statuses = [grid.status(pos) for pos in solver.visited_order]
            self.assertNotIn(Status.BACKTRACKED, statuses)
            self.assertTrue(all(s in (Status.START, Status.VISITED) for s in statuses))

    def test_start_never_relabelled(self):
        # START is a branch point here: the solver tries (0,1) first
        grid, gen = carved(2, 2, [((0, 0), (0, 1)), ((0, 0), (1, 0)), ((1, 0), (1, 1))])
        solver, reconciler = solved(grid, gen)
        reconciler.run()
        self.assertEqual(grid.status((0, 0)), Status.START)
        self.assertEqual(grid.status((0, 1)), Status.BACKTRACKED)
        self.assertEqual(grid.status((1, 0)), Status.VISITED)


if __name__ == '__main__':
    unittest.main()

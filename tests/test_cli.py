import unittest
import sys
import os
import io
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.main import build_parser, main


class TestCLI(unittest.TestCase):
    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_generate(self):
        code, out = self.run_cli("generate", "--rows", "4", "--columns", "6", "--seed", "3")
        self.assertEqual(code, 0)
        lines = out.strip().splitlines()
        self.assertEqual(len(lines), 9)
        self.assertIn("S", lines[1])
        self.assertIn("E", lines[7])

    def test_solve(self):
        code, out = self.run_cli("solve", "--rows", "8", "--columns", "8", "--seed", "5", "-q")
        self.assertEqual(code, 0)
        self.assertIn("Maze solved.", out)
        self.assertIn("Path Length:", out)

    def test_invalid_dimensions(self):
        code, out = self.run_cli("generate", "--rows", "0", "--columns", "5")
        self.assertEqual(code, 2)

    def test_raised_maximum(self):
        code, _ = self.run_cli("solve", "--rows", "70", "--columns", "10", "--max-rows", "80", "-q")
        self.assertEqual(code, 0)

    def test_benchmark(self):
        code, out = self.run_cli("benchmark", "--rows", "5", "--columns", "5", "--runs", "3")
        self.assertEqual(code, 0)
        self.assertIn("generate", out)

    def test_parser_defaults(self):
        args = build_parser().parse_args(["visual"])
        self.assertEqual(args.rows, 50)
        self.assertEqual(args.speed, 6)
        self.assertFalse(args.record)

    def test_no_command(self):
        code, out = self.run_cli()
        self.assertEqual(code, 0)
        self.assertIn("usage", out)


if __name__ == '__main__':
    unittest.main()

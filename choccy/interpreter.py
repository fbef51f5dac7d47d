from __future__ import annotations

from typing import Optional

from choccy import config
from choccy.evaluation.evaluator import evaluate
from choccy.printer import render
from choccy.reader.parser import parse
from choccy.reader.tree_reader import read
from choccy.types.value import Value, release


class Interpreter:
    """
    Orchestrates parsing, reading and evaluating choccy code.
    Holds no state between calls other than its settings.
    """

    def __init__(self, max_depth: Optional[int] = None):
        if max_depth is None:
            max_depth = config.get_max_depth()
        if max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.max_depth: int = max_depth

    def read(self, code: str) -> Value:
        """Parse and read `code` without evaluating it. The caller owns the result."""
        return read(parse(code), self.max_depth)

    def eval(self, code: str) -> Value:
        """Read and evaluate `code`. The caller owns the result."""
        return evaluate(self.read(code), 0, self.max_depth)

    def eval_to_text(self, code: str) -> str:
        result = self.eval(code)
        try:
            return render(result)
        finally:
            release(result)

# choccy: a small Lisp-like expression evaluator.
#
# Source text is parsed into an immutable syntax tree (choccy.reader.parser),
# read into a tree of `Value` nodes (choccy.reader.tree_reader), reduced by
# the evaluator (choccy.evaluation) and rendered by choccy.printer.
# Every Value is exclusively owned by one parent or caller and released
# exactly once.

__version__ = "0.0.0.0.4"

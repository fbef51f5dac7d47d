import pytest

from choccy.errors import ChoccySyntaxError
from choccy.interpreter import Interpreter
from choccy.printer import render
from choccy.reader.parser import parse
from choccy.reader.tree_reader import read
from choccy.evaluation.evaluator import evaluate
from choccy.types.value import Kind, release


@pytest.mark.parametrize(
    "source,expected",
    [
        ("+ 1 2", "3"),
        ("(+ 1 2)", "3"),
        ("(- 10 3 2)", "5"),
        ("(- 5)", "-5"),
        ("(* 2 (+ 3 4) (- 10 6))", "56"),
        ("(/ 12 3)", "4"),
        ("(/ -7 2)", "-3"),
        ("(/ 7 -2)", "-3"),
        ("(% -7 2)", "-1"),
        ("(% 10 3)", "1"),
        ("(^ 2 10)", "1024"),
        ("5", "5"),
        ("", "()"),
        ("()", "()"),
        ("{1 2 (+ 3 4)}", "{1 2 (+ 3 4)}"),
        ("list 1 2 3 4", "{1 2 3 4}"),
        ("head {1 2 3}", "{1}"),
        ("tail {1 2 3}", "{2 3}"),
        ("join {1} {2}", "{1 2}"),
        ("join {1 2} {} {3 (4)}", "{1 2 3 (4)}"),
        ("eval {+ 1 2}", "3"),
        ("eval {}", "()"),
        ("(eval {head (list 1 2 3 4)})", "{1}"),
        ("(tail {tail tail tail})", "{tail tail}"),
        ("(eval (tail {tail tail {5 6 7}}))", "{6 7}"),
        ("(eval (head {(+ 1 2) (+ 10 20)}))", "3"),
        ("eval (head {5 10 11 15})", "5"),
        ("(list)", "list"),
        ("head", "head"),
        ("; only a comment", "()"),
    ]
)
def test_eval_to_text(interp, source, expected):
    assert interp.eval_to_text(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(/ 5 0)", "Error: Division by zero"),
        ("(% 5 0)", "Error: Division by zero"),
        ("(+ 1 {2})", "Error: Non-number passed as operation argument"),
        ("(1 2 3)", "Error: S-expression doesn't start with symbol"),
        ("(foo 1)", "Error: Unknown function"),
        ("99999999999999999999", "Error: Invalid number"),
        ("(+ 1 99999999999999999999)", "Error: Invalid number"),
        ("head {}", "Error: Function 'head' passed {}"),
        ("head 1", "Error: Function 'head' passed incorrect type"),
        ("tail {1} {2}", "Error: Function 'tail' passed too many arguments"),
        ("join {1} 2", "Error: Function 'join' passed incorrect type"),
        ("eval 1", "Error: Function 'eval' passed incorrect type"),
        ("(+ (/ 1 0) (1 2))", "Error: Division by zero"),
        ("(+ (1 2) (/ 1 0))", "Error: S-expression doesn't start with symbol"),
        ("(head (tail {1}))", "Error: Function 'head' passed {}"),
    ]
)
def test_errors_are_values(interp, source, expected):
    assert interp.eval_to_text(source) == expected


def test_round_trip_through_reader_and_evaluator():
    tree = parse("(+ 1 2)")
    expr_node = tree.children[1]
    value = read(expr_node)
    assert render(value) == "(+ 1 2)"
    result = evaluate(value)
    assert render(result) == "3"
    release(result)


def test_read_does_not_evaluate(interp):
    value = interp.read("(/ 1 0)")
    assert render(value) == "((/ 1 0))"
    release(value)


def test_eval_returns_an_owned_value(interp):
    result = interp.eval("{1 2}")
    assert result.kind is Kind.QEXPR
    assert not result.owned and not result.released
    release(result)


def test_syntax_errors_propagate(interp):
    with pytest.raises(ChoccySyntaxError):
        interp.eval_to_text("(+ 1 2")


def test_max_depth_guard():
    shallow = Interpreter(max_depth=5)
    assert shallow.eval_to_text("((((1))))") == "1"
    assert shallow.eval_to_text("(((((((1)))))))") == "Error: Maximum nesting depth exceeded"


def test_max_depth_from_environment(monkeypatch):
    monkeypatch.setenv("CHOCCY_MAX_DEPTH", "3")
    assert Interpreter().max_depth == 3
    assert Interpreter(max_depth=10).max_depth == 10


def test_explicit_max_depth_is_not_replaced_by_the_default(monkeypatch):
    monkeypatch.delenv("CHOCCY_MAX_DEPTH", raising=False)
    assert Interpreter(max_depth=1).max_depth == 1
    assert Interpreter(max_depth=1).eval_to_text("((1))") == "Error: Maximum nesting depth exceeded"


@pytest.mark.parametrize("bad", [0, -1])
def test_non_positive_max_depth_is_rejected(bad):
    with pytest.raises(ValueError):
        Interpreter(max_depth=bad)


def test_deep_input_becomes_an_error_not_a_crash(interp):
    depth = 5000
    source = "(" * depth + "1" + ")" * depth
    assert interp.eval_to_text(source) == "Error: Maximum nesting depth exceeded"


def test_idempotence(interp):
    first = interp.eval_to_text("join {1} {2 3}")
    again = interp.eval_to_text(first)
    assert first == again == "{1 2 3}"

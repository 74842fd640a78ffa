import pytest

from pratt_calc.environment import Environment
from pratt_calc.errors import (
    DivisionByZero,
    EvalError,
    ExponentTooLarge,
    InvalidAssignmentTarget,
    NegativeExponent,
    NegativeFactorial,
    UndefinedVariable,
)
from pratt_calc.evaluator import (
    MAX_EXPONENT,
    Evaluator,
    evaluate,
    factorial,
    power,
    truncating_divide,
)
from pratt_calc.lexer import lex
from pratt_calc.nodes import BinaryOp, BinaryOperator, Identifier, NumberLiteral, UnaryOp, UnaryOperator
from pratt_calc.parser import parse


@pytest.mark.parametrize("text", ["0", "7", "000123", "9" * 5000])
def test_number_literal_round_trips(run, text):
    assert run(text) == sum(int(d) * 10 ** i for i, d in enumerate(reversed(text)))


@pytest.mark.parametrize("text, expected", [
    ("2-3-4", -5),
    ("2^3^2", 512),
    ("2+3*4", 14),
    ("(2+3)*4", 20),
    ("3!", 6),
    ("-3!", -6),
    ("0!", 1),
    ("1!", 1),
    ("--3", 3),
    ("+-3", -3),
    ("7/2", 3),
    ("8/2/2", 2),
    ("2*3^2", 18),
    ("-2^2", -4),
    ("(-2)^2", 4),
    ("2^0", 1),
    ("0^0", 1),
    ("10-2*3+1", 5),
])
def test_arithmetic(run, text, expected):
    assert run(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("-7/2", -3),
    ("7/-2", -3),
    ("-7/-2", 3),
    ("1/3", 0),
    ("-1/3", 0),
])
def test_division_truncates_toward_zero(run, text, expected):
    assert run(text) == expected


def test_arbitrary_precision(run):
    assert run("2^200") == 2 ** 200
    assert run("30!") == 265252859812191058636308480000000
    assert run("25! / 23!") == 600


def test_assignment_returns_value_and_persists(run, env):
    assert run("x := 5") == 5
    assert run("x + 1") == 6
    assert env.get("x") == 5


def test_assignment_overwrites(run, env):
    run("x := 1")
    run("x := x + 41")
    assert env.get("x") == 42


def test_chained_assignment(run, env):
    assert run("a := b := 3") == 3
    assert env.get("a") == 3 and env.get("b") == 3


def test_assignment_inside_arithmetic(run, env):
    assert run("(y := 4) * 2") == 8
    assert env.get("y") == 4


def test_right_operand_evaluated_before_left(run, env):
    # right side assigns 2, then the left side overwrites with 1; the left
    # operand sees its own assignment and the right operand's value is 2
    assert run("(x := 1) + (x := 2)") == 3
    assert env.get("x") == 1

    run("y := 10")
    # right side runs first and reassigns y, so the left read sees 3
    assert run("y * (y := 3)") == 9


def test_conditional_takes_then_branch_on_nonzero(run):
    assert run("if 5 then 1 else 2 end") == 1
    assert run("if -1 then 1 else 2 end") == 1


def test_conditional_short_circuit(run, env):
    assert run("if 0 then x := 1 else x := 2 end") == 2
    assert run("x") == 2


def test_conditional_untaken_branch_never_evaluated(run, env):
    # would raise UndefinedVariable and DivisionByZero if evaluated
    assert run("if 1 then 7 else nope / 0 end") == 7
    assert run("if 0 then z := 1 / 0 else 8 end") == 8
    assert "z" not in env


def test_undefined_variable(run):
    with pytest.raises(UndefinedVariable) as e:
        run("y + 1")
    assert e.value.name == "y"
    assert "y" in str(e.value)


def test_invalid_assignment_target(run, env):
    with pytest.raises(InvalidAssignmentTarget):
        run("1 := 2")
    with pytest.raises(InvalidAssignmentTarget):
        run("(x) := 2")
    assert "x" not in env


def test_invalid_assignment_target_after_right_side_commits(run, env):
    # the right side is evaluated before the target is checked
    with pytest.raises(InvalidAssignmentTarget):
        run("-a := (b := 5)")
    assert env.get("b") == 5


def test_division_by_zero(run):
    with pytest.raises(DivisionByZero):
        run("1 / 0")
    with pytest.raises(DivisionByZero):
        run("1 / (2 - 2)")


def test_negative_factorial(run):
    with pytest.raises(NegativeFactorial) as e:
        run("(0-3)!")
    assert e.value.value == -3


def test_exponent_limits(run):
    with pytest.raises(NegativeExponent):
        run("2 ^ (0 - 1)")
    with pytest.raises(ExponentTooLarge) as e:
        run("2 ^ 99999999999")
    assert e.value.limit == MAX_EXPONENT


def test_exponent_limit_is_configurable():
    env = Environment()
    tree = parse(lex("3 ^ 11"))
    assert evaluate(tree, env, max_exponent=12) == 3 ** 11
    with pytest.raises(ExponentTooLarge):
        evaluate(tree, env, max_exponent=11)


def test_exponent_limit_is_exclusive():
    with pytest.raises(ExponentTooLarge):
        power(1, MAX_EXPONENT)
    assert power(1, MAX_EXPONENT - 1) == 1


def test_partial_side_effects_survive_failure(run, env):
    with pytest.raises(DivisionByZero):
        run("(a := 1) + 1 / 0")
    # the right side failed before the left ran
    assert "a" not in env
    with pytest.raises(DivisionByZero):
        run("1 / 0 + (a := 1)")
    assert env.get("a") == 1
    with pytest.raises(DivisionByZero):
        run("(b := 2) / 0")
    assert env.get("b") == 2


def test_eval_errors_share_base_class(run):
    for text in ["q", "1/0", "(0-1)!", "1 := 1"]:
        with pytest.raises(EvalError):
            run(text)


def test_evaluator_builds_its_own_environment():
    ev = Evaluator()
    ev.eval(BinaryOp(BinaryOperator.ASSIGN, Identifier("n"), NumberLiteral(3)))
    assert ev.env.get("n") == 3


def test_helpers():
    assert factorial(5) == 120
    assert truncating_divide(-9, 4) == -2
    assert power(-2, 3) == -8
    with pytest.raises(DivisionByZero):
        truncating_divide(5, 0)


def test_errors_on_huge_operands(run):
    with pytest.raises(ExponentTooLarge) as e:
        run("2 ^ (10 ^ 5000)")
    assert e.value.exponent == 10 ** 5000
    assert "5001-digit integer" in str(e.value)

    with pytest.raises(NegativeExponent):
        run("2 ^ (0 - 10 ^ 5000)")

    with pytest.raises(DivisionByZero) as e:
        run("(10 ^ 5000) / 0")
    assert e.value.dividend == 10 ** 5000

    with pytest.raises(NegativeFactorial) as e:
        run("(0 - 10 ^ 5000)!")
    assert str(e.value).startswith("factorial not defined for negative numbers (-<~")


def test_deep_nesting_is_an_eval_error():
    node = NumberLiteral(1)
    for _ in range(5000):
        node = UnaryOp(UnaryOperator.NEGATE, node)
    with pytest.raises(EvalError) as e:
        evaluate(node, Environment())
    assert "nested too deeply" in str(e.value)

"""
Tests for the default host bootstrap: operators, utility functions and
value formatting.
"""

import pytest

from egg.egg_evaluator.egg_closure import Closure
from egg.egg_evaluator.egg_primitives import (
    BINARY_OPERATORS,
    PrimitiveProcessor,
    create_global_environment,
    format_value,
)
from egg.egg_evaluator.egg_evaluator import run
from egg.system.errors import HostError


# --- format_value ---

@pytest.mark.parametrize("value, expected", [
    (True, "true"),
    (False, "false"),
    (None, "null"),
    (3, "3"),
    (2.0, "2"),
    (2.5, "2.5"),
    ("plain", "plain"),
    ([1, "a", [True]], '[1, "a", [true]]'),
    ([], "[]"),
])
def test_format_value(value, expected):
    assert format_value(value) == expected

def test_format_value_closure():
    closure = run("fun(a, b, +(a, b))")
    assert isinstance(closure, Closure)
    assert format_value(closure) == "<function(a, b)>"

def test_format_value_host_function():
    def double(x):
        return x * 2
    assert format_value(double) == "<host function double>"


# --- Global environment ---

def test_global_environment_bindings():
    env = create_global_environment()
    assert env.parent is None
    assert env.lookup("true") is True
    assert env.lookup("false") is False
    for name in ("+", "-", "*", "/", "==", "<", ">", "print", "array", "length", "element"):
        assert callable(env.lookup(name)), name

def test_global_environments_are_independent():
    first = create_global_environment()
    second = create_global_environment()
    first.define("x", 1)
    assert not second.owns("x")

@pytest.mark.parametrize("source, expected", [
    ("+(2, 3)", 5),
    ("-(2, 3)", -1),
    ("*(4, 3)", 12),
    ("/(7, 2)", 3.5),
    ("==(2, 2)", True),
    ('==("a", "a")', True),
    ("==(1, 2)", False),
    ("<(1, 2)", True),
    (">(1, 2)", False),
    ('+("ab", "cd")', "abcd"),
])
def test_binary_operators(run_egg, source, expected):
    assert run_egg(source) == expected

def test_operator_table_names():
    assert set(BINARY_OPERATORS) == {"+", "-", "*", "/", "==", "<", ">"}


# --- print ---

def test_print_writes_and_returns_value(run_egg, output):
    assert run_egg('print("hello")') == "hello"
    assert output.getvalue() == "hello\n"

def test_print_formats_values(run_egg, output):
    run_egg('do(print(array(1, "two", true)), print(false), print(/(4, 2)))')
    assert output.getvalue() == '[1, "two", true]\nfalse\n2\n'

def test_print_defaults_to_stdout(capsys):
    processor = PrimitiveProcessor()
    assert processor.apply_print_primitive(7) == 7
    assert capsys.readouterr().out == "7\n"


# --- array / length / element ---

def test_array_builds_list(run_egg):
    assert run_egg("array(1, 2, 3)") == [1, 2, 3]
    assert run_egg("array()") == []

def test_length(run_egg):
    assert run_egg("length(array(1, 2, 3))") == 3
    assert run_egg("length(array())") == 0

def test_element(run_egg):
    assert run_egg('element(array("a", "b"), 1)') == "b"

def test_element_out_of_range_is_host_error(run_egg):
    with pytest.raises(HostError, match="element") as excinfo:
        run_egg("element(array(1), 5)")
    assert isinstance(excinfo.value.__cause__, IndexError)

def test_element_negative_index_is_host_error(run_egg):
    with pytest.raises(HostError, match="element index out of range: -1") as excinfo:
        run_egg("element(array(1, 2, 3), -(0, 1))")
    assert isinstance(excinfo.value.__cause__, IndexError)

def test_plus_does_not_coerce_mixed_types(run_egg):
    with pytest.raises(HostError) as excinfo:
        run_egg('+("n=", 1)')
    assert isinstance(excinfo.value.__cause__, TypeError)

def test_length_of_non_array_is_host_error(run_egg):
    with pytest.raises(HostError):
        run_egg("length(5)")

def test_array_sum_program(run_egg):
    program = """
    do(define(sum, fun(array,
         do(define(i, 0),
            define(sum, 0),
            while(<(i, length(array)),
                  do(define(sum, +(sum, element(array, i))),
                     define(i, +(i, 1)))),
            sum))),
       sum(array(1, 2, 3)))
    """
    assert run_egg(program) == 6

"""
Tests for closures: lexical capture, call frames, shadowing and arity.
"""

import pytest

from egg.egg_evaluator.egg_closure import Closure
from egg.egg_evaluator.egg_evaluator import run
from egg.system.errors import EggTypeError


def test_fun_produces_closure(run_egg, env):
    closure = run_egg("fun(a, b, +(a, b))")
    assert isinstance(closure, Closure)
    assert closure.params == ["a", "b"]
    assert closure.definition_env is env
    assert repr(closure).startswith("<Closure params=(a, b)")

def test_closure_call(run_egg):
    assert run_egg("do(define(plusOne, fun(a, +(a, 1))), plusOne(10))") == 11

def test_zero_parameter_closure(run_egg):
    assert run_egg('do(define(hello, fun("hi")), hello())') == "hi"

def test_recursive_closure(run_egg):
    program = """
    do(define(pow, fun(base, exp,
         if(==(exp, 0),
            1,
            *(base, pow(base, -(exp, 1)))))),
       pow(2, 10))
    """
    assert run_egg(program) == 1024

def test_parameter_shadows_only_during_call(run_egg, env):
    assert run_egg("do(define(x, 10), define(f, fun(x, +(x, 1))), f(1))") == 2
    assert env.lookup("x") == 10

def test_closure_captures_definition_frame_not_call_site(run_egg):
    program = """
    do(define(x, "defined"),
       define(show, fun(x)),
       define(caller, fun(x, show())),
       caller("call site"))
    """
    assert run_egg(program) == "defined"

def test_counter_keeps_captured_frame_alive(run_egg):
    program = """
    do(define(makeCounter, fun(do(define(count, 0), fun(set(count, +(count, 1)))))),
       define(c, makeCounter()),
       c(), c(), c())
    """
    assert run_egg(program) == 3

def test_counters_have_independent_frames(run_egg):
    program = """
    do(define(makeCounter, fun(do(define(count, 0), fun(set(count, +(count, 1)))))),
       define(a, makeCounter()),
       define(b, makeCounter()),
       a(), a(), b(),
       array(a(), b()))
    """
    assert run_egg(program) == [3, 2]

def test_closures_share_a_captured_frame(run_egg):
    program = """
    do(define(makePair, fun(do(
         define(n, 0),
         array(fun(set(n, +(n, 1))), fun(n))))),
       define(pair, makePair()),
       element(pair, 0)(),
       element(pair, 0)(),
       element(pair, 1)())
    """
    assert run_egg(program) == 2

@pytest.mark.parametrize("call", ["f(1)", "f(1, 2, 3)", "f()"])
def test_wrong_argument_count(run_egg, call):
    with pytest.raises(EggTypeError, match="Wrong number of arguments") as excinfo:
        run_egg(f"do(define(f, fun(a, b, +(a, b))), {call})")
    assert isinstance(excinfo.value, TypeError)

def test_closure_callable_from_python():
    add = run("fun(a, b, +(a, b))")
    assert add(2, 3) == 5
    with pytest.raises(EggTypeError):
        add(1)

def test_each_call_gets_a_new_frame(run_egg):
    program = """
    do(define(f, fun(n, do(define(local, n), local))),
       array(f(1), f(2)))
    """
    assert run_egg(program) == [1, 2]

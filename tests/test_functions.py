"""Test functions, closures and returns."""

import lox
import loxtest
from loxtest import run


def test_counters_are_independent():
    """Each call of the factory closes over a fresh variable."""
    assert run("""
        fun makeCounter() {
            var i = 0;
            fun count() {
                i = i + 1;
                return i;
            }
            return count;
        }
        var counter1 = makeCounter();
        var counter2 = makeCounter();
        print counter1();
        print counter1();
        print counter2();
    """) == ["1", "2", "1"]


def test_closures_share_environment():
    assert run("""
        var get;
        var set;
        fun make() {
            var value = "initial";
            fun getter() { return value; }
            fun setter(v) { value = v; }
            get = getter;
            set = setter;
        }
        make();
        set("updated");
        print get();
    """) == ["updated"]


def test_closure_binds_at_declaration():
    """A later local declaration does not change what a closure reads."""
    assert run("""
        var a = "global";
        {
            fun showA() { print a; }
            showA();
            var a = "block";
            showA();
        }
    """) == ["global", "global"]


def test_parameters_shadow_globals():
    assert run('var x = "global"; fun f(x) { print x; } f("param"); print x;') == ["param", "global"]


def test_recursion():
    assert run("""
        fun fib(n) {
            if (n < 2) return n;
            return fib(n - 1) + fib(n - 2);
        }
        print fib(15);
    """) == ["610"]


def test_deep_recursion():
    """Recursion depth is not limited by the Python stack."""
    assert run("""
        fun count(n) {
            if (n == 0) return 0;
            return count(n - 1) + 1;
        }
        print count(3000);
    """) == ["3000"]


def test_return_values():
    assert run("""
        fun nothing() {}
        fun bare() { return; }
        fun early(n) {
            while (true) {
                if (n > 2) return "big";
                return "small";
            }
        }
        print nothing();
        print bare();
        print early(5);
        print early(1);
    """) == ["nil", "nil", "big", "small"]


def test_return_from_nested_blocks():
    assert run("""
        fun find(limit) {
            for (var i = 0; i < 10; i = i + 1) {
                { if (i == limit) return i * 10; }
            }
            return -1;
        }
        print find(3);
        print find(20);
    """) == ["30", "-1"]


def test_argument_order():
    """Arguments are evaluated left to right."""
    assert run("""
        fun show(x) { print x; return x; }
        fun add(a, b) { return a + b; }
        print add(show(1), show(2));
    """) == ["1", "2", "3"]


def test_functions_are_values():
    assert run("""
        fun twice(f, x) { return f(f(x)); }
        fun inc(n) { return n + 1; }
        print twice(inc, 5);
        print inc;
        print clock;
    """) == ["7", "<fn inc>", "<native fn>"]


def test_clock():
    assert run("var t = clock(); print t > 0; print clock() >= t;") == ["true", "true"]


def test_wrong_arity():
    error, _ = loxtest.run_error("fun f(a, b) {} f(1);", lox.WrongArity)
    assert error.message == "Expected 2 arguments but got 1."

    error, _ = loxtest.run_error('clock("extra");', lox.WrongArity)
    assert error.message == "Expected 0 arguments but got 1."


def test_not_callable():
    error, _ = loxtest.run_error('"text"();', lox.NotCallable)
    assert "Can only call functions and classes" in error.message

    loxtest.run_error("var n = 1; n(2);", lox.NotCallable)


def test_arguments_evaluated_before_callee_check():
    error, printed = loxtest.run_error('fun p() { print "arg"; } nil(p());', lox.NotCallable)
    assert printed == ["arg"]

"""Test classes, instances, methods and inheritance."""

import lox
import loxtest
from loxtest import run


def test_superclass_dispatch():
    assert run("""
        class Bar {
            method() { return "Bar"; }
        }
        class Foo < Bar {
            method() { return super.method() + " and Foo"; }
        }
        print Foo().method();
    """) == ["Bar and Foo"]


def test_initializer_sets_fields():
    assert run("""
        class Person {
            init(name) { this.name = name; }
            greet() { return "Hi " + this.name; }
        }
        var p = Person("Ada");
        print p.name;
        print p.greet();
        print Person;
        print p;
    """) == ["Ada", "Hi Ada", "Person", "Person instance"]


def test_unset_field_on_other_instance():
    error, printed = loxtest.run_error("""
        class Box {}
        var a = Box();
        var b = Box();
        a.value = 1;
        print a.value;
        print b.value;
    """, lox.UndefinedProperty)
    assert printed == ["1"]
    assert error.message == "Undefined property 'value'."


def test_constructor_arity():
    error, _ = loxtest.run_error("class P { init(a, b) {} } P(1);", lox.WrongArity)
    assert error.message == "Expected 2 arguments but got 1."

    error, _ = loxtest.run_error("class Q {} Q(1);", lox.WrongArity)
    assert error.message == "Expected 0 arguments but got 1."


def test_inherited_initializer():
    assert run("""
        class A { init(x) { this.x = x; } }
        class B < A {}
        print B(7).x;
    """) == ["7"]


def test_initializer_returns_instance():
    """Calling init directly, or returning early, still gives this."""
    assert run("""
        class A {
            init() {
                this.count = 0;
                return;
            }
        }
        var a = A();
        a.count = 5;
        print a.init() == a;
        print a.count;
    """) == ["true", "0"]


def test_methods_are_bound():
    """A method taken from an instance keeps its receiver."""
    assert run("""
        class Counter {
            init() { this.n = 0; }
            bump() { this.n = this.n + 1; return this.n; }
        }
        var c = Counter();
        var bump = c.bump;
        bump();
        bump();
        print c.n;
        print bump;
    """) == ["2", "<fn bump>"]


def test_fields_shadow_methods():
    assert run("""
        class A { m() { return "method"; } }
        var a = A();
        print a.m();
        fun replacement() { return "field"; }
        a.m = replacement;
        print a.m();
    """) == ["method", "field"]


def test_superclass_method_mutates_subclass_instance():
    assert run("""
        class Base {
            setName(n) { this.name = n; }
        }
        class Derived < Base {
            rename() { super.setName("derived"); return this.name; }
        }
        var d = Derived();
        print d.rename();
        print d.name;
    """) == ["derived", "derived"]


def test_super_is_static():
    """Super starts from the class declaring the method, not the runtime class."""
    assert run("""
        class A { say() { return "A"; } }
        class B < A {
            say() { return "B"; }
            test() { return super.say(); }
        }
        class C < B { say() { return "C"; } }
        print C().test();
    """) == ["A"]


def test_deep_inheritance_chain():
    assert run("""
        class A { who() { return "A"; } }
        class B < A {}
        class C < B {}
        class D < C { who() { return "D>" + super.who(); } }
        print D().who();
    """) == ["D>A"]


def test_methods_see_enclosing_closure():
    assert run("""
        fun make(prefix) {
            class Greeter {
                greet(name) { return prefix + name; }
            }
            return Greeter;
        }
        var G = make("Hello, ");
        print G().greet("world");
    """) == ["Hello, world"]


def test_superclass_must_be_class():
    error, _ = loxtest.run_error('var NotAClass = "x"; class A < NotAClass {}', lox.SuperclassMustBeClass)
    assert "Superclass must be a class" in error.message


def test_property_on_non_instance():
    error, _ = loxtest.run_error('print "text".length;', lox.NotAnInstanceError)
    assert "Only instances have properties" in error.message

    error, _ = loxtest.run_error("var n = 1; n.x = 2;", lox.NotAnInstanceError)
    assert "Only instances have fields" in error.message


def test_missing_super_method():
    error, _ = loxtest.run_error("""
        class A {}
        class B < A { m() { return super.missing(); } }
        B().m();
    """, lox.UndefinedProperty)
    assert error.message == "Undefined property 'missing'."


def test_instances_compare_by_identity():
    assert run("""
        class A {}
        var a = A();
        var b = a;
        print a == b;
        print a == A();
        print A == A;
    """) == ["true", "false", "true"]


def test_class_model_directly():
    base = lox.LoxClass("Base", None, {})
    child = lox.LoxClass("Child", base, {})
    assert child.find_method("init") is None
    assert child.arity() == 0

    instance = lox.LoxInstance(child)
    instance.set("x", 1.0)
    assert instance.get("x") == 1.0

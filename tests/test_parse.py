"""Test parsing source text into AST nodes."""

import pytest

import lox


def test_empty_program():
    assert lox.parse("") == []
    assert lox.parse("// only a comment\n") == []


def test_statement_kinds():
    statements = lox.parse("""
        var a = 1;
        print a;
        a;
        { var b; }
        if (a) print a; else print nil;
        while (false) a = a;
        fun f(x, y) { return x; }
        class C {}
    """)
    kinds = [type(statement).__name__ for statement in statements]
    assert kinds == ["Var", "Print", "Expression", "Block", "If", "While", "Function", "Class"]


def test_literals():
    expr = lox.parse_expr('"text"')
    assert isinstance(expr, lox.ast.Literal)
    assert expr.value == "text"

    assert lox.parse_expr("12").value == 12.0
    assert lox.parse_expr("1.25").value == 1.25
    assert lox.parse_expr("true").value is True
    assert lox.parse_expr("false").value is False
    assert lox.parse_expr("nil").value is None


def test_precedence():
    expr = lox.parse_expr("1 + 2 * 3")
    assert isinstance(expr, lox.ast.Binary)
    assert expr.op == "+"
    assert isinstance(expr.right, lox.ast.Binary)
    assert expr.right.op == "*"

    expr = lox.parse_expr("a or b and c")
    assert expr.op == "or"
    assert expr.right.op == "and"

    expr = lox.parse_expr("!a == b")
    assert isinstance(expr, lox.ast.Binary)
    assert isinstance(expr.left, lox.ast.Unary)


def test_assignment_is_right_associative():
    expr = lox.parse_expr("a = b = c")
    assert isinstance(expr, lox.ast.Assign)
    assert expr.name == "a"
    assert isinstance(expr.value, lox.ast.Assign)
    assert expr.value.name == "b"


def test_property_chain():
    expr = lox.parse_expr("a.b.c = d.e()")
    assert isinstance(expr, lox.ast.Set)
    assert expr.name == "c"
    assert isinstance(expr.object, lox.ast.Get)
    assert isinstance(expr.value, lox.ast.Call)
    assert isinstance(expr.value.callee, lox.ast.Get)


def test_calls():
    expr = lox.parse_expr("f(1, g(2))(3)")
    assert isinstance(expr, lox.ast.Call)
    assert len(expr.arguments) == 1
    assert isinstance(expr.callee, lox.ast.Call)
    assert len(expr.callee.arguments) == 2

    assert lox.parse_expr("f()").arguments == []


def test_this_and_super():
    statements = lox.parse("class B < A { m() { return super.m(this); } }")
    klass = statements[0]
    assert klass.name == "B"
    assert isinstance(klass.superclass, lox.ast.Variable)
    assert klass.superclass.name == "A"
    assert len(klass.find_all(lox.ast.Super)) == 1
    assert len(klass.find_all(lox.ast.This)) == 1
    assert klass.find_all(lox.ast.Super)[0].method == "m"


def test_dangling_else():
    """An else belongs to the nearest if."""
    stmt = lox.parse("if (a) if (b) print 1; else print 2;")[0]
    assert stmt.else_branch is None
    assert stmt.then_branch.else_branch is not None


def test_for_desugars_to_while():
    stmt = lox.parse("for (var i = 0; i < 3; i = i + 1) print i;")[0]
    assert isinstance(stmt, lox.ast.Block)
    init, loop = stmt.statements
    assert isinstance(init, lox.ast.Var)
    assert isinstance(loop, lox.ast.While)
    assert isinstance(loop.body, lox.ast.Block)
    body, increment = loop.body.statements
    assert isinstance(body, lox.ast.Print)
    assert isinstance(increment.expression, lox.ast.Assign)


def test_for_without_clauses():
    stmt = lox.parse("for (;;) print 1;")[0]
    assert isinstance(stmt, lox.ast.While)
    assert stmt.condition.value is True
    assert isinstance(stmt.body, lox.ast.Print)


def test_positions():
    statements = lox.parse("var a = 1;\n  print a;", "demo.lox")
    pos = statements[1].position
    assert pos.filename == "demo.lox"
    assert pos.start_line == 2
    assert pos.start_column == 3

    variable = statements[1].find_all(lox.ast.Variable)[0]
    assert variable.position.start_line == 2
    assert variable.position.start_column == 9
    assert str(variable.position) == "on line 2"


def test_unparse():
    source = "class B < A {\n    init(x) {\n        this.x = x;\n    }\n}"
    assert lox.parse(source)[0].unparse() == source

    assert lox.parse("print -(1 + 2) * 3;")[0].unparse() == "print -(1 + 2) * 3;"
    assert lox.parse('var s = "hi";')[0].unparse() == 'var s = "hi";'
    assert lox.parse("fun f() {}")[0].unparse() == "fun f() {}"


def test_keywords_are_reserved():
    with pytest.raises(lox.ParseError):
        lox.parse("var class = 1;")
    with pytest.raises(lox.ParseError):
        lox.parse("fun this() {}")


def test_identifiers_containing_keywords():
    stmt = lox.parse("var orchid = classy;")[0]
    assert stmt.name == "orchid"
    assert stmt.initializer.name == "classy"


def test_syntax_errors():
    with pytest.raises(lox.ParseError) as info:
        lox.parse("print 1")
    assert info.value.message == "Unexpected end of input."

    with pytest.raises(lox.ParseError) as info:
        lox.parse("print (1;")
    assert info.value.message == "Unexpected ';'."
    assert info.value.line == 1

    with pytest.raises(lox.ParseError) as info:
        lox.parse("1 + 2 = 3;")
    assert "Unexpected" in info.value.message


def test_lexical_errors():
    with pytest.raises(lox.ParseError) as info:
        lox.parse('print "unterminated;')
    assert info.value.message == "Unterminated string."

    with pytest.raises(lox.ParseError) as info:
        lox.parse("\nprint @;")
    assert info.value.message == "Unexpected character '@'."
    assert info.value.line == 2


def test_argument_limit():
    args = ", ".join(["1"] * lox.MAX_ARGUMENTS)
    call = lox.parse_expr(f"f({args})")
    assert len(call.arguments) == lox.MAX_ARGUMENTS

    with pytest.raises(lox.ParseError) as info:
        lox.parse_expr(f"f({args}, 1)")
    assert info.value.message == "Can't have more than 255 arguments."


def test_parameter_limit():
    params = ", ".join(f"p{i}" for i in range(lox.MAX_ARGUMENTS + 1))
    with pytest.raises(lox.ParseError) as info:
        lox.parse(f"fun f({params}) {{}}")
    assert info.value.message == "Can't have more than 255 parameters."


def test_deeply_nested_expression():
    """Nesting past the recursion limit is a syntax error, not a crash."""
    source = "var total = 0;\nprint " + " + ".join(["1"] * 5000) + ";\nprint total;"
    with pytest.raises(lox.ParseError) as info:
        lox.parse(source)
    assert info.value.message == "Expression nested too deeply."
    assert info.value.line == 2

    with pytest.raises(lox.ParseError):
        lox.parse_expr("-" * 5000 + "1")


def test_moderately_nested_expression():
    assert len(lox.parse_expr(" + ".join(["1"] * 200)).find_all(lox.ast.Literal)) == 200

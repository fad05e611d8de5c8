"""Parser for converting Lark parse trees to Lox AST nodes.

The intermediate lark tree is not exposed to the api. Children are
converted before their parent node is created, and every node records the
source position it came from. The `for` loop has no node of its own, it is
desugared into a `while` loop inside a block.
"""

__all__ = ["parse", "parse_expr", "lark_tree", "MAX_ARGUMENTS"]

import pathlib

import lark

import lox

MAX_ARGUMENTS = 255

# Global parser instances (cached by start rule)
_parsers: dict[str, lark.Lark] = {}

# Current filename being parsed (for position tracking)
_current_filename: str | None = None


def parse(text, filename=None):
    """Parse a complete Lox program.

    Args:
        text: Program source code
        filename: Optional source filename for error messages and debugging

    Returns:
        list[Stmt] of top level statements

    Raises:
        lox.ParseError: If the text contains invalid syntax
    """
    global _current_filename
    _current_filename = filename
    try:
        tree = _parse_tree(text, "program", filename)
        return [_convert_top(kid) for kid in tree.children]
    finally:
        _current_filename = None


def parse_expr(text, filename=None):
    """Parse a single Lox expression.

    Args:
        text: Expression source code
        filename: Optional source filename for error messages and debugging

    Returns:
        The expression AST node

    Raises:
        lox.ParseError: If the text contains invalid syntax
    """
    global _current_filename
    _current_filename = filename
    try:
        tree = _parse_tree(text, "expression_start", filename)
        return _convert_top(tree.children[0])
    finally:
        _current_filename = None


def lark_tree(text, start="program"):
    """Parse text into the raw lark tree, for debugging the grammar."""
    return _parse_tree(text, start, None)


def _parse_tree(text, start, filename):
    try:
        return _get_parser(start).parse(text)
    except lark.exceptions.UnexpectedCharacters as e:
        if e.char == '"':
            message = "Unterminated string."
        else:
            message = f"Unexpected character '{e.char}'."
        raise lox.ParseError(message, _error_position(e, filename)) from e
    except lark.exceptions.UnexpectedToken as e:
        if e.token.type == "$END":
            message = "Unexpected end of input."
        else:
            message = f"Unexpected '{e.token}'."
        raise lox.ParseError(message, _error_position(e, filename)) from e
    except lark.exceptions.UnexpectedInput as e:
        raise lox.ParseError("Unexpected end of input.", _error_position(e, filename)) from e


def _error_position(error, filename):
    line = getattr(error, "line", None)
    column = getattr(error, "column", None)
    if not line or line < 0:
        return lox.ast.SourcePosition(filename=filename)
    return lox.ast.SourcePosition(filename, line, column, line, column)


def _position(treetoken):
    """Create the source position from a lark Tree or Token."""
    if isinstance(treetoken, lark.Token):
        return lox.ast.SourcePosition(
            _current_filename,
            treetoken.line,
            treetoken.column,
            treetoken.end_line or treetoken.line,
            treetoken.end_column or treetoken.column,
        )
    if isinstance(treetoken, lark.Tree) and not treetoken.meta.empty:
        meta = treetoken.meta
        return lox.ast.SourcePosition(
            _current_filename,
            meta.line,
            meta.column,
            meta.end_line or meta.line,
            meta.end_column or meta.column,
        )
    return None


def _apply_position(node, treetoken):
    """Set the node position from a lark Tree or Token."""
    position = _position(treetoken)
    if position is not None:
        node.position = position
    return node


def _convert_top(tree):
    """Convert one top level tree.

    Conversion recurses once per nesting level, so nesting past the Python
    recursion limit is reported as a syntax error of the whole statement.
    """
    try:
        return _convert_tree(tree)
    except RecursionError:
        raise lox.ParseError("Expression nested too deeply.", _position(tree)) from None


def _convert_literal(token):
    match token.type:
        case "TRUE":
            return True
        case "FALSE":
            return False
        case "NIL":
            return None
        case "NUMBER":
            return float(token.value)
        case "STRING":
            return token.value[1:-1]
    raise ValueError(f"Unhandled literal token: {token!r}")


def _convert_arguments(tree, what):
    if tree is None:
        return []
    if len(tree.children) > MAX_ARGUMENTS:
        node = lox.ast.Literal(None)
        _apply_position(node, tree.children[MAX_ARGUMENTS])
        raise lox.ParseError(f"Can't have more than {MAX_ARGUMENTS} {what}.", node.position)
    if what == "parameters":
        return [token.value for token in tree.children]
    return [_convert_tree(kid) for kid in tree.children]


def _convert_for(tree):
    """Desugar a for loop into a while loop.

    for (init; cond; incr) body  ->  { init; while (cond) { body incr; } }
    """
    _, init, condition, increment, body = tree.children
    body = _convert_tree(body)

    if increment is not None:
        increment = _apply_position(lox.ast.Expression(_convert_tree(increment)), increment)
        body = _apply_position(lox.ast.Block([body, increment]), tree)

    if condition is None:
        condition = _apply_position(lox.ast.Literal(True), tree)
    else:
        condition = _convert_tree(condition)
    loop = _apply_position(lox.ast.While(condition, body), tree)

    if init.children:
        loop = _apply_position(lox.ast.Block([_convert_tree(init.children[0]), loop]), tree)
    return loop


def _convert_tree(tree):
    """Convert a single Lark tree to an AST node.

    This is the main dispatcher that handles all grammar rules.

    Args:
        tree: Lark Tree to convert

    Returns:
        AST node instance
    """
    if isinstance(tree, lark.Token):
        raise ValueError(f"Unhandled grammar token: {tree!r}")

    kids = tree.children
    match tree.data:
        # === DECLARATIONS ===
        case "class_decl":
            _, name, _, supername, *methods = kids
            superclass = None
            if supername is not None:
                superclass = _apply_position(lox.ast.Variable(supername.value), supername)
            methods = [_convert_tree(method) for method in methods]
            node = lox.ast.Class(name.value, superclass, methods)

        case "fun_decl":
            return _convert_tree(kids[1])

        case "function":
            name, params, *body = kids
            params = _convert_arguments(params, "parameters")
            statements = [_convert_tree(kid) for kid in body]
            node = lox.ast.Function(name.value, params, statements)
            _apply_position(node.body, tree)

        case "var_decl":
            _, name, initializer = kids
            if initializer is not None:
                initializer = _convert_tree(initializer)
            node = lox.ast.Var(name.value, initializer)

        # === STATEMENTS ===
        case "expr_stmt":
            node = lox.ast.Expression(_convert_tree(kids[0]))

        case "for_stmt":
            return _convert_for(tree)

        case "if_stmt":
            _, condition, then_branch, _, else_branch = kids
            if else_branch is not None:
                else_branch = _convert_tree(else_branch)
            node = lox.ast.If(_convert_tree(condition), _convert_tree(then_branch), else_branch)

        case "print_stmt":
            node = lox.ast.Print(_convert_tree(kids[1]))

        case "return_stmt":
            value = kids[1]
            if value is not None:
                value = _convert_tree(value)
            node = lox.ast.Return(value)

        case "while_stmt":
            _, condition, body = kids
            node = lox.ast.While(_convert_tree(condition), _convert_tree(body))

        case "block":
            node = lox.ast.Block([_convert_tree(kid) for kid in kids])
            _apply_position(node.body, tree)

        # === EXPRESSIONS ===
        case "expression_start":
            return _convert_tree(kids[0])

        case "assign_expr":
            name, value = kids
            node = lox.ast.Assign(name.value, _convert_tree(value))

        case "set_expr":
            target, name, value = kids
            node = lox.ast.Set(_convert_tree(target), name.value, _convert_tree(value))

        case "logical_expr":
            left, op, right = kids
            node = lox.ast.Logical(op.value, _convert_tree(left), _convert_tree(right))

        case "binary_expr":
            left, op, right = kids
            node = lox.ast.Binary(op.value, _convert_tree(left), _convert_tree(right))

        case "unary_expr":
            op, operand = kids
            node = lox.ast.Unary(op.value, _convert_tree(operand))

        case "call_expr":
            callee, arguments = kids
            node = lox.ast.Call(_convert_tree(callee), _convert_arguments(arguments, "arguments"))

        case "get_expr":
            target, name = kids
            node = lox.ast.Get(_convert_tree(target), name.value)

        case "literal":
            node = lox.ast.Literal(_convert_literal(kids[0]))

        case "variable":
            node = lox.ast.Variable(kids[0].value)

        case "this_expr":
            node = lox.ast.This()

        case "super_expr":
            node = lox.ast.Super(kids[1].value)

        case "grouping":
            node = lox.ast.Grouping(_convert_tree(kids[0]))

        case _:
            raise ValueError(f"Unhandled grammar rule: {tree.data}")

    return _apply_position(node, tree)


def _get_parser(start):
    """Get a cached Lark parser instance for the given start rule.

    Args:
        start (str): Grammar start rule ("program" or "expression_start")

    Returns:
        lark.Lark: Cached Lark parser instance
    """
    if start not in _parsers:
        grammar_path = pathlib.Path(__file__).parent / "lox.lark"
        _parsers[start] = lark.Lark(
            grammar_path.read_text(encoding="utf-8"),
            parser="lalr",
            lexer="basic",
            start=start,
            propagate_positions=True,
            maybe_placeholders=True,
        )
    return _parsers[start]

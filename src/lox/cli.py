"""Command-line interface for the Lox language.

Run a script file, or start an interactive prompt when no file is given.
Program output goes to stdout. Errors and log records go to stderr.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import lox

EXIT_USAGE = 64
EXIT_STATIC = 65
EXIT_NO_INPUT = 66
EXIT_RUNTIME = 70


def setup_logging(level="WARNING"):
    """Configure logging for the command line.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def format_error(error, source=None):
    """Format an error for display with source location.

    Args:
        error: The LoxError to format
        source: Source text the error came from, used to show the line

    Returns:
        Formatted error message string
    """
    if isinstance(error, lox.ResolveError):
        return "\n".join(format_error(inner, source) for inner in error.errors)

    pos = error.position
    where = ""
    if pos and pos.start_line:
        where = f" at {pos.filename}:{pos.start_line}" if pos.filename else f" on line {pos.start_line}"
    lines = [f"{error.kind}{where}", f"  {error.message}"]

    if source and pos and pos.start_line:
        source_lines = source.splitlines()
        line_idx = pos.start_line - 1
        if 0 <= line_idx < len(source_lines):
            lines.append(f"  | {source_lines[line_idx].rstrip()}")
            if pos.start_column:
                spaces = " " * (pos.start_column - 1)
                lines.append(f"  | {spaces}^")
    return "\n".join(lines)


def show_ast(statements):
    for statement in statements:
        print(statement.unparse())


def show_resolution(interp, statements):
    """Print the scope distance of each resolved reference."""
    resolved = interp.resolve(statements)
    for node, distance in sorted(resolved.items(), key=lambda item: _sort_key(item[0])):
        pos = node.position
        line = pos.start_line if pos else "?"
        column = pos.start_column if pos else "?"
        print(f"{line}:{column}\t{node.unparse()}\t{distance}")


def _sort_key(node):
    pos = node.position
    if pos is None:
        return (0, 0)
    return (pos.start_line or 0, pos.start_column or 0)


def run_file(interp, path, args):
    """Run a script, returning the process exit code."""
    try:
        source = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"File not found: {path}", file=sys.stderr)
        return EXIT_NO_INPUT

    try:
        if args.lark:
            print(lox.lark_tree(source).pretty())
            return 0
        statements = lox.parse(source, str(path))
        if args.ast:
            show_ast(statements)
            return 0
        if args.resolve:
            show_resolution(interp, statements)
            return 0
        interp.resolve(statements)
        interp.interpret(statements)
    except (lox.ParseError, lox.ResolveError) as e:
        print(format_error(e, source), file=sys.stderr)
        return EXIT_STATIC
    except lox.LoxRuntimeError as e:
        print(format_error(e, source), file=sys.stderr)
        return EXIT_RUNTIME
    return 0


def run_prompt(interp):
    """Interactive prompt. Each line runs against the same interpreter.

    A line holding a bare expression echoes its value.
    """
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            print()
            continue

        if not line.strip():
            continue
        try:
            try:
                statements = lox.parse(line)
            except lox.ParseError as statement_error:
                # Retry as an expression to echo its value
                try:
                    expr = lox.parse_expr(line)
                except lox.ParseError:
                    raise statement_error from None
                statements = [lox.ast.Expression(expr)]
                interp.resolve(statements)
                print(lox.stringify(interp.interpret(statements)))
                continue
            interp.resolve(statements)
            interp.interpret(statements)
        except lox.LoxError as e:
            print(format_error(e, line), file=sys.stderr)


def main(argv=None):
    parser = argparse.ArgumentParser(prog="lox", description="Run Lox programs.")
    parser.add_argument("script", nargs="?", help="Lox source file, omit for interactive prompt")
    parser.add_argument("--max-depth", type=int, default=lox.DEFAULT_MAX_DEPTH,
                        help="Deepest evaluation nesting before a stack overflow error")
    parser.add_argument("--log-level", default=os.environ.get("LOX_LOG_LEVEL", "WARNING"),
                        help="Logging level for diagnostics on stderr")
    views = parser.add_mutually_exclusive_group()
    views.add_argument("--ast", action="store_true", help="Show the parsed program instead of running it")
    views.add_argument("--lark", action="store_true", help="Show the raw lark parse tree")
    views.add_argument("--resolve", action="store_true", help="Show resolved scope distances")

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return EXIT_USAGE if e.code else 0

    setup_logging(args.log_level)
    interp = lox.Interp(max_depth=args.max_depth)

    if args.script is None:
        if args.ast or args.lark or args.resolve:
            print("Usage: lox [script] (--ast, --lark and --resolve need a script)", file=sys.stderr)
            return EXIT_USAGE
        return run_prompt(interp)
    return run_file(interp, args.script, args)


if __name__ == "__main__":
    sys.exit(main())

"""Lox CLI - Command-line interface for the Lox language.

Usage:
    python -m lox                      # Interactive prompt
    python -m lox <file.lox>           # Run a program
    python -m lox <file.lox> --ast     # Show the parsed program
    python -m lox <file.lox> --lark    # Show Lark parse tree
    python -m lox <file.lox> --resolve # Show resolved scope distances
"""

import sys

from lox.cli import main

sys.exit(main())

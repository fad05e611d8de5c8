"""
Lox Programming Language Implementation

A tree-walking interpreter for Lox, a small dynamically typed scripting
language with closures and single inheritance classes.
"""

__version__ = "0.3.0"


from ._error import *
from ._value import *
from ._env import *
from ._engine import *
from ._func import *
from ._class import *
from . import ast
from ._resolve import *
from ._parse import *
from ._interp import *

"""Syntax tree nodes for Lox programs."""

from ._base import *
from ._expr import *
from ._stmt import *

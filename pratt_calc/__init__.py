"""Integer calculator: lexer, precedence-climbing parser and tree-walking evaluator."""

from .environment import Environment
from .errors import CalculatorError, EvalError, LexerError, ParseError
from .evaluator import Evaluator, evaluate
from .lexer import Lexer, lex
from .parser import Parser, parse

__version__ = "0.1.0"

__all__ = [
    "CalculatorError",
    "Environment",
    "EvalError",
    "Evaluator",
    "Lexer",
    "LexerError",
    "ParseError",
    "Parser",
    "evaluate",
    "lex",
    "parse",
]

# Text renderings used by the REPL's .tree and .tokens diagnostics.

from __future__ import annotations

from typing import List, Sequence

from .nodes import (
    BinaryOp,
    Conditional,
    Expression,
    Grouping,
    Identifier,
    NumberLiteral,
    UnaryOp,
)
from .tokens import Token

# str(int) is capped by sys.get_int_max_str_digits(); split with divmod first.
_DIGIT_CHUNK = 4000


def format_value(value: int) -> str:
    """Decimal text of an integer of any size."""
    if -10 ** _DIGIT_CHUNK < value < 10 ** _DIGIT_CHUNK:
        return str(value)
    sign = '-' if value < 0 else ''
    value = abs(value)
    chunks: List[str] = []
    divisor = 10 ** _DIGIT_CHUNK
    while value >= divisor:
        value, rest = divmod(value, divisor)
        chunks.append(str(rest).zfill(_DIGIT_CHUNK))
    chunks.append(str(value))
    return sign + ''.join(reversed(chunks))


def format_tokens(tokens: Sequence[Token]) -> str:
    return "\n".join(f"{t.kind.name} {t.content!r} [{t.start}, {t.end})" for t in tokens)


def _label(node: Expression) -> str:
    if isinstance(node, NumberLiteral):
        return format_value(node.value)
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, UnaryOp):
        return f"Unary {node.operator.value}"
    if isinstance(node, BinaryOp):
        return f"Binary {node.operator.value}"
    if isinstance(node, Grouping):
        return "Parens"
    if isinstance(node, Conditional):
        return "If"
    raise TypeError(f"cannot print {type(node).__name__}")


def _children(node: Expression) -> List[Expression]:
    if isinstance(node, UnaryOp):
        return [node.operand]
    if isinstance(node, BinaryOp):
        return [node.left, node.right]
    if isinstance(node, Grouping):
        return [node.inner]
    if isinstance(node, Conditional):
        return [node.condition, node.then_branch, node.else_branch]
    return []


def _render(node: Expression, indent: str, last: bool, lines: List[str]) -> None:
    lines.append(indent + ("└── " if last else "├── ") + _label(node))
    indent += "    " if last else "|   "
    children = _children(node)
    for i, child in enumerate(children):
        _render(child, indent, i == len(children) - 1, lines)


def format_tree(root: Expression) -> str:
    """Render an expression tree with box-drawing connectors, one node per line.

    Example for ``1 + 2 * 3``::

        └── Binary +
            ├── 1
            └── Binary *
                ├── 2
                └── 3
    """
    lines: List[str] = []
    _render(root, "", True, lines)
    return "\n".join(lines)

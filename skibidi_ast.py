# -*- coding: utf-8 -*-
"""
AST node definitions for the skibidi language.

One frozen dataclass per node kind. The parser builds the tree bottom-up,
the interpreter only reads it.
"""

from collections import Counter
from dataclasses import dataclass, fields
from typing import Iterator, Optional, Tuple

# operator tags
BINARY_OPERATORS = frozenset({
    '+', '-', '*', '/', '%',
    '<', '>', '<=', '>=', '==', '!=',
    '&&', '||',
})
UNARY_OPERATORS = frozenset({'neg'})


@dataclass(frozen=True)
class Node:
    pass


# ====== expressions ======

@dataclass(frozen=True)
class Number(Node):
    value: int


@dataclass(frozen=True)
class Identifier(Node):
    name: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("identifier name must not be empty")


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str  # raw text, quotes already stripped


@dataclass(frozen=True)
class Assignment(Node):
    target: str
    value: Node

    def __post_init__(self):
        if not self.target:
            raise ValueError("assignment target must not be empty")


@dataclass(frozen=True)
class BinaryOperation(Node):
    op: str
    left: Node
    right: Node


@dataclass(frozen=True)
class UnaryOperation(Node):
    op: str
    operand: Node


# ====== statements ======

@dataclass(frozen=True)
class StatementList(Node):
    statements: Tuple[Node, ...] = ()

    def append(self, statement: Node) -> "StatementList":
        # left-recursive construction: the newest statement goes last
        return StatementList(self.statements + (statement,))

    def __iter__(self):
        return iter(self.statements)

    def __len__(self):
        return len(self.statements)


@dataclass(frozen=True)
class ForStatement(Node):
    init: Node
    condition: Node
    increment: Node
    body: Node


@dataclass(frozen=True)
class IfStatement(Node):
    condition: Node
    then_branch: Node
    else_branch: Optional[Node] = None


@dataclass(frozen=True)
class PrintStatement(Node):
    value: Node


@dataclass(frozen=True)
class ErrorStatement(Node):
    value: Node


@dataclass(frozen=True)
class Case(Node):
    value: Optional[Node]  # None = default
    body: Node

    @property
    def is_default(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class SwitchStatement(Node):
    expression: Node
    cases: Tuple[Case, ...] = ()


@dataclass(frozen=True)
class BreakStatement(Node):
    pass


@dataclass(frozen=True)
class Program(Node):
    name: str
    body: StatementList


EXPRESSION_NODES = (Number, Identifier, StringLiteral, Assignment, BinaryOperation, UnaryOperation)


# -----------------------------
# helpers
# -----------------------------
def declaration(name: str, value: Optional[Node] = None) -> Assignment:
    """`Type name;` is an assignment of 0, `Type name = E` an assignment of E."""
    return Assignment(name, value if value is not None else Number(0))


def children(node: Node) -> Iterator[Node]:
    for f in fields(node):
        val = getattr(node, f.name)
        if isinstance(val, Node):
            yield val
        elif isinstance(val, tuple):
            for item in val:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Depth-first, pre-order."""
    stack = [node]
    while stack:
        cur = stack.pop()
        yield cur
        stack.extend(reversed(list(children(cur))))


def count_nodes(node: Node) -> Counter:
    return Counter(type(n).__name__ for n in walk(node))

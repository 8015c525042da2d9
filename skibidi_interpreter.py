# -*- coding: utf-8 -*-
"""
Tree-walking interpreter for the skibidi AST.

evaluate() reduces an expression node to an int. execute() runs a statement
node and returns a Signal: BREAK travels up the call chain until the nearest
enclosing switch consumes it.
"""

import enum
import logging
import sys
from collections import deque

from skibidi_ast import (
    EXPRESSION_NODES, Assignment, BinaryOperation, BreakStatement, ErrorStatement,
    ForStatement, Identifier, IfStatement, Node, Number, PrintStatement, Program,
    StatementList, StringLiteral, SwitchStatement, UnaryOperation,
)
from skibidi_errors import (
    BreakOutsideSwitchError, DivisionByZeroError, EvaluationError, SymbolTableFullError,
)
from skibidi_symbols import SymbolTable

log = logging.getLogger(__name__)

MAX_RECENT_ERRORS = 20


class Signal(enum.Enum):
    COMPLETED = "completed"
    BREAK = "break"


class SwitchMode(enum.Enum):
    # default fires when reached and stops traversal
    FAITHFUL = "faithful"
    # default runs only when nothing matched, fallthrough applies to it
    CONVENTIONAL = "conventional"


# -----------------------------
# integer arithmetic (C semantics)
# -----------------------------
def _div(a, b):
    if b == 0:
        raise DivisionByZeroError('/')
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _mod(a, b):
    if b == 0:
        raise DivisionByZeroError('%')
    return a - b * _div(a, b)


_BINARY_OPS = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _div,
    '%': _mod,
    '<': lambda a, b: int(a < b),
    '>': lambda a, b: int(a > b),
    '<=': lambda a, b: int(a <= b),
    '>=': lambda a, b: int(a >= b),
    '==': lambda a, b: int(a == b),
    '!=': lambda a, b: int(a != b),
    # both sides are already evaluated, no short-circuit
    '&&': lambda a, b: int(bool(a) and bool(b)),
    '||': lambda a, b: int(bool(a) or bool(b)),
}

_UNARY_OPS = {
    'neg': lambda a: -a,
}


class Interpreter:
    def __init__(self, symbols=None, stdout=None, stderr=None, strict=False,
                 switch_mode=SwitchMode.FAITHFUL):
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.strict = strict
        self.switch_mode = SwitchMode(switch_mode)
        self.error_count = 0  # recoverable errors reported so far
        self.recent_errors = deque(maxlen=MAX_RECENT_ERRORS)

    # ====== entry point ======

    def run(self, root: Node) -> None:
        """Execute a whole program. Fatal errors propagate to the caller."""
        signal = self.execute(root)
        if signal is Signal.BREAK:
            raise BreakOutsideSwitchError()

    # ====== error policy ======

    def _recover(self, err: EvaluationError):
        """Recoverable error: raise in strict mode, otherwise report it and keep going."""
        if self.strict:
            raise err
        self.error_count += 1
        self.recent_errors.append(err)
        self._emit(self.stderr, f"Error: {err.message}")

    def _emit(self, sink, text):
        sink.write(f"{text}\n")

    # ====== expressions ======

    def evaluate(self, node: Node) -> int:
        """
        Reduce an expression to an int.

        Uses an explicit work stack instead of recursion so long operator
        chains (a + b + c + ...) do not hit the interpreter's recursion limit.
        Operands are still evaluated left before right.
        """
        values = []
        todo = [(node, False)]
        while todo:
            cur, ready = todo.pop()

            if isinstance(cur, BinaryOperation):
                if not ready:
                    todo.append((cur, True))
                    todo.append((cur.right, False))
                    todo.append((cur.left, False))
                else:
                    right = values.pop()
                    left = values.pop()
                    values.append(self._binary(cur.op, left, right))

            elif isinstance(cur, (UnaryOperation, Assignment)):
                if not ready:
                    todo.append((cur, True))
                    todo.append((cur.operand if isinstance(cur, UnaryOperation) else cur.value, False))
                elif isinstance(cur, UnaryOperation):
                    values.append(self._unary(cur.op, values.pop()))
                else:
                    self._store(cur.target, values[-1])

            else:
                values.append(self._leaf(cur))

        return values[0]

    def _leaf(self, node):
        if isinstance(node, Number):
            return node.value
        if isinstance(node, Identifier):
            return self.symbols.get(node.name)
        if isinstance(node, StringLiteral):
            self._recover(EvaluationError("Cannot evaluate a string literal as an integer"))
            return 0
        self._recover(EvaluationError(f"Unknown expression type {type(node).__name__}"))
        return 0

    def _store(self, name, value):
        # the assignment still yields its value when the store is dropped
        if not self.symbols.set(name, value):
            log.debug("store of %r dropped", name)
            self._recover(SymbolTableFullError(name, self.symbols.capacity))

    def _binary(self, op, left, right):
        fn = _BINARY_OPS.get(op)
        if fn is None:
            self._recover(EvaluationError(f"Unknown operator {op!r}"))
            return 0
        return fn(left, right)

    def _unary(self, op, operand):
        fn = _UNARY_OPS.get(op)
        if fn is None:
            self._recover(EvaluationError(f"Unknown unary operator {op!r}"))
            return 0
        return fn(operand)

    # ====== statements ======

    def execute(self, node: Node) -> Signal:
        if node is None:
            return Signal.COMPLETED

        if isinstance(node, EXPRESSION_NODES):
            self.evaluate(node)
            return Signal.COMPLETED

        if isinstance(node, StatementList):
            for stmt in node.statements:
                if self.execute(stmt) is Signal.BREAK:
                    return Signal.BREAK
            return Signal.COMPLETED

        if isinstance(node, PrintStatement):
            self._print(self.stdout, node.value)
            return Signal.COMPLETED

        if isinstance(node, ErrorStatement):
            self._print(self.stderr, node.value)
            return Signal.COMPLETED

        if isinstance(node, IfStatement):
            if self.evaluate(node.condition):
                return self.execute(node.then_branch)
            if node.else_branch is not None:
                return self.execute(node.else_branch)
            return Signal.COMPLETED

        if isinstance(node, ForStatement):
            return self._execute_for(node)

        if isinstance(node, SwitchStatement):
            return self._execute_switch(node)

        if isinstance(node, BreakStatement):
            return Signal.BREAK

        if isinstance(node, Program):
            log.debug("running program %s", node.name)
            return self.execute(node.body)

        self._recover(EvaluationError(f"Unknown statement type {type(node).__name__}"))
        return Signal.COMPLETED

    def _print(self, sink, value):
        if isinstance(value, StringLiteral):
            self._emit(sink, value.value)
        else:
            self._emit(sink, str(self.evaluate(value)))

    def _execute_for(self, node: ForStatement) -> Signal:
        self.evaluate(node.init)
        while self.evaluate(node.condition):
            # a loop does not consume break, it hands it to the enclosing switch
            if self.execute(node.body) is Signal.BREAK:
                return Signal.BREAK
            self.evaluate(node.increment)
        return Signal.COMPLETED

    def _execute_switch(self, node: SwitchStatement) -> Signal:
        value = self.evaluate(node.expression)
        if self.switch_mode is SwitchMode.CONVENTIONAL:
            start = self._conventional_start(node, value)
            if start is not None:
                for case in node.cases[start:]:
                    if self.execute(case.body) is Signal.BREAK:
                        break
            return Signal.COMPLETED

        matched = False
        for case in node.cases:
            if case.is_default:
                log.debug("switch: default reached (matched=%s)", matched)
                self.execute(case.body)
                break
            if not matched and self.evaluate(case.value) == value:
                log.debug("switch: matched %d", value)
                matched = True
            if matched and self.execute(case.body) is Signal.BREAK:
                break
        return Signal.COMPLETED

    def _conventional_start(self, node, value):
        default_index = None
        for i, case in enumerate(node.cases):
            if case.is_default:
                if default_index is None:
                    default_index = i
                continue
            if self.evaluate(case.value) == value:
                return i
        return default_index


def run(root: Node, **kwargs) -> Interpreter:
    """Convenience: run `root` with a fresh Interpreter and return it."""
    interp = Interpreter(**kwargs)
    interp.run(root)
    return interp

# -*- coding: utf-8 -*-
"""
Exceptions raised by the skibidi parser and interpreter.

FatalError and its subclasses stop the whole run. EvaluationError is
recoverable: the interpreter reports it and continues with a default value
unless it runs in strict mode.
"""


class SkibidiError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SkibidiSyntaxError(SkibidiError):
    def __init__(self, message: str, line=None, column=None, context: str = ""):
        super().__init__(message)
        self.line = line
        self.column = column
        self.context = context

    def format(self) -> str:
        head = self.message
        if self.line is not None:
            head = f"{head} at line {self.line}, column {self.column}"
        if self.context:
            return head + "\n" + self.context
        return head


# -----------------------------
# fatal
# -----------------------------
class FatalError(SkibidiError):
    pass


class UndefinedVariableError(FatalError):
    def __init__(self, name: str):
        super().__init__(f"Undefined variable '{name}'")
        self.name = name


class DivisionByZeroError(FatalError):
    def __init__(self, op: str):
        what = "Modulo" if op == "%" else "Division"
        super().__init__(f"{what} by zero")
        self.op = op


class BreakOutsideSwitchError(FatalError):
    def __init__(self):
        super().__init__("'break' outside of a switch")


# -----------------------------
# recoverable
# -----------------------------
class EvaluationError(SkibidiError):
    pass


class SymbolTableFullError(EvaluationError):
    def __init__(self, name: str, capacity: int):
        super().__init__(f"Symbol table full ({capacity} variables), cannot store '{name}'")
        self.name = name
        self.capacity = capacity

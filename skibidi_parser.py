# -*- coding: utf-8 -*-
"""
skibidi grammar (lark LALR) + Transformer -> AST
requires: pip install lark
"""

from lark import Lark, Transformer, v_args, Tree
from lark.exceptions import UnexpectedInput, UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from skibidi_ast import (
    Assignment, BinaryOperation, BreakStatement, Case, ErrorStatement, ForStatement,
    Identifier, IfStatement, Number, PrintStatement, Program, StatementList, StringLiteral,
    SwitchStatement, UnaryOperation, declaration,
)
from skibidi_errors import SkibidiSyntaxError

# print-like statements: NAME(expr). Only this name goes to stderr, every other name (yap) prints to stdout.
STDERR_PRINT_NAME = "yell"

# -----------------------------
# Grammar
# -----------------------------
GRAMMAR = r"""
start: "skibidi" NAME "{" statements "}"

statements: statement*

?statement: declaration ";"
          | expression ";"
          | "bussin" expression ";"
          | print_stmt ";"
          | break_stmt ";"
          | for_stmt
          | if_stmt
          | switch_stmt

// ----- statements -----
declaration: NAME NAME ["=" expression]

print_stmt: NAME "(" expression ")"
break_stmt: "break"

for_stmt: "flex" "(" for_init ";" expression ";" expression ")" block
?for_init: declaration
         | expression

if_stmt: "if" "(" expression ")" block ["else" else_branch]
?else_branch: if_stmt
            | block

block: "{" statements "}"

switch_stmt: "switch" "(" expression ")" "{" case_clause* "}"
case_clause: "case" expression ":" statements
           | "default" ":" statements          -> default_clause

// ----- expressions (lowest precedence first) -----
?expression: assignment

?assignment: NAME "=" assignment              -> assign
           | or_expr

?or_expr: or_expr "||" and_expr               -> or_
        | and_expr
?and_expr: and_expr "&&" equality             -> and_
         | equality
?equality: equality "==" relational           -> eq
         | equality "!=" relational           -> ne
         | relational
?relational: relational "<" additive          -> lt
           | relational ">" additive          -> gt
           | relational "<=" additive         -> le
           | relational ">=" additive         -> ge
           | additive
?additive: additive "+" multiplicative        -> add
         | additive "-" multiplicative        -> sub
         | multiplicative
?multiplicative: multiplicative "*" unary     -> mul
               | multiplicative "/" unary     -> div
               | multiplicative "%" unary     -> mod
               | unary

?unary: "-" unary                             -> neg
      | primary

?primary: NUMBER                              -> number
        | NAME                                -> var
        | STRING                              -> string
        | "(" expression ")"

NAME: /[A-Za-z_][A-Za-z0-9_]*/
NUMBER: /\d+/
STRING: ESCAPED_STRING

%import common.ESCAPED_STRING
%import common.CPP_COMMENT
%import common.C_COMMENT
%import common.WS
%ignore WS
%ignore CPP_COMMENT
%ignore C_COMMENT
"""


# ====== expressions: inline ======

@v_args(inline=True)
class ExprMixin(Transformer):
    def number(self, tok):
        return Number(int(tok))

    def string(self, tok):
        # ESCAPED_STRING keeps the surrounding quotes, the inside stays verbatim
        s = str(tok)
        return StringLiteral(s[1:-1])

    def var(self, tok):
        return Identifier(str(tok))

    def assign(self, name, value):
        return Assignment(str(name), value)

    def add(self, a, b): return BinaryOperation('+', a, b)
    def sub(self, a, b): return BinaryOperation('-', a, b)
    def mul(self, a, b): return BinaryOperation('*', a, b)
    def div(self, a, b): return BinaryOperation('/', a, b)
    def mod(self, a, b): return BinaryOperation('%', a, b)

    def lt(self, a, b): return BinaryOperation('<', a, b)
    def gt(self, a, b): return BinaryOperation('>', a, b)
    def le(self, a, b): return BinaryOperation('<=', a, b)
    def ge(self, a, b): return BinaryOperation('>=', a, b)
    def eq(self, a, b): return BinaryOperation('==', a, b)
    def ne(self, a, b): return BinaryOperation('!=', a, b)

    def and_(self, a, b): return BinaryOperation('&&', a, b)
    def or_(self, a, b): return BinaryOperation('||', a, b)

    def neg(self, x): return UnaryOperation('neg', x)


# ====== full Transformer ======

@v_args(inline=True)
class SkibidiTransformer(ExprMixin):
    """Tree -> AST (skibidi_ast nodes)"""

    def start(self, name, body):
        return Program(str(name), body)

    def statements(self, *stmts):
        out = StatementList()
        for st in stmts:
            out = out.append(st)
        return out

    def block(self, stmts):
        return stmts

    # declaration: NAME NAME ["=" expression]
    def declaration(self, _type_tok, name_tok, value=None):
        return declaration(str(name_tok), value)

    # print_stmt: NAME "(" expression ")"
    def print_stmt(self, name_tok, value):
        if str(name_tok) == STDERR_PRINT_NAME:
            return ErrorStatement(value)
        return PrintStatement(value)

    def break_stmt(self):
        return BreakStatement()

    def for_stmt(self, init, cond, incr, body):
        return ForStatement(init, cond, incr, body)

    def if_stmt(self, cond, then_branch, else_branch=None):
        return IfStatement(cond, then_branch, else_branch)

    def switch_stmt(self, expr, *cases):
        return SwitchStatement(expr, tuple(cases))

    def case_clause(self, value, body):
        return Case(value, body)

    def default_clause(self, body):
        return Case(None, body)


# -----------------------------
# parse API
# -----------------------------
_tree_parser = None
_ast_parser = None


def _get_tree_parser():
    global _tree_parser
    if _tree_parser is None:
        _tree_parser = Lark(GRAMMAR, parser="lalr", start="start", lexer="basic")
    return _tree_parser


def _get_ast_parser():
    # nodes are built on each LALR reduction, no recursive walk over the tree afterwards
    global _ast_parser
    if _ast_parser is None:
        _ast_parser = Lark(GRAMMAR, parser="lalr", start="start", lexer="basic",
                           transformer=SkibidiTransformer())
    return _ast_parser


def _lex_window(text, pos, width=80):
    a = max(0, pos-width//2); b = min(len(text), pos+width//2)
    # one line only
    line_start = text.rfind('\n', a, pos) + 1 if pos > 0 else 0
    line_end = text.find('\n', pos)
    if line_end == -1 or line_end > b:
        line_end = b
    a = max(a, line_start)
    caret = ' ' * (pos-a) + '^'
    return text[a:line_end] + "\n" + caret


def _describe(e, text):
    if isinstance(e, UnexpectedEOF):
        return "Unexpected end of input"
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return "Unexpected end of input"
        return f"Unexpected token {str(e.token)!r}"
    if isinstance(e, UnexpectedCharacters):
        return f"Unexpected character {text[e.pos_in_stream]!r}"
    return "Syntax error"


def _run(parser, source):
    try:
        return parser.parse(source)
    except UnexpectedInput as e:
        pos = getattr(e, 'pos_in_stream', None)
        if pos is None or pos < 0:
            pos = len(source)
        line = e.line if getattr(e, 'line', -1) not in (None, -1) else None
        column = e.column if line is not None else None
        raise SkibidiSyntaxError(_describe(e, source), line, column, _lex_window(source, pos)) from None


def parse_tree(source: str) -> Tree:
    """Raw lark parse tree. Raises SkibidiSyntaxError."""
    return _run(_get_tree_parser(), source)


def parse(source: str) -> Program:
    return _run(_get_ast_parser(), source)

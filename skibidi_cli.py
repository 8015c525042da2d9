# -*- coding: utf-8 -*-
"""
skibidi runner: read source -> parse -> run
usage: skibidi program.skb   (or stdin)
"""

import argparse
import logging
import sys

from skibidi_ast import count_nodes
from skibidi_errors import SkibidiError, SkibidiSyntaxError
from skibidi_interpreter import Interpreter, SwitchMode
from skibidi_parser import parse, parse_tree
from skibidi_symbols import MAX_VARS, SymbolTable

log = logging.getLogger("skibidi")

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_SYNTAX = 2


def _capacity(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_arg_parser():
    ap = argparse.ArgumentParser(prog="skibidi", description="Run a skibidi program.")
    ap.add_argument("file", nargs="?", default="-", help="source file (default: stdin)")
    ap.add_argument("--max-vars", type=_capacity, default=MAX_VARS,
                    help=f"symbol table capacity (default: {MAX_VARS})")
    ap.add_argument("--strict", action="store_true",
                    help="treat recoverable evaluation errors as fatal")
    ap.add_argument("--switch-mode", choices=[m.value for m in SwitchMode],
                    default=SwitchMode.FAITHFUL.value,
                    help="switch/default semantics (default: faithful)")
    ap.add_argument("--parse-tree", action="store_true", help="print the lark parse tree and exit")
    ap.add_argument("--summary", action="store_true", help="print AST node counts and exit")
    ap.add_argument("--dump-vars", action="store_true",
                    help="print final variable bindings to stderr after the run")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def _read_source(path):
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def summarize(program):
    cnt = count_nodes(program)
    print("---- AST node counts ----")
    for k, v in cnt.most_common():
        print(f"  {k:16s} {v}")
    print("-------------------------")


def _fail(message, code):
    sys.stdout.flush()
    print(f"Error: {message}", file=sys.stderr)
    return code


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        source = _read_source(args.file)
    except OSError as e:
        return _fail(f"cannot read {args.file}: {e.strerror}", EXIT_SYNTAX)
    except UnicodeDecodeError as e:
        return _fail(f"cannot read {args.file}: not valid UTF-8 ({e.reason} at byte {e.start})", EXIT_SYNTAX)

    try:
        if args.parse_tree:
            print(parse_tree(source).pretty())
            return EXIT_OK
        program = parse(source)
    except SkibidiSyntaxError as e:
        return _fail(e.format(), EXIT_SYNTAX)
    except RecursionError:
        return _fail("program nests too deeply", EXIT_FATAL)

    if args.summary:
        summarize(program)
        return EXIT_OK

    interp = Interpreter(
        symbols=SymbolTable(args.max_vars),
        stdout=sys.stdout,
        stderr=sys.stderr,
        strict=args.strict,
        switch_mode=args.switch_mode,
    )
    try:
        interp.run(program)
    except SkibidiError as e:
        # FatalError, or a recoverable error escalated by --strict
        return _fail(e.message, EXIT_FATAL)
    except RecursionError:
        return _fail("program nests too deeply", EXIT_FATAL)
    finally:
        log.debug("symbols: %r, recoverable errors: %d", interp.symbols, interp.error_count)

    if args.dump_vars:
        for name, value in interp.symbols.snapshot().items():
            print(f"{name} = {value}", file=sys.stderr)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

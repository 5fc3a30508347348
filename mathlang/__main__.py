"""CLI entry point for the mathlang evaluator.

Usage:
    python -m mathlang [-v|-vv] [-d DEFINITION]... [--var NAME=VALUE]... EXPRESSION
    python -m mathlang [-v...] --emit-ast EXPRESSION

Options:
  -v            Increase log verbosity (can be repeated)
  -d, --define  Bind a function definition such as 'f(x) = x * x'
  --var         Bind a variable, e.g. --var x=3 or --var y=-2/3
  --trace       Print every function application as it happens
  --emit-ast    Print the parsed command as JSON instead of evaluating it
  --max-length  Reject input longer than this many characters

An expression prints its value; a comparison prints `true` or `false`.
Errors are printed to stderr with the offending part of the input
underlined, and the exit status is 1.
"""

import argparse
import json
import logging
import sys

from .ast import Expr
from .ast_json import ast_to_obj
from .context import Context
from .errors import MathError, MathlangError, to_math_error
from .evaluator import Evaluator
from .funcdef import parse_func_def
from .parser import parse_command
from .types import parse_value, to_string

DEFAULT_MAX_LENGTH = 1000


def _log_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def _fail(error: MathError, source: str) -> None:
    print(error.render(source), file=sys.stderr)
    sys.exit(1)


def build_context(definitions, variables) -> Context:
    ctx = Context()
    for text in definitions:
        try:
            ctx.define(parse_func_def(text))
        except MathError as e:
            _fail(e, text)
    for assignment in variables:
        name, sep, raw = assignment.partition('=')
        if not sep or not name.strip():
            print(f"Error: expected NAME=VALUE, got {assignment!r}", file=sys.stderr)
            sys.exit(1)
        try:
            ctx.set_variable(name.strip(), parse_value(raw))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    return ctx


def main(argv: list = None) -> None:
    parser = argparse.ArgumentParser(description="Evaluate mathlang formulas")
    parser.add_argument('-v', action='count', default=0, help='increase log verbosity (can be repeated)')
    parser.add_argument('-d', '--define', action='append', default=[], metavar='DEFINITION',
                        help="bind a function definition, e.g. 'f(x) = x * x'")
    parser.add_argument('--var', action='append', default=[], metavar='NAME=VALUE',
                        help='bind a variable to an integer or p/q value')
    parser.add_argument('--trace', action='store_true', help='print every function application')
    parser.add_argument('--emit-ast', action='store_true', help='print the parsed command as JSON')
    parser.add_argument('--max-length', type=int, default=DEFAULT_MAX_LENGTH,
                        help='reject input longer than this many characters')
    parser.add_argument('expression', help='expression or comparison to evaluate')
    args = parser.parse_args(argv)

    logging.basicConfig(level=_log_level(args.v), format='%(levelname)s %(name)s: %(message)s')

    source = args.expression
    if len(source) > args.max_length:
        _fail(MathError(f"Input is longer than {args.max_length} characters"), source)

    try:
        command = parse_command(source)
    except MathlangError as e:
        _fail(to_math_error(e), source)

    if args.emit_ast:
        print(json.dumps(ast_to_obj(command), ensure_ascii=False, indent=2))
        return

    ctx = build_context(args.define, args.var)

    def on_call(name, values):
        if args.trace:
            print(f"{name}({', '.join(to_string(v) for v in values)})")

    evaluator = Evaluator(on_call)
    try:
        if isinstance(command, Expr):
            result = evaluator.evaluate(command, ctx)
        else:
            result = evaluator.test(command, ctx)
    except MathlangError as e:
        _fail(to_math_error(e), source)
    print(to_string(result))


if __name__ == '__main__':
    main()

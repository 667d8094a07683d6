#! /usr/bin/env python3

# --------------------------------------------------------------------
# Requires Python3 >= 3.10

# --------------------------------------------------------------------
import argparse
import os
import sys

from lox             import natives
from lox.interpreter import Interpreter
from lox.parser      import Parser
from lox.printer     import pprint
from lox.program     import run_source
from lox.reporter    import Reporter

EX_DATAERR  = 65
EX_SOFTWARE = 70
EX_IOERR    = 74

# each Lox call costs about five Python frames
RECURSION_LIMIT = 10_000

# ====================================================================
# Parse command line arguments

def parse_args(argv):
    parser = argparse.ArgumentParser(prog = os.path.basename(sys.argv[0]))

    parser.add_argument('script', nargs = '?', help = 'input file (.lox)')
    parser.add_argument('--tokens', action = 'store_true',
                        help = 'print the token stream and stop')
    parser.add_argument('--ast', action = 'store_true',
                        help = 'print the syntax tree and stop')
    parser.add_argument('--recursion-limit', type = int, default = None,
                        help = f'Python recursion limit for deep programs '
                               f'(default: at least {RECURSION_LIMIT})')

    return parser.parse_args(argv)

# ====================================================================
# One unit of source: a whole file, or a line of the prompt

def run(source, args, parser, interpreter, reporter):
    if args.tokens:
        for token in parser.lexer.tokenize(source):
            print(token)
        return

    if args.ast:
        with reporter.checkpoint("parsing") as checkpoint:
            prgm = parser.parse(source)

        # recovered statements leave holes in the tree
        if checkpoint and prgm is not None:
            for stmt in prgm:
                print(pprint(stmt))
        return

    try:
        run_source(source, parser, interpreter, reporter)
    except RecursionError:
        reporter.crash("stack overflow", status = EX_SOFTWARE)

def run_file(path, args, parser, interpreter, reporter):
    try:
        with open(path, 'r') as stream:
            source = stream.read()

    except IOError as e:
        print(f'cannot read input file {path}: {e}', file = sys.stderr)
        return EX_IOERR

    run(source, args, parser, interpreter, reporter)

    if reporter.had_runtime_error:
        return EX_SOFTWARE
    if reporter.had_error:
        return EX_DATAERR
    return 0

def run_prompt(args, parser, interpreter, reporter):
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            return 0

        run(line, args, parser, interpreter, reporter)

        # a mistake does not end the session
        reporter.reset()

# ====================================================================
# Main entry point

def main(argv = None):
    args = parse_args(argv)

    if args.recursion_limit is not None:
        sys.setrecursionlimit(args.recursion_limit)
    else:
        sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    reporter    = Reporter()
    parser      = Parser(reporter)
    interpreter = Interpreter()
    natives.install(interpreter)

    try:
        if args.script is None:
            return run_prompt(args, parser, interpreter, reporter)
        return run_file(args.script, args, parser, interpreter, reporter)
    except SystemExit as e:
        return e.code

# --------------------------------------------------------------------
if __name__ == '__main__':
    sys.exit(main())

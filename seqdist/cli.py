"""Computes the weighted edit distance and an optimal edit script for two strings."""


import argparse
import logging
import sys
from typing import Optional, Sequence

from .core import AlignmentError, align
from .formats import TOKEN_MODES, format_alignment, format_matrix, script_to_string, \
        to_json, tokenize
from .measures import PRESETS, preset


logger = logging.getLogger(__name__)

COST_OPTIONS = ("match", "substitute", "insert", "delete", "transpose")


def build_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(prog="seqdist", description=__doc__)
    arg_parser.add_argument('source', help='source string')
    arg_parser.add_argument('target', help='target string')
    arg_parser.add_argument('-p', '--preset', choices=sorted(PRESETS), default='levenshtein',
            help='operation set (default: %(default)s)')
    for name in COST_OPTIONS:
        arg_parser.add_argument(f'--{name}', type=int, metavar='N',
                help=f'{name} cost (default: the preset\'s)')
    arg_parser.add_argument('-t', '--tokens', choices=TOKEN_MODES, default='chars',
            help='align characters or whitespace-separated words (default: %(default)s)')
    arg_parser.add_argument('-m', '--matrix', action='store_true',
            help='also print the cost matrix')
    arg_parser.add_argument('-j', '--json', action='store_true',
            help='print the result as JSON')
    arg_parser.add_argument('-v', '--verbose', action='count', default=0,
            help='Verbosity. Give once for progress, twice for debugging.')
    return arg_parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose == 1:
        logging.basicConfig(level=logging.INFO)
    elif args.verbose >= 2:
        logging.basicConfig(level=logging.DEBUG)

    costs = {name: getattr(args, name) for name in COST_OPTIONS
             if getattr(args, name) is not None}
    try:
        ops = preset(args.preset, **costs)
        source = tokenize(args.source, args.tokens)
        target = tokenize(args.target, args.tokens)
        logger.info('Aligning %d against %d %s with %s', len(source), len(target),
                    args.tokens, ', '.join(ops.names))
        dm = align(ops, source, target)
        entries = dm.alignment()
    except (ValueError, AlignmentError) as e:
        print(f'seqdist: error: {e}', file=sys.stderr)
        return 2

    if args.json:
        print(to_json(dm))
        return 0

    print(f'distance: {dm.distance()}')
    print(f'script:   {script_to_string(entry.op for entry in entries)}')
    if entries:
        print()
        print(format_alignment(entries))
    if args.matrix:
        print()
        print(format_matrix(dm))
    return 0

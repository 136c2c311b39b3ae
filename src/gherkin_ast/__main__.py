import sys
import argparse
import logging

from typing import List, Optional


def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='gherkin-ast')

    parser.add_argument(
        '--verbose',
        action='store_true',
        required=False,
        default=False,
        help='verbose output',
    )

    parser.add_argument(
        '--no-verbose',
        nargs='+',
        type=str,
        default=None,
        help='name of loggers to disable',
    )

    parser.add_argument(
        '--version',
        action='store_true',
        required=False,
        default=False,
        help='print version and exit',
    )

    subparsers = parser.add_subparsers(dest='command')

    lint_parser = subparsers.add_parser('lint', description='report syntax errors in feature files')
    lint_parser.add_argument(
        'files',
        nargs='+',
        type=str,
        help='feature files, or directories with feature files, to lint. "." for all feature files in the current directory',
    )

    dump_parser = subparsers.add_parser('dump', description='print the parsed feature as json')
    dump_parser.add_argument(
        'file',
        type=str,
        help='feature file to parse',
    )
    dump_parser.add_argument(
        '--indent',
        type=int,
        default=2,
        required=False,
        help='json indentation',
    )

    args = parser.parse_args()

    if args.version:
        from gherkin_ast import __version__

        print(__version__, file=sys.stderr)

        raise SystemExit(0)

    if args.command is None:
        parser.print_help(file=sys.stderr)

        raise SystemExit(2)

    return args


def setup_logging(args: argparse.Namespace) -> None:
    level = logging.INFO if not args.verbose else logging.DEBUG
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    logging.basicConfig(
        level=level,
        format='[%(asctime)s] %(levelname)s: %(message)s',
        handlers=handlers,
    )

    no_verbose: Optional[List[str]] = args.no_verbose

    if no_verbose is None:
        no_verbose = []

    # always supress these loggers
    no_verbose.append('lark')

    for logger_name in no_verbose:
        if logger_name in logging.Logger.manager.loggerDict:
            logger = logging.getLogger(logger_name)
            logger.setLevel(logging.ERROR)
        else:
            print(f'!! logger "{logger_name}" does not exist', file=sys.stderr)


def main() -> int:
    args = parse_arguments()

    setup_logging(args)

    from gherkin_ast.cli import dump, lint

    if args.command == 'lint':
        return lint(args)

    return dump(args)


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())

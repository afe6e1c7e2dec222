import sys
import os
import argparse
from pathlib import Path
import logging

##################################################################################################
# Main
##################################################################################################

def positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def main(argv: list[str] | None = None) -> int:
    if sys.platform.lower() == "win32":
        os.system('color')
        sys.stdout.reconfigure(encoding='utf-8') # type: ignore
        sys.stderr.reconfigure(encoding='utf-8') # type: ignore

    parser = argparse.ArgumentParser(prog='stagestat')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    subparsers = parser.add_subparsers(dest='command')

    cmd = subparsers.add_parser('status', help='List changed paths with staged and unstaged line counts.')
    cmd.add_argument('-C', dest='path', type=str, default='.',
                     help='Run as if started in this directory.')
    cmd.add_argument('--no-refresh', dest='refresh', action='store_false', default=None,
                     help='Do not refresh the index before listing.')
    cmd.add_argument('--batch-size', type=positive_int, default=None,
                     help='Number of paths handed over per diff batch.')
    cmd.add_argument('pathspec', type=str, nargs='*',
                     help='Limit the listing to these paths (relative to the repository root).')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    if args.command is None:
        parser.print_help()
        return 0

    match args.command:
        case 'status':
            from stagestat.tasks.status import status
            ok = status(Path(args.path), args.pathspec, refresh=args.refresh, batch_size=args.batch_size)
            return 0 if ok else 1

        case _:
            raise ValueError(f"Unknown command: {args.command}")


if __name__ == '__main__':
    sys.exit(main())

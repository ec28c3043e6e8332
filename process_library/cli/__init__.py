"""
CLI module for process-library.
"""

import sys
from typing import List, Optional

from .parser import setup_parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = setup_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if hasattr(args, 'func'):
        args.func(args)
    else:
        parser.print_help()
        sys.exit(1)

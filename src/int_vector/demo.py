"""
Demonstration caller for IntVector.

Appends a sequence, runs search_sorted on the still-unsorted data (a
deliberate precondition violation whose result means nothing), sorts,
runs search_unsorted on the sorted data and prints both indices.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from .errors import AllocationFailure
from .vector import IntVector

logger = logging.getLogger(__name__)

DEFAULT_VALUES = [3, 1, 4, 1]
DEFAULT_TARGET = 1


def run_demo(values: Sequence[int], target: int) -> Tuple[int, int]:
    """Run the call sequence and return (search_sorted, search_unsorted) indices"""
    vector = IntVector()
    vector.extend(values)

    index = vector.search_sorted(target)
    vector.sort()
    index2 = vector.search_unsorted(target)
    logger.debug(f"Sorted contents: {vector.to_list()}")

    vector.release()
    vector = IntVector()
    logger.debug(f"Re-constructed after release: {vector!r}")
    return index, index2


def format_result(index: int, index2: int) -> str:
    return f"Index: {index}, Index2: {index2}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="int-vector-demo",
        description="Exercise IntVector append, search and sort",
    )
    parser.add_argument("--values", type=int, nargs="+", default=DEFAULT_VALUES,
                        help="Values to append (default: 3 1 4 1)")
    parser.add_argument("--target", type=int, default=DEFAULT_TARGET,
                        help="Value to search for (default: 1)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log growth, sort and release to stderr")
    return parser


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    stdout = stdout or sys.stdout

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.ERROR, stream=sys.stderr)

    try:
        index, index2 = run_demo(args.values, args.target)
    except AllocationFailure as e:
        sys.stderr.write(f"Allocation failure: {e}\n")
        return 1

    stdout.write(format_result(index, index2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

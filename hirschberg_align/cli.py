#!/usr/bin/env python3
"""
Command-line front ends for hirschberg_align.

  hirschberg   - align two strings (arguments) or line pairs (stdin)
  levenshtein  - Levenshtein distance or similarity of two strings
"""

import argparse
import logging
import sys

from hirschberg_align import CostModel, DEFAULT_COST_MODEL, align, dist, simi

logger = logging.getLogger(__name__)


def _setup_logging(verbose):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # Package loggers follow the flag even when the root logger was configured elsewhere
    logging.getLogger("hirschberg_align").setLevel(level)


# ---------- hirschberg ----------

def parse_hirschberg_args(argv=None):
    """Parse command-line arguments of the hirschberg tool."""
    p = argparse.ArgumentParser(
        prog="hirschberg",
        description="Hirschberg's strings alignment computation. "
                    "If the strings are given as arguments, their alignment is printed. "
                    "Otherwise strings are read from stdin (one per line) and the "
                    "alignment is printed per each 2 lines.",
        epilog="Negative cost means penalisation, match should be positive.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--del", dest="del_cost", type=int, default=DEFAULT_COST_MODEL.deletion,
                   help="Cost of deletion")
    p.add_argument("--ins", dest="ins_cost", type=int, default=DEFAULT_COST_MODEL.insertion,
                   help="Cost of insertion")
    p.add_argument("--sub", dest="sub_cost", type=int, default=DEFAULT_COST_MODEL.mismatch,
                   help="Cost of substitution")
    p.add_argument("--eql", dest="eql_cost", type=int, default=DEFAULT_COST_MODEL.match,
                   help="Cost of character match")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")
    p.add_argument("strings", nargs="*", metavar="string",
                   help="Two strings to align (omit to read line pairs from stdin)")

    args = p.parse_args(argv)
    if len(args.strings) not in (0, 2):
        p.error(f"expected 0 or 2 strings, got {len(args.strings)}")
    return args


def iter_line_pairs(lines):
    """Yield consecutive line pairs; an unpaired last line is dropped."""
    it = iter(lines)
    for first in it:
        second = next(it, None)
        if second is None:
            logger.debug("Ignoring unpaired last line")
            return
        yield first.rstrip("\r\n"), second.rstrip("\r\n")


def hirschberg_main(argv=None):
    """Entry point of the hirschberg tool; returns the exit status."""
    args = parse_hirschberg_args(argv)
    _setup_logging(args.verbose)

    model = CostModel(
        deletion=args.del_cost,
        insertion=args.ins_cost,
        mismatch=args.sub_cost,
        match=args.eql_cost,
    )
    logger.debug("Cost model: %s", model)

    if args.strings:
        pairs = [tuple(args.strings)]
    else:
        pairs = iter_line_pairs(sys.stdin)

    for s1, s2 in pairs:
        r1, r2 = align(s1, s2, model.deletion_cost, model.insertion_cost, model.substitution_cost)
        print(r1)
        print(r2)

    return 0


# ---------- levenshtein ----------

def parse_levenshtein_args(argv=None):
    """Parse command-line arguments of the levenshtein tool."""
    p = argparse.ArgumentParser(
        prog="levenshtein",
        description="Levenshtein distance (dist) or similarity (simi) of two strings.",
    )
    p.add_argument("what", choices=["dist", "simi"], help="Computation to perform")
    p.add_argument("string1")
    p.add_argument("string2")
    return p.parse_args(argv)


def levenshtein_main(argv=None):
    """Entry point of the levenshtein tool; returns the exit status."""
    args = parse_levenshtein_args(argv)

    if args.what == "dist":
        print(dist(args.string1, args.string2))
    else:
        print(f"{simi(args.string1, args.string2):g}")

    return 0


if __name__ == "__main__":
    sys.exit(hirschberg_main())

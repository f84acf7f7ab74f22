"""
Command line interface.

Usage:
    swdiag constant -a read.fasta -b read.fasta -p 25 -d -o profiles/
    swdiag affine -a read.fasta -b read.fasta --gap-open 25 --gap-extend 1 -m > matrix.txt
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from swdiag.core.alphabet import AlphabetError
from swdiag.io import ParserError, SeqFileError, DEFAULT_OUTPUT
from swdiag.pipeline import RunConfig, run

logger = logging.getLogger(__name__)


# Functions ------------------------------------------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swdiag",
        description="Sum local-alignment scores along the diagonals of a Smith-Waterman matrix",
    )
    subparsers = parser.add_subparsers(dest="model", required=True, metavar="{constant,affine}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-a", dest="seq_a", required=True, metavar="FASTA",
        help="FASTA file with the first sequence to align (first record is used)",
    )
    common.add_argument(
        "-b", dest="seq_b", required=True, metavar="FASTA",
        help="FASTA file with the second sequence to align (first record is used)",
    )
    common.add_argument(
        "-d", dest="exclude_diagonal", action="store_true",
        help="Exclude the main diagonal (set it to 0)",
    )
    common.add_argument(
        "-m", dest="print_matrix", action="store_true",
        help="Print the entire score matrix to stdout (stderr when the profile goes to stdout)",
    )
    common.add_argument(
        "-o", "--out", default=DEFAULT_OUTPUT,
        help=f"Output file or directory for the diagonal profile, '-' for stdout (default: {DEFAULT_OUTPUT})",
    )
    common.add_argument(
        "--strict", dest="wildcard", action="store_false",
        help="Only accept A, C, G and T (reject the N wildcard)",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debugging information",
    )

    constant = subparsers.add_parser(
        "constant", parents=[common],
        help="Constant gap penalty",
        description="Fill the score matrix with a flat per-position gap penalty",
    )
    constant.add_argument(
        "-p", "--penalty", type=int, default=25,
        help="Gap open and extend penalty (default: 25)",
    )

    affine = subparsers.add_parser(
        "affine", parents=[common],
        help="Affine gap penalty",
        description="Fill the score matrices with separate gap open and extend penalties",
    )
    affine.add_argument(
        "--gap-open", type=int, default=25,
        help="Gap open penalty (default: 25)",
    )
    affine.add_argument(
        "--gap-extend", type=int, default=1,
        help="Gap extend penalty (default: 1)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    logging.captureWarnings(True)

    try:
        config = RunConfig.from_obj(args)
        run(config)
    except (SeqFileError, ParserError, AlphabetError, ValueError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

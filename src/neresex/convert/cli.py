"""Extract resources from Windows 3.x 16-bit New Executable (NE) files."""
import argparse
import sys
from typing import Optional, Sequence

from ..errors import NEError
from .resources import MAX_PREFIX_LENGTH, resources_arguments
from .utils import configure_logging

BANNER = "neresex: Windows NE (16 bit) resource extractor"


def main(argv: Optional[Sequence[str]] = None) -> None:
    print(f"{BANNER}\n")

    parser = argparse.ArgumentParser(prog="neresex", description=__doc__)
    resources_arguments(parser)
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", dest="verbosity", action="store_const", const="DEBUG"
    )
    verbosity.add_argument(
        "--quiet", dest="verbosity", action="store_const", const="WARNING"
    )
    parser.set_defaults(verbosity="INFO")

    args, unknown = parser.parse_known_args(argv)
    for arg in unknown:
        print(f"warning: Unknown parameter: {arg}")

    if args.input_file is None:
        parser.print_help()
        return

    if args.dump is not None and len(args.dump) > MAX_PREFIX_LENGTH:
        print("error: Output prefix is too long")
        sys.exit(1)

    configure_logging(args.verbosity)

    try:
        args.command(args)
    except NEError as e:
        print(f"error: {e}")
        sys.exit(1)

    print("Done.")

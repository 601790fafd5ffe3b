from argparse import ArgumentParser, ArgumentError, Namespace

from typing import Any, Sequence

from .config import OUT_PATH, RESOURCES_PATH
from .idsoft._common import FIRST_PICTURE_CHUNK
from .types import *

class ArgumentParserHandler:
    def __init__(self : Self):
        self.arg_parser = ArgumentParser(description="Extract assets from Catacomb 3-D data files.")

        self.arg_parser.add_argument(
            "--clean",
            action="store_const",
            const=True,
            dest="clean",
            default=False,
            help="Overwrite files that were already extracted."
        )

        self.arg_parser.add_argument(
            "--raw",
            action="store_const",
            const=True,
            dest="raw",
            default=False,
            help="Write decoded graphics chunks as-is instead of rendering pictures."
        )

        self.arg_parser.add_argument(
            "--resources",
            dest="resources",
            default=RESOURCES_PATH,
            help="Directory holding the game's data files."
        )

        self.arg_parser.add_argument(
            "--out",
            dest="out",
            default=OUT_PATH,
            help="Directory to extract to."
        )

        self.arg_parser.add_argument(
            "--first",
            dest="first",
            type=int,
            default=0,
            help="First chunk or map index to extract."
        )

        self.arg_parser.add_argument(
            "--last",
            dest="last",
            type=int,
            default=None,
            help="Last chunk or map index to extract (inclusive)."
        )

        self.arg_parser.add_argument(
            metavar="DOMAIN",
            dest="domain",
            choices=(*map(str, AssetDomain.__members__.values()),),
            help="Asset family to extract."
        )

    def validate_against_spec(self : Self, spec : dict[str, Any], argv : Sequence[str] | None = None) -> Namespace:
        args = self.arg_parser.parse_args(argv)

        if args.first < 0:
            raise ArgumentError(None, f"First index must not be negative, got { args.first }.")

        if args.last is not None and args.last < args.first:
            raise ArgumentError(None, f"Last index { args.last } comes before first index { args.first }.")

        domain = AssetDomain(args.domain)

        if args.raw and domain != AssetDomain.GRAPHICS:
            raise ArgumentError(None, f"Option '--raw' only applies to '{ AssetDomain.GRAPHICS }'.")

        if not domain.chunked:
            return args

        # the last directory slot is the data size, not a chunk
        entry_count = spec[domain]["entry_count"]
        if args.last is not None and args.last >= entry_count - 1:
            raise ArgumentError(None, f"Domain '{ domain }' has chunks 0..{ entry_count - 2 }, got last index { args.last }.")

        if domain == AssetDomain.GRAPHICS and not args.raw and args.first < FIRST_PICTURE_CHUNK:
            raise ArgumentError(None, f"Pictures start at chunk { FIRST_PICTURE_CHUNK }, use '--raw' for chunk { args.first }.")

        return args

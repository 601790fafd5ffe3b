from schema import Schema, And, Use, Optional, Or # type: ignore

from .idsoft._common import MAP_DELIMITER
from .types import *

_CHUNKED_DOMAIN = {
    # file names inside the resources directory
    "data": And(str, len),
    "header": And(str, len),
    "dictionary": And(str, len),
    # bytes per directory entry, and how many entries the header file holds (size terminator included)
    "entry_width": Or(3, 4), # type: ignore
    "entry_count": And(int, lambda n: n > 1),
    # whether an all-0xFF entry marks an unused slot
    Optional("sparse", default = False): bool,
    Optional("bit_order", default = BitOrder.LSB): Use(BitOrder),
    Optional("output", default = OutputFormat.BIN): Use(OutputFormat),
}

YAML_SCHEMA = Schema(
    {
        "graphics": _CHUNKED_DOMAIN,
        "audio": _CHUNKED_DOMAIN,
        "maps": {
            "data": And(str, len),
            Optional("delimiter", default = MAP_DELIMITER): And(Use(str.encode), len),
            # planes written to .c3dmap files, in order
            Optional("planes", default = [0, 2]): [And(int, lambda n: 0 <= n < 3)],
            Optional("output", default = OutputFormat.C3DMAP): Use(OutputFormat),
        },
    }
)

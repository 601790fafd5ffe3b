"""
`c3dlib.types`, as the name implies, are where the types used across c3dlib are defined.
"""

from __future__ import annotations

from enum import StrEnum, auto
from dataclasses import dataclass
from pathlib import Path

from typing import Self, Any

from argparse import Namespace

class Extension:
    """
    Simple helper class for preprending subclasses of `str` with a dot
    to mimic file extension notation.
    """
    def __str__(self : Self):
        return f".{ super().__str__() }"

class AssetDomain(StrEnum):
    """
    String enum used for distinguishing between the asset families shipped with the game.
    - `GRAPHICS`: `EGAGRAPH`/`EGAHEAD`/`EGADICT`. Huffman compressed chunks behind a directory
    of 3-byte offsets, where an offset of `FF FF FF` marks an unused slot.
    - `AUDIO`: `AUDIO`/`AUDIOHEAD`/`AUDIODICT`. Same compression, 4-byte offsets, no unused slots.
    - `MAPS`: `GAMEMAPS`. Not chunk based at all; records delimited by `!ID!`, each ending in a
    map header that points at Carmack+RLEW compressed planes.
    """
    GRAPHICS = auto()
    AUDIO = auto()
    MAPS = auto()

    @property
    def chunked(self : Self) -> bool:
        return self != AssetDomain.MAPS

class BitOrder(StrEnum):
    """
    String enum used for selecting in which order the bits of a byte are fed to the Huffman tree.
    The dump tools for the shipped files read the least significant bit first; some later revisions
    of the format read the most significant bit first. A given asset file only ever uses one of them.
    """
    LSB = auto()
    MSB = auto()

class OutputFormat(Extension, StrEnum):
    """
    String enum used for naming extracted files.
    - `.bin`: decoded chunk bytes, untouched.
    - `.imf`: decoded audio chunk, which is an IMF/AdLib music or sound stream.
    - `.rgba`: a picture, 4 bytes per pixel, row-major.
    - `.c3dmap`: width byte, height byte, then the condensed bytes of each extracted plane.
    """
    BIN = auto()
    IMF = auto()
    RGBA = auto()
    C3DMAP = auto()

@dataclass(frozen = True, kw_only = True)
class DomainSpec:
    """
    File triplet and directory layout of one chunked domain, as filled from `data/assets.yaml`.
    For more information on each member variable, refer to `c3dlib.schema`.
    """
    domain      : AssetDomain
    data        : str
    header      : str
    dictionary  : str
    entry_width : int
    entry_count : int
    sparse      : bool
    bit_order   : BitOrder
    output      : OutputFormat

    @staticmethod
    def from_validated(domain : AssetDomain, spec : dict[str, Any]) -> DomainSpec:
        return DomainSpec(domain = domain, **spec)

@dataclass(frozen = True, kw_only = True)
class MapsSpec:
    data      : str
    delimiter : bytes
    planes    : list[int]
    output    : OutputFormat

    @staticmethod
    def from_validated(spec : dict[str, Any]) -> MapsSpec:
        return MapsSpec(**spec)

@dataclass(kw_only = True)
class ExtractInfo:
    """
    This dataclass is used to pass around aggregate information about
    the current extraction gathered from both `YAML_SCHEMA` (filled from `data/assets.yaml`),
    as well as the arguments supplied for the program.
    """
    domain    : AssetDomain
    layout    : DomainSpec | MapsSpec
    resources : Path
    out_dir   : Path
    first     : int
    last      : int | None
    clean     : bool
    raw       : bool

    @staticmethod
    def from_validated(spec : dict[str, Any], args : Namespace) -> ExtractInfo:
        domain = AssetDomain(args.domain)

        layout : DomainSpec | MapsSpec
        if domain.chunked:
            layout = DomainSpec.from_validated(domain, spec[domain])
        else:
            layout = MapsSpec.from_validated(spec[domain])

        return ExtractInfo(
            domain = domain,
            layout = layout,
            resources = Path(args.resources),
            out_dir = Path(args.out) / str(domain),
            first = args.first,
            last = args.last,
            clean = args.clean,
            raw = args.raw,
        )

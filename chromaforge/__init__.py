# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
ChromaForge -- swatch exchange palette core.

Decodes and encodes .ase swatch documents, resolves every swatch to the
color it should display (reference colors, ICC-managed CMYK, Lab, RGB,
Gray) and sorts palettes without breaking their groups.

Quick start::

    from chromaforge import decode, encode, ColorEngine, sort_hierarchically

    doc = decode(open("palette.ase", "rb").read())
    engine = ColorEngine()
    engine.resolve_display_color(next(doc.colors()))  # (r, g, b) in [0, 1]
    doc.blocks = sort_hierarchically(doc.blocks, "hue", engine)
    data = encode(doc)
"""

from __future__ import annotations

__version__ = "1.0.0"

from chromaforge.codec import decode, encode, read_document, write_document
from chromaforge.convert.engine import ColorEngine, ContrastRatios
from chromaforge.authority import AuthorityTable, ReferenceEntry
from chromaforge.errors import (
    ChromaForgeError,
    ConversionServiceUnavailable,
    FormatError,
    UnknownBlockType,
    UnsupportedModel,
)
from chromaforge.schema import (
    Block,
    Color,
    ColorModel,
    ColorType,
    Document,
    GroupEnd,
    GroupStart,
    channel_count,
)
from chromaforge.sort import SortCriterion, sort_hierarchically

__all__ = [
    # Codec
    "decode",
    "encode",
    "read_document",
    "write_document",
    # Conversion
    "ColorEngine",
    "ContrastRatios",
    "AuthorityTable",
    "ReferenceEntry",
    # Sorting
    "sort_hierarchically",
    "SortCriterion",
    # Model
    "Document",
    "Block",
    "GroupStart",
    "GroupEnd",
    "Color",
    "ColorModel",
    "ColorType",
    "channel_count",
    # Errors
    "ChromaForgeError",
    "FormatError",
    "UnknownBlockType",
    "UnsupportedModel",
    "ConversionServiceUnavailable",
    # Version
    "__version__",
]

# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Schema definitions for swatch documents.

Blocks are plain mutable records: the editing layer renames swatches and
rewrites their values in place. Enumerations are immutable.
"""

from chromaforge.schema.document import (
    Block,
    Color,
    ColorModel,
    ColorType,
    Document,
    GroupEnd,
    GroupStart,
    block_from_dict,
    channel_count,
    coerce_color_type,
    count_kinds,
)

__all__ = [
    # Enumerations
    "ColorModel",
    "ColorType",
    "channel_count",
    "coerce_color_type",
    # Blocks
    "Block",
    "GroupStart",
    "GroupEnd",
    "Color",
    "block_from_dict",
    # Container
    "Document",
    "count_kinds",
]

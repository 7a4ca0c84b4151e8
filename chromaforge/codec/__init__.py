# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Binary codec for swatch exchange documents.

Decoding is strict about truncation and lenient about content: unknown
blocks and unknown color models are skipped via their declared lengths.
"""

from chromaforge.codec.ase import (
    BLOCK_COLOR,
    BLOCK_GROUP_END,
    BLOCK_GROUP_START,
    SIGNATURE,
    decode,
    encode,
    read_document,
    write_document,
)

__all__ = [
    "decode",
    "encode",
    "read_document",
    "write_document",
    "SIGNATURE",
    "BLOCK_GROUP_START",
    "BLOCK_GROUP_END",
    "BLOCK_COLOR",
]

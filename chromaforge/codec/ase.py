# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Swatch exchange (ASE) binary codec.

Layout (all integers and floats big-endian):

    header:  "ASEF" | major u16 | minor u16 | block_count u32
    block:   type u16 | length u32 | payload[length]

    0xC001 group start:  name_len u16 | name UTF-16BE (name_len units, last is NUL)
    0xC002 group end:    empty payload
    0x0001 color:        name_len u16 | name | model[4] | N x f32 | color_type u16

``name_len`` counts UTF-16 code units including the trailing NUL.

The decoder always jumps to the declared end of each block after reading
its fields, so unknown block types and trailing extensions are skipped
without misaligning the rest of the stream.
"""

from __future__ import annotations

import logging
import struct
import warnings
from pathlib import Path
from typing import Union

from chromaforge.errors import FormatError, UnknownBlockType, UnsupportedModel
from chromaforge.schema import (
    Block,
    Color,
    ColorModel,
    ColorType,
    Document,
    GroupEnd,
    GroupStart,
    channel_count,
    coerce_color_type,
)

logger = logging.getLogger(__name__)


SIGNATURE = b"ASEF"

BLOCK_GROUP_START = 0xC001
BLOCK_GROUP_END = 0xC002
BLOCK_COLOR = 0x0001

# type u16 + length u32
BLOCK_HEADER_SIZE = 6

_HEADER = struct.Struct(">4sHHI")
_BLOCK_HEADER = struct.Struct(">HI")
_U16 = struct.Struct(">H")


# =============================================================================
# Decoding
# =============================================================================


class _Reader:
    """Bounds-checked big-endian cursor over a byte buffer.

    ``end`` limits field reads; the decoder narrows it to the current
    block so a field can never run into the next one.
    """

    __slots__ = ("data", "offset", "end")

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0
        self.end = len(data)

    @property
    def remaining(self) -> int:
        return self.end - self.offset

    def take(self, size: int, what: str) -> bytes:
        end = self.offset + size
        if end > self.end:
            raise FormatError(
                f"Truncated {what}: need {size} bytes at offset {self.offset}, "
                f"{self.remaining} available"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def u16(self, what: str) -> int:
        return _U16.unpack(self.take(2, what))[0]

    def floats(self, count: int, what: str) -> tuple[float, ...]:
        if count == 0:
            return ()
        return struct.unpack(f">{count}f", self.take(4 * count, what))

    def name(self, what: str) -> str:
        """Read a length-prefixed UTF-16BE name, dropping the trailing NUL."""
        units = self.u16(f"{what} name length")
        raw = self.take(units * 2, f"{what} name")
        logical = raw[: max(units - 1, 0) * 2]
        return logical.decode("utf-16-be", errors="surrogatepass")


def decode(buffer: Union[bytes, bytearray, memoryview]) -> Document:
    """
    Decode a swatch exchange buffer into a Document.

    Args:
        buffer: Complete file contents

    Returns:
        Document with blocks in file order

    Raises:
        FormatError: Bad signature, or the buffer ends inside the header
            or inside a declared block.

    Unknown block types are skipped (``UnknownBlockType`` warning). Color
    blocks with an unrecognized model tag decode with ``model=None``, no
    channels and the raw tag kept for re-encoding (``UnsupportedModel``
    warning); their color type is the block's last two bytes. A color
    payload too short for its model yields the channels that fit.
    """
    data = bytes(buffer)
    reader = _Reader(data)

    if data[:4] != SIGNATURE:
        raise FormatError(f"Invalid file signature {data[:4]!r}, expected {SIGNATURE!r}")

    _, major, minor, block_count = _HEADER.unpack(reader.take(_HEADER.size, "header"))
    document = Document(version=(major, minor))

    for index in range(block_count):
        block_start = reader.offset
        block_type, block_length = _BLOCK_HEADER.unpack(
            reader.take(_BLOCK_HEADER.size, f"block {index} header")
        )
        block_end = block_start + BLOCK_HEADER_SIZE + block_length
        if block_end > len(data):
            raise FormatError(
                f"Truncated block {index}: declared end {block_end} "
                f"exceeds buffer length {len(data)}"
            )

        reader.end = block_end
        block = _decode_block(reader, block_type, index)
        if block is not None:
            document.blocks.append(block)

        reader.offset = block_end
        reader.end = len(data)

    logger.debug(
        "[Codec] Decoded %d blocks (version %d.%d, %d bytes)",
        len(document.blocks), major, minor, len(data),
    )
    return document


def _decode_block(reader: _Reader, block_type: int, index: int) -> Block | None:
    """Parse the known fields of one block; None for unknown types."""
    if block_type == BLOCK_GROUP_START:
        return GroupStart(name=reader.name(f"group {index}"))

    if block_type == BLOCK_GROUP_END:
        return GroupEnd()

    if block_type == BLOCK_COLOR:
        what = f"color {index}"
        name = reader.name(what).replace("\0", "")
        tag = reader.take(4, f"{what} model").decode("latin-1")
        model = ColorModel.from_tag(tag)
        if model is None:
            logger.debug("[Codec] Block %d: unsupported model tag %r", index, tag)
            warnings.warn(
                f"Color block {index} ({name!r}) has unsupported model {tag!r}",
                UnsupportedModel,
                stacklevel=3,
            )
            # channel count unknown: the color type is the block trailer
            values: tuple[float, ...] = ()
            reader.offset = max(reader.offset, reader.end - 2)
        else:
            wanted = channel_count(model)
            fit = min(wanted, reader.remaining // 4)
            if fit < wanted:
                logger.debug(
                    "[Codec] Block %d: %d of %d %s channels present",
                    index, fit, wanted, model.label,
                )
            values = reader.floats(fit, f"{what} values")
        if reader.remaining >= 2:
            color_type = coerce_color_type(reader.u16(f"{what} color type"))
        else:
            color_type = ColorType.PROCESS
        return Color(
            name=name,
            model=model,
            values=values,
            color_type=color_type,
            tag=tag if model is None else None,
        )

    logger.debug("[Codec] Block %d: skipping unknown type 0x%04X", index, block_type)
    warnings.warn(
        f"Skipping block {index} with unknown type 0x{block_type:04X}",
        UnknownBlockType,
        stacklevel=3,
    )
    return None


# =============================================================================
# Encoding
# =============================================================================


def _encode_name(name: str) -> bytes:
    """Length prefix plus UTF-16BE name with a synthetic NUL terminator."""
    encoded = (name + "\0").encode("utf-16-be", errors="surrogatepass")
    units = len(encoded) // 2
    if units > 0xFFFF:
        raise ValueError(f"Name too long for a swatch block ({units - 1} code units)")
    return _U16.pack(units) + encoded


def _encode_tag(color: Color) -> bytes:
    """Wire tag: the model's, else the raw tag read from the file, else "RGB "."""
    if color.model is not None:
        return color.model.value.encode("ascii")
    if color.tag is None:
        return ColorModel.RGB.value.encode("ascii")
    raw = color.tag.encode("latin-1")
    if len(raw) != 4:
        raise ValueError(f"Model tag must be 4 bytes, got {color.tag!r}")
    return raw


def _encode_block(block: Block) -> bytes:
    if isinstance(block, GroupStart):
        block_type = BLOCK_GROUP_START
        payload = _encode_name(block.name)
    elif isinstance(block, GroupEnd):
        block_type = BLOCK_GROUP_END
        payload = b""
    elif isinstance(block, Color):
        block_type = BLOCK_COLOR
        values = block.values
        payload = b"".join((
            _encode_name(block.name),
            _encode_tag(block),
            struct.pack(f">{len(values)}f", *values),
            _U16.pack(int(block.color_type)),
        ))
    else:
        raise TypeError(f"Cannot encode block of type {type(block).__name__}")

    return _BLOCK_HEADER.pack(block_type, len(payload)) + payload


def encode(document: Document) -> bytes:
    """
    Encode a Document into swatch exchange bytes.

    Every block is written; lengths are recomputed from the payloads.
    A color with an unsupported model is written back with its raw tag
    (``"RGB "`` if it has none) and its values as they are.
    """
    major, minor = document.version
    parts = [_HEADER.pack(SIGNATURE, major, minor, len(document.blocks))]
    parts.extend(_encode_block(block) for block in document.blocks)
    data = b"".join(parts)
    logger.debug("[Codec] Encoded %d blocks (%d bytes)", len(document.blocks), len(data))
    return data


# =============================================================================
# Files
# =============================================================================


def read_document(path: Union[str, Path]) -> Document:
    """Read and decode a swatch file."""
    path = Path(path)
    logger.debug("[Codec] Reading %s", path)
    return decode(path.read_bytes())


def write_document(document: Document, path: Union[str, Path]) -> Path:
    """Encode ``document`` and write it to ``path``. Returns the path."""
    path = Path(path)
    path.write_bytes(encode(document))
    logger.debug("[Codec] Wrote %s", path)
    return path

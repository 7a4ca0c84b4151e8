# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Swatch document model.

A Document is an ordered sequence of blocks. Group nesting is implicit:
a GroupStart opens a group, the next unmatched GroupEnd closes it. The
sequence is kept exactly as read, balanced or not.

Color models:
- RGB:  3 channels, each 0-1
- CMYK: 4 channels, each 0-1
- Lab:  3 channels, L in 0-100 (some writers store 0-1), a/b roughly -128..127
- Gray: 1 channel, 0-1
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, Optional, Sequence, Union


# =============================================================================
# Enumerations
# =============================================================================


class ColorModel(Enum):
    """
    Color space of a swatch. Values are the exact 4-byte wire tags.
    """
    RGB = "RGB "
    CMYK = "CMYK"
    LAB = "LAB "
    GRAY = "Gray"

    @property
    def channels(self) -> int:
        """Number of float channels stored for this model."""
        return channel_count(self)

    @property
    def label(self) -> str:
        """Tag without padding, e.g. ``"RGB"``."""
        return self.value.strip()

    @classmethod
    def from_tag(cls, tag: str) -> Optional[ColorModel]:
        """
        Parse a wire tag or model name.

        Matching ignores case and surrounding spaces, so ``"Lab "``,
        ``"lab"`` and ``"LAB "`` all map to LAB. Returns None for anything
        unrecognized.
        """
        return _TAG_LOOKUP.get(tag.strip().upper())


_CHANNELS = {
    ColorModel.RGB: 3,
    ColorModel.CMYK: 4,
    ColorModel.LAB: 3,
    ColorModel.GRAY: 1,
}

_TAG_LOOKUP = {m.value.strip().upper(): m for m in ColorModel}


def channel_count(model: Optional[ColorModel]) -> int:
    """Channels carried by ``model``; 0 for an unsupported (None) model."""
    if model is None:
        return 0
    return _CHANNELS[model]


class ColorType(IntEnum):
    """Swatch usage type as stored in the color block trailer."""
    GLOBAL = 0
    SPOT = 1
    PROCESS = 2

    @property
    def is_global(self) -> bool:
        """Spot colors are global for selection purposes."""
        return self in (ColorType.GLOBAL, ColorType.SPOT)


def coerce_color_type(value: int) -> Union[ColorType, int]:
    """
    Map a raw integer onto ColorType.

    Values outside the enum are returned unchanged so they survive a
    decode/encode round trip.
    """
    try:
        return ColorType(value)
    except ValueError:
        return int(value)


# =============================================================================
# Blocks
# =============================================================================


@dataclass(slots=True)
class GroupStart:
    """Opens a named group."""
    name: str = ""

    kind = "groupStart"

    def to_dict(self) -> dict:
        return {"type": self.kind, "name": self.name}


@dataclass(slots=True)
class GroupEnd:
    """Closes the innermost open group."""

    kind = "groupEnd"

    def to_dict(self) -> dict:
        return {"type": self.kind}


@dataclass(slots=True)
class Color:
    """
    A single swatch.

    Attributes:
        name: Display name (may be empty)
        model: Color model, or None when the file used an unknown tag
        values: Native channel values, see module docstring for ranges
        color_type: GLOBAL, SPOT or PROCESS (unknown raw values kept as int)
        tag: Raw 4-byte wire tag when ``model`` is None, written back on encode
    """
    name: str
    model: Optional[ColorModel] = ColorModel.RGB
    values: tuple[float, ...] = ()
    color_type: Union[ColorType, int] = ColorType.PROCESS
    tag: Optional[str] = None

    kind = "color"

    def __post_init__(self) -> None:
        self.values = tuple(float(v) for v in self.values)
        if not isinstance(self.color_type, ColorType):
            self.color_type = coerce_color_type(self.color_type)

    def channel(self, index: int) -> float:
        """Channel value, or 0.0 when the channel is missing."""
        if index < len(self.values):
            return self.values[index]
        return 0.0

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "name": self.name,
            "model": self.model.value if self.model is not None else self.tag,
            "values": list(self.values),
            "color_type": int(self.color_type),
        }


Block = Union[GroupStart, GroupEnd, Color]


def block_from_dict(data: dict) -> Block:
    """Deserialize one block produced by ``to_dict``."""
    kind = data.get("type")
    if kind == GroupStart.kind:
        return GroupStart(name=data.get("name", ""))
    if kind == GroupEnd.kind:
        return GroupEnd()
    if kind == Color.kind:
        tag = data.get("model")
        model = ColorModel.from_tag(tag) if tag is not None else None
        return Color(
            name=data.get("name", ""),
            model=model,
            values=data.get("values", ()),
            color_type=data.get("color_type", ColorType.PROCESS),
            tag=tag if model is None else None,
        )
    raise ValueError(f"Unknown block type: {kind!r}")


# =============================================================================
# Document
# =============================================================================


@dataclass(slots=True)
class Document:
    """
    A palette: format version plus the ordered block sequence.

    Block order carries palette order and group nesting and is preserved
    through every round trip.
    """
    version: tuple[int, int] = (1, 0)
    blocks: list[Block] = field(default_factory=list)

    def __post_init__(self) -> None:
        major, minor = self.version
        for part in (major, minor):
            if not 0 <= part <= 0xFFFF:
                raise ValueError(f"Version components must be 0-65535, got {self.version}")
        self.version = (int(major), int(minor))
        self.blocks = list(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def colors(self) -> Iterator[Color]:
        """Iterate over color blocks in document order."""
        for block in self.blocks:
            if isinstance(block, Color):
                yield block

    def groups(self) -> Iterator[GroupStart]:
        """Iterate over group-start blocks in document order."""
        for block in self.blocks:
            if isinstance(block, GroupStart):
                yield block

    def to_dict(self) -> dict:
        """Serialize to a JSON-ready dictionary."""
        return {
            "version": list(self.version),
            "blocks": [b.to_dict() for b in self.blocks],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Document:
        """Deserialize from dictionary."""
        version = data.get("version", (1, 0))
        return cls(
            version=(int(version[0]), int(version[1])),
            blocks=[block_from_dict(b) for b in data.get("blocks", [])],
        )

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> Document:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(text))


def count_kinds(blocks: Sequence[Block]) -> dict[str, int]:
    """Count blocks per kind: ``{"groupStart": n, "groupEnd": n, "color": n}``."""
    counts = {GroupStart.kind: 0, GroupEnd.kind: 0, Color.kind: 0}
    for block in blocks:
        counts[block.kind] += 1
    return counts

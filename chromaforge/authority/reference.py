# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Reference color table.

Maps canonical swatch names (for example published ink books) to their
authoritative definitions. The table is loaded once and never mutated;
it is passed into the color engine explicitly.

A swatch is authoritative when its name matches an entry and its stored
values still agree with the entry in the swatch's own model:
- RGB:  every channel within tolerance of R/G/B / 255
- CMYK: every channel within tolerance of C/M/Y/K / 100
- Lab, Gray: a name match is enough

Entries that carry only a hex (manual overrides for inks whose published
numbers are known to be wrong) have nothing to compare against, so a name
match is authoritative for them in every model. An entry with numbers for
some models never matches an RGB or CMYK swatch it has no numbers for.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Union

import numpy as np

from chromaforge.convert.colorspace import hex_to_srgb
from chromaforge.errors import ReferenceDataError
from chromaforge.schema import Color, ColorModel

logger = logging.getLogger(__name__)


# Per normalized channel
DEFAULT_TOLERANCE = 0.01


def normalize_name(name: str) -> str:
    """Lookup key: trimmed and case-folded."""
    return name.strip().casefold()


@dataclass(frozen=True, slots=True)
class ReferenceEntry:
    """
    A canonical color definition.

    Attributes:
        name: Canonical name as published
        hex: Authoritative display color, "#RRGGBB"
        rgb: Optional RGB numbers, 0-255
        cmyk: Optional CMYK numbers, 0-100
        lab: Optional Lab numbers (L 0-100)
    """
    name: str
    hex: str
    rgb: Optional[tuple[float, float, float]] = None
    cmyk: Optional[tuple[float, float, float, float]] = None
    lab: Optional[tuple[float, float, float]] = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ReferenceDataError("Reference entry name must not be empty")
        try:
            hex_to_srgb(self.hex)
        except ValueError as e:
            raise ReferenceDataError(f"{self.name!r}: {e}") from None

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    @property
    def is_override(self) -> bool:
        """True for a hex-only entry (no model numbers at all)."""
        return self.rgb is None and self.cmyk is None and self.lab is None

    @property
    def srgb(self) -> tuple[float, float, float]:
        """Canonical display color in [0, 1]."""
        r, g, b = hex_to_srgb(self.hex)
        return float(r), float(g), float(b)

    def normalized_values(self, model: ColorModel) -> Optional[tuple[float, ...]]:
        """
        Canonical values on the swatch scale (0-1) for ``model``.

        Returns None when the entry has no numbers for that model.
        """
        if model is ColorModel.RGB and self.rgb is not None:
            return tuple(v / 255.0 for v in self.rgb)
        if model is ColorModel.CMYK and self.cmyk is not None:
            return tuple(v / 100.0 for v in self.cmyk)
        return None

    def to_dict(self) -> dict:
        d: dict = {"name": self.name, "hex": self.hex}
        if self.rgb is not None:
            d.update(zip("RGB", self.rgb))
        if self.cmyk is not None:
            d.update(zip("CMYK", self.cmyk))
        if self.lab is not None:
            d.update(zip(("L", "a", "b"), self.lab))
        return d

    @classmethod
    def from_dict(cls, data: Mapping) -> ReferenceEntry:
        """
        Build from a record such as
        ``{"name": "...", "hex": "#FF3333", "R": "255", "C": 0, ...}``.

        Numeric fields may be strings. A model group is kept only when
        all of its fields are present.
        """
        name = data.get("name")
        hex_value = data.get("hex", data.get("Hex"))
        if not isinstance(name, str):
            raise ReferenceDataError(f"Reference entry without a name: {dict(data)!r}")
        if not isinstance(hex_value, str):
            raise ReferenceDataError(f"{name!r}: missing hex")
        return cls(
            name=name,
            hex=hex_value,
            rgb=_numbers(data, ("R", "G", "B"), name),
            cmyk=_numbers(data, ("C", "M", "Y", "K"), name),
            lab=_numbers(data, ("L", "a", "b"), name),
        )


def _numbers(data: Mapping, keys: tuple[str, ...], name: str) -> Optional[tuple]:
    if not all(k in data and data[k] not in (None, "") for k in keys):
        return None
    try:
        return tuple(float(data[k]) for k in keys)
    except (TypeError, ValueError):
        raise ReferenceDataError(f"{name!r}: non-numeric value in {'/'.join(keys)}") from None


class AuthorityTable:
    """
    Immutable, name-keyed collection of ReferenceEntry.

    Lookups are exact on the normalized name; there is no fuzzy matching.
    Safe to share between threads once constructed.
    """

    def __init__(
        self,
        entries: Iterable[ReferenceEntry] = (),
        *,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        table: dict[str, ReferenceEntry] = {}
        for entry in entries:
            table[entry.key] = entry
        self._entries = MappingProxyType(table)
        self.tolerance = tolerance

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ReferenceEntry]:
        return iter(self._entries.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._entries

    def lookup(self, name: str) -> Optional[ReferenceEntry]:
        """Entry for ``name`` after trim + case-fold, or None."""
        return self._entries.get(normalize_name(name))

    def matches(self, entry: Color, reference: ReferenceEntry) -> bool:
        """True if ``entry``'s stored values agree with ``reference``."""
        if entry.model is None:
            return False
        if entry.model in (ColorModel.LAB, ColorModel.GRAY):
            return True

        if reference.is_override:
            return True
        canonical = reference.normalized_values(entry.model)
        if canonical is None:
            return False

        stored = np.array([entry.channel(i) for i in range(len(canonical))])
        return bool(np.all(np.abs(stored - np.array(canonical)) < self.tolerance))

    def is_authoritative(self, entry: Color) -> bool:
        """
        True if the swatch should render with its reference color.

        An unnamed swatch is never authoritative.
        """
        reference = self.resolve(entry)
        return reference is not None

    def resolve(self, entry: Color) -> Optional[ReferenceEntry]:
        """The reference that overrides ``entry``, if any."""
        if not entry.name or not entry.name.strip():
            return None
        reference = self.lookup(entry.name)
        if reference is None or not self.matches(entry, reference):
            return None
        return reference

    @classmethod
    def empty(cls) -> AuthorityTable:
        return cls(())

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping],
        *,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> AuthorityTable:
        return cls((ReferenceEntry.from_dict(r) for r in records), tolerance=tolerance)

    @classmethod
    def from_json(
        cls,
        path: Union[str, Path],
        *,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> AuthorityTable:
        """
        Load a table from a JSON file.

        The file holds either a list of records or ``{"entries": [...]}``.

        Raises:
            ReferenceDataError: Malformed file or record
            OSError: File cannot be read
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ReferenceDataError(f"{path}: invalid JSON ({e})") from e

        if isinstance(data, dict):
            data = data.get("entries")
        if not isinstance(data, list):
            raise ReferenceDataError(f"{path}: expected a list of reference entries")

        table = cls.from_records(data, tolerance=tolerance)
        logger.info("[Authority] Loaded %d reference entries from %s", len(table), path)
        return table

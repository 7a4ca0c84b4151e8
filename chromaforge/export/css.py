# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
CSS custom property exporter.

Writes one ``--name: #RRGGBB;`` declaration per named swatch, using the
engine's display color (so verified reference colors and ICC-converted
CMYK are what end up in the stylesheet).
"""

from __future__ import annotations

import re
from typing import Optional

from chromaforge.convert.engine import ColorEngine
from chromaforge.schema import Document

_SLUG_RE = re.compile(r"[^a-z0-9-]")


def css_variable_name(name: str) -> str:
    """Swatch name → CSS identifier: trimmed, lowercased, other chars as '-'."""
    return _SLUG_RE.sub("-", name.strip().lower())


def to_css_variables(
    document: Document,
    engine: Optional[ColorEngine] = None,
    *,
    selector: str = ":root",
) -> str:
    """Serialize every named swatch as a CSS custom property.

    Args:
        document: Source document.
        engine: Engine used to resolve display colors.
        selector: Rule selector wrapping the declarations.

    Returns:
        CSS rule text.

    Example::

        :root {
          --chromaforge-red: #FF3333;
          --ink-blue: #1E3A8A;
        }
    """
    if engine is None:
        engine = ColorEngine()

    lines = [f"{selector} {{"]
    for color in document.colors():
        if not color.name:
            continue
        lines.append(f"  --{css_variable_name(color.name)}: {engine.to_hex(color)};")
    lines.append("}")
    return "\n".join(lines)

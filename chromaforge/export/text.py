# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Human-readable exports: channel read-outs and document summaries.
"""

from __future__ import annotations

import json
from typing import Optional

from chromaforge.convert.colorspace import normalize_lab_lightness
from chromaforge.convert.engine import ColorEngine
from chromaforge.schema import Color, ColorModel, ColorType, Document, count_kinds


def channel_text(color: Color) -> str:
    """
    Native values on the scales editors show them.

    - RGB:  ``R:255 G:51 B:51`` (0-255)
    - CMYK: ``C:0 M:80 Y:80 K:0`` (percent)
    - Lab:  ``L:50 A:20 B:-30``
    - Gray: ``K:50%``

    Empty string for an unsupported model.
    """
    v = color.channel
    model = color.model
    if model is ColorModel.RGB:
        return f"R:{round(v(0) * 255)} G:{round(v(1) * 255)} B:{round(v(2) * 255)}"
    if model is ColorModel.CMYK:
        return (
            f"C:{round(v(0) * 100)} M:{round(v(1) * 100)} "
            f"Y:{round(v(2) * 100)} K:{round(v(3) * 100)}"
        )
    if model is ColorModel.LAB:
        L = normalize_lab_lightness(v(0))
        return f"L:{L:.0f} A:{v(1):.0f} B:{v(2):.0f}"
    if model is ColorModel.GRAY:
        return f"K:{round(v(0) * 100)}%"
    return ""


def _type_label(color: Color) -> str:
    if isinstance(color.color_type, ColorType):
        return color.color_type.name.lower()
    return str(int(color.color_type))


def to_json(document: Document, pretty: bool = False) -> str:
    """Serialize the document model as JSON, compact unless ``pretty``."""
    if pretty:
        return document.to_json(indent=2)
    return json.dumps(document.to_dict(), separators=(",", ":"))


def summarize(document: Document, engine: Optional[ColorEngine] = None) -> dict:
    """
    Structured overview of a document.

    Returns:
        Dictionary with version, block counts and one record per swatch
        (name, model, channel text, display hex, verified flag).
    """
    if engine is None:
        engine = ColorEngine()

    counts = count_kinds(document.blocks)
    return {
        "version": f"{document.version[0]}.{document.version[1]}",
        "blocks": len(document.blocks),
        "groups": counts["groupStart"],
        "colors": counts["color"],
        "swatches": [
            {
                "name": c.name,
                "model": c.model.label if c.model is not None else None,
                "values": channel_text(c),
                "hex": engine.to_hex(c),
                "type": _type_label(c),
                "verified": engine.is_authoritative(c),
            }
            for c in document.colors()
        ],
    }


def to_summary_text(document: Document, engine: Optional[ColorEngine] = None) -> str:
    """Plain-text rendering of ``summarize``."""
    info = summarize(document, engine)
    lines = [
        f"Version {info['version']}: {info['blocks']} blocks, "
        f"{info['groups']} groups, {info['colors']} colors",
    ]
    for s in info["swatches"]:
        mark = " *" if s["verified"] else ""
        lines.append(f"  {s['hex']}  {s['model'] or '?':<4}  {s['values']:<24} {s['name']}{mark}")
    return "\n".join(lines)

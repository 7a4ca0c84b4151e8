# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Whole-document editing operations.

Each operation mutates eligible color blocks in place and reports how
many it changed. Groups are never touched.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from chromaforge.authority import normalize_name
from chromaforge.convert.colorspace import lab_to_srgb, srgb_to_cmyk, srgb_to_lab
from chromaforge.convert.engine import ColorEngine
from chromaforge.schema import (
    Block,
    Color,
    ColorModel,
    ColorType,
    Document,
    GroupStart,
    channel_count,
)

logger = logging.getLogger(__name__)


class BatchAction(Enum):
    """Batch transcoding and flag operations."""
    RGB_TO_LAB = "rgb-lab"
    LAB_TO_RGB = "lab-rgb"
    RGB_TO_LAB_TO_CMYK = "rgb-lab-cmyk"
    CMYK_TO_LAB = "cmyk-lab"
    LAB_TO_CMYK = "lab-cmyk"
    CMYK_TO_LAB_TO_RGB = "cmyk-lab-rgb"
    PROCESS_TO_SPOT = "process-spot"
    SET_GLOBAL = "set-global"
    UNSET_GLOBAL = "unset-global"


def _floats(values) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


def _has_three(color: Color, model: ColorModel) -> bool:
    return color.model is model and len(color.values) == 3


def _rgb_to_lab(color: Color, engine: ColorEngine) -> bool:
    if not _has_three(color, ColorModel.RGB):
        return False
    color.values = _floats(srgb_to_lab(color.values))
    color.model = ColorModel.LAB
    return True


def _lab_to_rgb(color: Color, engine: ColorEngine) -> bool:
    if not _has_three(color, ColorModel.LAB):
        return False
    color.values = _floats(lab_to_srgb(color.values))
    color.model = ColorModel.RGB
    return True


def _rgb_to_lab_to_cmyk(color: Color, engine: ColorEngine) -> bool:
    if not _has_three(color, ColorModel.RGB):
        return False
    rgb = lab_to_srgb(srgb_to_lab(color.values))
    color.values = _floats(srgb_to_cmyk(rgb))
    color.model = ColorModel.CMYK
    return True


def _cmyk_to_lab(color: Color, engine: ColorEngine) -> bool:
    if color.model is not ColorModel.CMYK:
        return False
    rgb = engine.resolve_display_color(color)
    color.values = _floats(srgb_to_lab(rgb))
    color.model = ColorModel.LAB
    return True


def _lab_to_cmyk(color: Color, engine: ColorEngine) -> bool:
    if not _has_three(color, ColorModel.LAB):
        return False
    color.values = _floats(srgb_to_cmyk(lab_to_srgb(color.values)))
    color.model = ColorModel.CMYK
    return True


def _cmyk_to_lab_to_rgb(color: Color, engine: ColorEngine) -> bool:
    if color.model is not ColorModel.CMYK:
        return False
    rgb = engine.resolve_display_color(color)
    color.values = _floats(lab_to_srgb(srgb_to_lab(rgb)))
    color.model = ColorModel.RGB
    return True


def _process_to_spot(color: Color, engine: ColorEngine) -> bool:
    if color.color_type == ColorType.SPOT:
        return False
    color.color_type = ColorType.SPOT
    return True


def _set_global(color: Color, engine: ColorEngine) -> bool:
    # Spot is left alone: it is already global
    if color.color_type != ColorType.PROCESS:
        return False
    color.color_type = ColorType.GLOBAL
    return True


def _unset_global(color: Color, engine: ColorEngine) -> bool:
    if color.color_type not in (ColorType.GLOBAL, ColorType.SPOT):
        return False
    color.color_type = ColorType.PROCESS
    return True


_ACTIONS: dict[BatchAction, Callable[[Color, ColorEngine], bool]] = {
    BatchAction.RGB_TO_LAB: _rgb_to_lab,
    BatchAction.LAB_TO_RGB: _lab_to_rgb,
    BatchAction.RGB_TO_LAB_TO_CMYK: _rgb_to_lab_to_cmyk,
    BatchAction.CMYK_TO_LAB: _cmyk_to_lab,
    BatchAction.LAB_TO_CMYK: _lab_to_cmyk,
    BatchAction.CMYK_TO_LAB_TO_RGB: _cmyk_to_lab_to_rgb,
    BatchAction.PROCESS_TO_SPOT: _process_to_spot,
    BatchAction.SET_GLOBAL: _set_global,
    BatchAction.UNSET_GLOBAL: _unset_global,
}


def apply_batch_action(
    document: Document,
    action: Union[BatchAction, str],
    engine: Optional[ColorEngine] = None,
) -> int:
    """
    Apply ``action`` to every eligible swatch of ``document``.

    Args:
        document: Document to modify in place
        action: BatchAction or its value, e.g. ``"rgb-lab"``
        engine: Used where the source is read as a display color (the
            CMYK actions, which go through the ICC transform)

    Returns:
        Number of swatches modified

    Raises:
        ValueError: Unknown action string
    """
    action = BatchAction(action)
    if engine is None:
        engine = ColorEngine()

    apply = _ACTIONS[action]
    count = sum(1 for color in document.colors() if apply(color, engine))
    logger.debug("[Ops] %s modified %d swatches", action.value, count)
    return count


# =============================================================================
# Single-block edits
# =============================================================================


def set_color_values(color: Color, values: Sequence[float], model: Optional[ColorModel] = None) -> Color:
    """
    Replace a swatch's values (and optionally its model) in place.

    Raises:
        ValueError: ``values`` does not match the model's channel count
    """
    target = model if model is not None else color.model
    if target is None:
        raise ValueError(f"Swatch {color.name!r} has no color model")
    expected = channel_count(target)
    if len(values) != expected:
        raise ValueError(
            f"{target.label} takes {expected} values, got {len(values)}"
        )
    color.model = target
    color.values = _floats(values)
    return color


def rename_block(block: Block, name: str) -> Block:
    """
    Rename a swatch or group in place.

    Raises:
        TypeError: ``block`` is a GroupEnd (it has no name)
        ValueError: The name does not fit a 16-bit length prefix
    """
    if not isinstance(block, (Color, GroupStart)):
        raise TypeError(f"{type(block).__name__} has no name")
    if len(name.encode("utf-16-be", errors="surrogatepass")) // 2 >= 0xFFFF:
        raise ValueError("Name too long")
    block.name = name
    return block


# =============================================================================
# Merge
# =============================================================================


def merge_documents(target: Document, source: Document) -> int:
    """
    Append swatches from ``source`` whose names ``target`` lacks.

    Names compare trimmed and case-folded. Groups in ``source`` are not
    carried over and duplicates within ``source`` are added once.
    Unnamed swatches are skipped.

    Returns:
        Number of swatches appended
    """
    existing = {normalize_name(c.name) for c in target.colors()}
    added = 0
    for color in source.colors():
        if not color.name:
            continue
        key = normalize_name(color.name)
        if key in existing:
            continue
        target.blocks.append(replace(color))
        existing.add(key)
        added += 1

    logger.debug("[Ops] Merged %d unique swatches", added)
    return added

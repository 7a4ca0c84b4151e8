# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Editing operations on documents.

These are what the editor's batch menu, swatch inspector and merge
command do to the model, without any UI.
"""

from chromaforge.ops.batch import (
    BatchAction,
    apply_batch_action,
    merge_documents,
    rename_block,
    set_color_values,
)

__all__ = [
    "BatchAction",
    "apply_batch_action",
    "merge_documents",
    "set_color_values",
    "rename_block",
]

# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""Group-preserving palette sort."""

from chromaforge.sort.hierarchy import (
    SortCriterion,
    TreeNode,
    build_tree,
    collation_key,
    flatten,
    sort_hierarchically,
    sort_tree,
)

__all__ = [
    "sort_hierarchically",
    "SortCriterion",
    "TreeNode",
    "build_tree",
    "sort_tree",
    "flatten",
    "collation_key",
]

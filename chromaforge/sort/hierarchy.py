# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Group-preserving palette sort.

The flat block sequence is read into a tree (a GroupStart opens a node,
the matching GroupEnd closes it), every node's children are sorted, and
the tree is written back depth-first. Only sibling order changes: each
swatch stays inside the group it started in.

Sibling order:
- groups before everything else, groups by name
- other entries by the chosen criterion

An orphan GroupEnd (nothing open to close) stays a leaf where it was
found and sorts like an unnamed swatch with no values (black).
"""

from __future__ import annotations

import locale
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from chromaforge.convert.engine import ColorEngine
from chromaforge.schema import Block, Color, GroupEnd, GroupStart


class SortCriterion(Enum):
    """How swatches are ordered within a group."""
    NAME = "name"            # ascending, locale-aware
    HUE = "hue"              # ascending
    SATURATION = "saturation"  # descending
    LIGHTNESS = "lightness"  # ascending


@dataclass(eq=False, slots=True)
class TreeNode:
    """
    One entry in the implicit group tree.

    ``block`` is None only for the synthetic root. ``end`` holds the
    GroupEnd that closed this node, if one was found.
    """
    block: Optional[Block]
    children: list[TreeNode] = field(default_factory=list)
    end: Optional[GroupEnd] = None

    @property
    def is_group(self) -> bool:
        return isinstance(self.block, GroupStart)


def collation_key(name: str) -> tuple[str, str]:
    """Locale-aware sort key, case-insensitive first, then case-sensitive."""
    return (locale.strxfrm(name.casefold()), locale.strxfrm(name))


# =============================================================================
# Tree construction
# =============================================================================


def build_tree(blocks: Sequence[Block]) -> TreeNode:
    """
    Read a flat block sequence into a tree under a synthetic root.

    Unbalanced input is tolerated: an orphan GroupEnd becomes a leaf of the
    current node, and groups never closed simply have no end marker.
    """
    root = TreeNode(block=None)
    stack = [root]

    for block in blocks:
        parent = stack[-1]
        if isinstance(block, GroupStart):
            node = TreeNode(block=block)
            parent.children.append(node)
            stack.append(node)
        elif isinstance(block, GroupEnd):
            if len(stack) > 1:
                stack.pop().end = block
            else:
                parent.children.append(TreeNode(block=block))
        else:
            parent.children.append(TreeNode(block=block))

    return root


def flatten(root: TreeNode) -> list[Block]:
    """Write a tree back as a flat sequence (node, children, end marker)."""
    result: list[Block] = []

    def visit(node: TreeNode) -> None:
        if node is not root:
            result.append(node.block)
        for child in node.children:
            visit(child)
        if node.end is not None:
            result.append(node.end)

    visit(root)
    return result


# =============================================================================
# Sorting
# =============================================================================


def _entry_key(criterion: SortCriterion, engine: ColorEngine) -> Callable[[Block], tuple]:
    """Sort key for a non-group block under ``criterion``."""
    if criterion is SortCriterion.NAME:
        return lambda block: collation_key(getattr(block, "name", "") or "")

    def hsl(block: Block) -> tuple[float, float, float]:
        if isinstance(block, Color):
            return engine.to_hsl(block)
        return (0.0, 0.0, 0.0)

    if criterion is SortCriterion.HUE:
        return lambda block: (hsl(block)[0],)
    if criterion is SortCriterion.SATURATION:
        return lambda block: (-hsl(block)[1],)
    return lambda block: (hsl(block)[2],)


def sort_tree(root: TreeNode, criterion: SortCriterion, engine: ColorEngine) -> None:
    """Sort every node's children in place, deepest groups first."""
    entry_key = _entry_key(criterion, engine)

    def node_key(node: TreeNode) -> tuple:
        if node.is_group:
            return (0, collation_key(node.block.name or ""))
        return (1, entry_key(node.block))

    def visit(node: TreeNode) -> None:
        for child in node.children:
            if child.children:
                visit(child)
        # list.sort is stable: ties keep document order
        node.children.sort(key=node_key)

    visit(root)


def sort_hierarchically(
    blocks: Sequence[Block],
    criterion: Union[SortCriterion, str] = SortCriterion.NAME,
    engine: Optional[ColorEngine] = None,
) -> list[Block]:
    """
    Sort a block sequence without breaking group nesting.

    Args:
        blocks: Flat block sequence (need not be balanced)
        criterion: SortCriterion or its value ("name", "hue",
            "saturation", "lightness")
        engine: Engine used to resolve display colors for color criteria
            (a default engine with no reference table if omitted)

    Returns:
        New list holding the same block objects in sorted order

    Raises:
        ValueError: Unknown criterion string
    """
    criterion = SortCriterion(criterion)
    if engine is None:
        engine = ColorEngine()

    root = build_tree(blocks)
    sort_tree(root, criterion, engine)
    return flatten(root)

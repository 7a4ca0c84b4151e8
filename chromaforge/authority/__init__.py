# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""Name-keyed reference colors that override computed display colors."""

from chromaforge.authority.reference import (
    DEFAULT_TOLERANCE,
    AuthorityTable,
    ReferenceEntry,
    normalize_name,
)

__all__ = [
    "AuthorityTable",
    "ReferenceEntry",
    "DEFAULT_TOLERANCE",
    "normalize_name",
]

# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Exporters for swatch documents.

Exporters only read the document; display colors come from the engine.
"""

from chromaforge.export.css import css_variable_name, to_css_variables
from chromaforge.export.text import channel_text, summarize, to_json, to_summary_text

__all__ = [
    "to_css_variables",
    "css_variable_name",
    "channel_text",
    "to_json",
    "summarize",
    "to_summary_text",
]

# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Exception and warning types.

Fatal problems raise a ``ChromaForgeError`` subclass. Recoverable decode
problems are reported through :mod:`warnings` so decoding can continue.
"""

from __future__ import annotations


class ChromaForgeError(Exception):
    """Base class for all ChromaForge errors."""


class FormatError(ChromaForgeError, ValueError):
    """The buffer is not a valid swatch exchange document (bad signature or truncated)."""


class ConversionServiceUnavailable(ChromaForgeError):
    """The device color transform cannot serve a request."""


class ReferenceDataError(ChromaForgeError, ValueError):
    """Reference table data is malformed."""


class ChromaForgeWarning(UserWarning):
    """Base class for non-fatal decode diagnostics."""


class UnknownBlockType(ChromaForgeWarning):
    """A block with an unrecognized type code was skipped."""


class UnsupportedModel(ChromaForgeWarning):
    """A color block declared a model tag with no known channel layout."""

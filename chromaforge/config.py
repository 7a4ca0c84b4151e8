# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Engine configuration.

Environment variables:
    CHROMAFORGE_CMYK_PROFILE   ICC profile for device CMYK (e.g. CoatedFOGRA39.icc)
    CHROMAFORGE_SRGB_PROFILE   ICC profile for sRGB (built-in sRGB when unset)
    CHROMAFORGE_REFERENCES     JSON reference table
    CHROMAFORGE_TOLERANCE      Authority match tolerance per channel (default 0.01)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from chromaforge.authority import DEFAULT_TOLERANCE, AuthorityTable
from chromaforge.convert.engine import ColorEngine
from chromaforge.convert.icc import IccCmykTransform

logger = logging.getLogger(__name__)


ENV_CMYK_PROFILE = "CHROMAFORGE_CMYK_PROFILE"
ENV_SRGB_PROFILE = "CHROMAFORGE_SRGB_PROFILE"
ENV_REFERENCES = "CHROMAFORGE_REFERENCES"
ENV_TOLERANCE = "CHROMAFORGE_TOLERANCE"


def _path(value: Optional[str]) -> Optional[Path]:
    if value is None or not value.strip():
        return None
    return Path(value.strip()).expanduser()


@dataclass(frozen=True)
class EngineConfig:
    """Where the engine's external data comes from."""

    # CMYK device profile; None means analytic CMYK only
    cmyk_profile: Optional[Path] = None

    # Destination profile; None means Pillow's built-in sRGB
    srgb_profile: Optional[Path] = None

    # Reference table JSON; None means no authority overrides
    reference_table: Optional[Path] = None

    # Per normalized channel, strict
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        if not 0.0 < self.tolerance <= 1.0:
            raise ValueError(f"Tolerance must be in (0, 1], got {self.tolerance}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
        """Build a config from environment variables (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        tolerance = env.get(ENV_TOLERANCE)
        try:
            tol = float(tolerance) if tolerance else DEFAULT_TOLERANCE
        except ValueError:
            raise ValueError(f"{ENV_TOLERANCE} must be a number, got {tolerance!r}") from None
        return cls(
            cmyk_profile=_path(env.get(ENV_CMYK_PROFILE)),
            srgb_profile=_path(env.get(ENV_SRGB_PROFILE)),
            reference_table=_path(env.get(ENV_REFERENCES)),
            tolerance=tol,
        )


def build_engine(config: Optional[EngineConfig] = None, *, load_profiles: bool = True) -> ColorEngine:
    """
    Construct a ColorEngine from ``config``.

    The reference table is loaded immediately (errors propagate). The ICC
    transform is created when a CMYK profile is configured and, if
    ``load_profiles`` is true, loaded synchronously; a profile that fails
    to load only costs ICC accuracy. With ``load_profiles=False`` the
    caller loads it later, e.g. ``await engine.device_transform.load_async()``.
    """
    if config is None:
        config = EngineConfig.from_env()

    if config.reference_table is not None:
        authority = AuthorityTable.from_json(config.reference_table, tolerance=config.tolerance)
    else:
        authority = AuthorityTable(tolerance=config.tolerance)

    transform = None
    if config.cmyk_profile is not None:
        transform = IccCmykTransform(config.cmyk_profile, config.srgb_profile)
        if load_profiles:
            transform.load()
    else:
        logger.debug("[Config] No CMYK profile configured; using analytic CMYK")

    return ColorEngine(authority=authority, device_transform=transform)
